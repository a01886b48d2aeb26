"""Create the lookup tables and load demo rows.

    coffee-seed-db
    coffee-seed-db --reset

Tables are created when missing. ``--reset`` clears existing rows before
inserting, otherwise tables that already hold rows are left alone. Chicago
has no store rows on purpose.
"""

from __future__ import annotations

import argparse

from sqlalchemy import text
from sqlalchemy.engine import Engine

from .adapters.database import get_engine
from .logging import configure_logging, get_logger

logger = get_logger("seed")

SCHEMA: dict[str, str] = {
    "brewing_methods": """
        CREATE TABLE IF NOT EXISTS brewing_methods (
            name VARCHAR(32) PRIMARY KEY,
            grind_size VARCHAR(64) NOT NULL,
            water_temp VARCHAR(64) NOT NULL,
            brew_time VARCHAR(64) NOT NULL
        )
    """,
    "brewing_ratios": """
        CREATE TABLE IF NOT EXISTS brewing_ratios (
            strength VARCHAR(16) PRIMARY KEY,
            ratio REAL NOT NULL
        )
    """,
    "shipping_regions": """
        CREATE TABLE IF NOT EXISTS shipping_regions (
            name VARCHAR(32) PRIMARY KEY,
            standard_delivery VARCHAR(64) NOT NULL,
            express_delivery VARCHAR(64) NOT NULL,
            cost VARCHAR(128) NOT NULL,
            notes TEXT NOT NULL
        )
    """,
    "coffee_club_benefits": """
        CREATE TABLE IF NOT EXISTS coffee_club_benefits (
            benefit VARCHAR(255) PRIMARY KEY
        )
    """,
    "support_categories": """
        CREATE TABLE IF NOT EXISTS support_categories (
            name VARCHAR(32) PRIMARY KEY,
            timeline VARCHAR(64) NOT NULL
        )
    """,
    "store_locations": """
        CREATE TABLE IF NOT EXISTS store_locations (
            city VARCHAR(64) NOT NULL,
            neighborhood VARCHAR(64) NOT NULL,
            address VARCHAR(255) NOT NULL,
            hours VARCHAR(128) NOT NULL,
            specialties TEXT NOT NULL,
            parking VARCHAR(255) NOT NULL,
            PRIMARY KEY (city, neighborhood)
        )
    """,
}

SEED_ROWS: dict[str, list[dict[str, object]]] = {
    "brewing_methods": [
        {"name": "pourover", "grind_size": "Medium-fine", "water_temp": "92-96°C", "brew_time": "3-4 minutes"},
        {"name": "french-press", "grind_size": "Coarse", "water_temp": "93-96°C", "brew_time": "4 minutes"},
        {"name": "espresso", "grind_size": "Fine", "water_temp": "90-94°C", "brew_time": "25-30 seconds"},
        {"name": "cold-brew", "grind_size": "Extra coarse", "water_temp": "Room temperature", "brew_time": "12-18 hours"},
        {"name": "aeropress", "grind_size": "Medium-fine", "water_temp": "80-85°C", "brew_time": "1-2 minutes"},
        {"name": "moka-pot", "grind_size": "Fine", "water_temp": "Pre-boiled water", "brew_time": "4-5 minutes"},
    ],
    "brewing_ratios": [
        {"strength": "light", "ratio": 17},
        {"strength": "medium", "ratio": 16},
        {"strength": "strong", "ratio": 15},
    ],
    "shipping_regions": [
        {"name": "USA-West", "standard_delivery": "2-3 business days", "express_delivery": "1 business day",
         "cost": "Free on orders over $35, otherwise $5.99", "notes": "Ships from our Portland roastery"},
        {"name": "USA-Central", "standard_delivery": "3-4 business days", "express_delivery": "1-2 business days",
         "cost": "Free on orders over $35, otherwise $5.99", "notes": "Ships from our Chicago roastery"},
        {"name": "USA-East", "standard_delivery": "3-5 business days", "express_delivery": "2 business days",
         "cost": "Free on orders over $35, otherwise $6.99", "notes": "Ships from our New York roastery"},
        {"name": "Canada", "standard_delivery": "5-7 business days", "express_delivery": "2-3 business days",
         "cost": "$12.99", "notes": "Duties and taxes may apply"},
        {"name": "Europe", "standard_delivery": "7-10 business days", "express_delivery": "3-5 business days",
         "cost": "$19.99", "notes": "Customs fees are the responsibility of the recipient"},
        {"name": "Asia", "standard_delivery": "10-14 business days", "express_delivery": "4-6 business days",
         "cost": "$24.99", "notes": "Customs fees are the responsibility of the recipient"},
        {"name": "Australia", "standard_delivery": "10-14 business days", "express_delivery": "4-6 business days",
         "cost": "$24.99", "notes": "Quarantine inspection may add 1-2 days"},
        {"name": "South-America", "standard_delivery": "10-15 business days", "express_delivery": "5-7 business days",
         "cost": "$22.99", "notes": "Customs fees are the responsibility of the recipient"},
        {"name": "Other", "standard_delivery": "14-21 business days", "express_delivery": "7-10 business days",
         "cost": "Calculated at checkout", "notes": "Contact support to confirm availability"},
    ],
    "coffee_club_benefits": [
        {"benefit": "15% off every order"},
        {"benefit": "Free shipping on all subscriptions"},
        {"benefit": "Early access to limited releases"},
        {"benefit": "Monthly tasting notes from our roasters"},
    ],
    "support_categories": [
        {"name": "product", "timeline": "24 hours"},
        {"name": "shipping", "timeline": "12 hours"},
        {"name": "technical", "timeline": "48 hours"},
        {"name": "wholesale", "timeline": "2 business days"},
        {"name": "other", "timeline": "3 business days"},
    ],
    "store_locations": [
        {"city": "San Francisco", "neighborhood": "Mission District", "address": "123 Valencia St",
         "hours": "7am-7pm daily", "specialties": "Single-origin pourover bar", "parking": "Street parking"},
        {"city": "Portland", "neighborhood": "Pearl District", "address": "456 NW 11th Ave",
         "hours": "6am-6pm daily", "specialties": "Roastery tours, cold brew on tap",
         "parking": "Validated garage parking"},
        {"city": "Seattle", "neighborhood": "Capitol Hill", "address": "789 Pike St",
         "hours": "6am-8pm daily", "specialties": "Espresso flights", "parking": "Pay lot behind the store"},
        {"city": "New York", "neighborhood": "Williamsburg", "address": "321 Bedford Ave",
         "hours": "7am-9pm daily", "specialties": "Nitro cold brew, brewing classes",
         "parking": "Street parking, near the L train"},
    ],
}


def create_schema(engine: Engine) -> None:
    with engine.begin() as conn:
        for ddl in SCHEMA.values():
            conn.execute(text(ddl))


def seed(engine: Engine, reset: bool = False) -> int:
    """Insert the demo rows and return how many were written."""
    create_schema(engine)
    written = 0
    with engine.begin() as conn:
        for table, rows in SEED_ROWS.items():
            if reset:
                conn.execute(text(f"DELETE FROM {table}"))
            existing = conn.execute(text(f"SELECT COUNT(*) FROM {table}")).scalar_one()
            if existing:
                logger.info("seed_skipped", extra={"extra": {"table": table, "existing": existing}})
                continue
            columns = list(rows[0])
            insert = text(
                f"INSERT INTO {table} ({', '.join(columns)}) "
                f"VALUES ({', '.join(':' + col for col in columns)})"
            )
            conn.execute(insert, rows)
            written += len(rows)
            logger.info("seed_table", extra={"extra": {"table": table, "rows": len(rows)}})
    return written


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create and seed the coffee lookup tables.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Clear all existing rows before inserting seed rows.",
    )
    args = parser.parse_args(argv)

    configure_logging()
    written = seed(get_engine(), reset=args.reset)
    print(f"Done. Seeded {written} rows.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
