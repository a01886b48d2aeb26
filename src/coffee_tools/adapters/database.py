"""Relational storage adapter.

Encapsulates the SQL behind each lookup. Every query is a single parameterized
read; rows come back as mappings so tools can read columns by name.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Mapping

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine

from ..settings import get_settings

Row = Mapping[str, Any]


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    settings = get_settings()
    return create_engine(
        settings.database_url,
        echo=settings.db_echo,
        pool_pre_ping=settings.db_pool_pre_ping,
    )


def fetch_one(engine: Engine, sql: str, params: dict[str, Any] | None = None) -> Row | None:
    with engine.connect() as conn:
        return conn.execute(text(sql), params or {}).mappings().first()


def fetch_all(engine: Engine, sql: str, params: dict[str, Any] | None = None) -> list[Row]:
    with engine.connect() as conn:
        return list(conn.execute(text(sql), params or {}).mappings().all())


def get_brewing_method(engine: Engine, name: str) -> Row | None:
    return fetch_one(engine, "SELECT * FROM brewing_methods WHERE name = :name", {"name": name})


def get_brewing_ratio(engine: Engine, strength: str) -> Row | None:
    return fetch_one(
        engine, "SELECT ratio FROM brewing_ratios WHERE strength = :strength", {"strength": strength}
    )


def get_shipping_region(engine: Engine, name: str) -> Row | None:
    return fetch_one(engine, "SELECT * FROM shipping_regions WHERE name = :name", {"name": name})


def list_store_locations(engine: Engine, city: str) -> list[Row]:
    return fetch_all(engine, "SELECT * FROM store_locations WHERE city = :city", {"city": city})


def list_club_benefits(engine: Engine) -> list[Row]:
    return fetch_all(engine, "SELECT benefit FROM coffee_club_benefits")


def get_support_category(engine: Engine, name: str) -> Row | None:
    return fetch_one(engine, "SELECT * FROM support_categories WHERE name = :name", {"name": name})
