"""Structured JSON logging shared by the tool and agent layers.

Call sites attach structured fields with ``extra={"extra": {...}}``; the
formatter lifts them to the top level of the JSON line.
"""

from __future__ import annotations

import logging
import sys

from pythonjsonlogger import jsonlogger

ROOT_LOGGER = "coffee"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


class JsonFormatter(jsonlogger.JsonFormatter):
    def add_fields(self, log_record, record, message_dict) -> None:
        super().add_fields(log_record, record, message_dict)
        extra = log_record.pop("extra", None)
        if isinstance(extra, dict):
            log_record.update(extra)


def build_formatter() -> logging.Formatter:
    return JsonFormatter(LOG_FORMAT)


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger(ROOT_LOGGER)
    if not any(getattr(h, "_coffee_json", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(build_formatter())
        handler._coffee_json = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    root.setLevel(level.upper())
    root.propagate = False


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
