"""Logging entrypoints for the agent server (shared JSON setup)."""

from __future__ import annotations

from coffee_tools.logging import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
