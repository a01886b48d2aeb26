"""Storage adapters."""

from __future__ import annotations


class RetrievalError(RuntimeError):
    """A lookup row was absent or the query itself failed."""

    def __init__(self, code: str, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
