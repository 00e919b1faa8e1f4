"""Exception types raised by the roll estimation core."""

from __future__ import annotations

from typing import Optional


class RollCoreError(Exception):
    """Base class for every error raised by ``roll_core``."""


class InvalidTargetError(RollCoreError, ValueError):
    """Raised when an observed amount cannot be read as a finite number."""

    def __init__(self, value: object, kind: Optional[str] = None) -> None:
        self.value = value
        self.kind = kind
        where = f" for substat '{kind}'" if kind is not None else ""
        super().__init__(f"Cannot interpret {value!r} as a numeric target{where}")


class UnknownAttributeKindError(RollCoreError, KeyError):
    """Raised when a substat kind is missing from one of the lookup tables."""

    def __init__(self, kind: str, table: str) -> None:
        self.kind = kind
        self.table = table
        super().__init__(kind, table)

    def __str__(self) -> str:
        return f"Unknown substat '{self.kind}' (missing from {self.table} table)"


class ConfigError(RollCoreError, ValueError):
    """Raised when a roll configuration document is malformed."""


class SearchCancelledError(RollCoreError):
    """Raised when a combination search is stopped through its cancellation hook."""
