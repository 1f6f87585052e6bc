"""Typed errors raised by the scoring engine and record sources."""

from __future__ import annotations

from typing import Any


class InvalidEnumValue(ValueError):
    """An enum-typed field held a value outside its vocabulary."""

    def __init__(self, field: str, value: Any):
        self.field = field
        self.value = value
        super().__init__(f"Invalid value for '{field}': {value!r}")


class UnknownRollupError(KeyError):
    """Requested rollup id is not registered in the metric library."""

    def __init__(self, rollup_id: str):
        self.rollup_id = rollup_id
        super().__init__(rollup_id)

    def __str__(self) -> str:
        return f"Rollup '{self.rollup_id}' is not registered"


class RecordSourceError(RuntimeError):
    """The record source could not return rows for a table."""

    def __init__(self, table: str, reason: str):
        self.table = table
        self.reason = reason
        super().__init__(f"Failed to fetch '{table}': {reason}")


class UnknownDomainError(KeyError):
    """No rollups are registered for the requested dashboard domain."""

    def __init__(self, domain: str):
        self.domain = domain
        super().__init__(domain)

    def __str__(self) -> str:
        return f"No rollups registered for domain '{self.domain}'"
