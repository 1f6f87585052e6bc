"""In-memory record source -- rows held in a dict keyed by table name."""

from __future__ import annotations

import copy
from typing import Any, Optional

from .base import RecordSource


class InMemoryRecordSource(RecordSource):
    """Serves rows from memory. Unknown tables are empty."""

    def __init__(self, tables: Optional[dict[str, list[dict[str, Any]]]] = None):
        self._tables: dict[str, list[dict[str, Any]]] = {
            name: list(rows) for name, rows in (tables or {}).items()
        }

    def add_rows(self, table: str, rows: list[dict[str, Any]]) -> None:
        self._tables.setdefault(table, []).extend(rows)

    async def fetch_rows(self, table: str) -> list[dict[str, Any]]:
        # Callers get copies so they cannot edit the stored rows
        return copy.deepcopy(self._tables.get(table, []))

    async def health_check(self) -> bool:
        return True
