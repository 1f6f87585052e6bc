from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class RecordSource(ABC):
    """Abstract base for anything that can hand back table rows."""

    @abstractmethod
    async def fetch_rows(self, table: str) -> list[dict[str, Any]]:
        """Return every row of ``table`` as a plain dict."""
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """Verify the backing store is reachable and authenticated."""
        ...

    async def aclose(self) -> None:
        """Release any connections held by the source."""
        return None
