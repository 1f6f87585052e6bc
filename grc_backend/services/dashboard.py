"""Dashboard service -- fetches rows through an injected source and runs rollups.

The source is passed in rather than created here, so the same service runs
against Supabase in production and an in-memory source in tests.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional

# Ensure all rollups are registered on import
import grc_backend.metric_library.rollups  # noqa: F401
from grc_backend.config.settings import Settings
from grc_backend.engine.normalize import to_utc, utc_now
from grc_backend.errors import UnknownDomainError, UnknownRollupError
from grc_backend.metric_library.registry import (
    RollupDefinition,
    get_domain_rollups,
    get_rollup,
)
from grc_backend.sources.base import RecordSource

logger = logging.getLogger(__name__)


class DashboardService:
    """Stateless apart from its source and settings; safe to share."""

    def __init__(self, source: RecordSource, settings: Optional[Settings] = None):
        self._source = source
        self._settings = settings or Settings()

    async def load_records(self, definition: RollupDefinition) -> list[Any]:
        """Fetch a rollup's table and build typed records.

        Malformed enum values propagate as InvalidEnumValue.
        """
        rows = await self._source.fetch_rows(definition.table)
        return [definition.record_type.from_row(row) for row in rows]

    async def compute(self, rollup_id: str, now: Optional[datetime] = None) -> Any:
        definition = get_rollup(rollup_id)
        if definition is None:
            raise UnknownRollupError(rollup_id)

        now = to_utc(now) if now is not None else utc_now()
        records = await self.load_records(definition)
        logger.info(f"Computing rollup '{rollup_id}' over {len(records)} records")
        return definition.rollup_fn(records, now=now, settings=self._settings)

    async def compute_domain(
        self, domain: str, now: Optional[datetime] = None
    ) -> dict[str, Any]:
        """Compute every rollup registered for ``domain`` ("esg" or "resilience")."""
        definitions = get_domain_rollups(domain)
        if not definitions:
            raise UnknownDomainError(domain)
        now = to_utc(now) if now is not None else utc_now()
        return {d.id: await self.compute(d.id, now=now) for d in definitions}

    async def aclose(self) -> None:
        await self._source.aclose()
