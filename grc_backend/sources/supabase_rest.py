"""Supabase source -- reads table rows through the hosted database's REST API."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from grc_backend.config.settings import Settings
from grc_backend.errors import RecordSourceError

from .base import RecordSource

logger = logging.getLogger(__name__)


class SupabaseRestSource(RecordSource):
    """Fetches rows from the Supabase PostgREST endpoint.

    Configured once from Settings at startup and reused across requests.
    """

    REST_PATH = "/rest/v1"

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._settings = settings or Settings()
        self._base_url = self._settings.supabase_url.rstrip("/") + self.REST_PATH
        self._client = client or httpx.AsyncClient(timeout=self._settings.request_timeout)

    def _headers(self) -> dict[str, str]:
        key = self._settings.supabase_key
        return {
            "apikey": key,
            "Authorization": f"Bearer {key}",
            "Accept": "application/json",
        }

    async def health_check(self) -> bool:
        try:
            resp = await self._client.get(f"{self._base_url}/", headers=self._headers())
            return resp.status_code == 200
        except Exception as e:
            logger.error(f"Supabase health check failed: {e}")
            return False

    async def fetch_rows(self, table: str) -> list[dict[str, Any]]:
        if not self._settings.supabase_url:
            raise RecordSourceError(table, "supabase_url is not configured")

        try:
            resp = await self._client.get(
                f"{self._base_url}/{table}",
                params={"select": "*"},
                headers=self._headers(),
            )
        except httpx.HTTPError as e:
            logger.error(f"Supabase request for '{table}' failed: {e}")
            raise RecordSourceError(table, str(e)) from e

        if resp.status_code != 200:
            logger.error(f"Supabase returned {resp.status_code} for '{table}'")
            raise RecordSourceError(table, f"HTTP {resp.status_code}: {resp.text[:200]}")

        data = resp.json()
        if not isinstance(data, list):
            raise RecordSourceError(table, "expected a JSON array of rows")
        logger.info(f"Fetched {len(data)} rows from '{table}'")
        return data

    async def aclose(self) -> None:
        await self._client.aclose()
