from __future__ import annotations

from typing import TYPE_CHECKING, Any

from noteboard.core.errors import BackendError
from noteboard.core.repositories.record_store import RecordStore, Row
from noteboard.utils.logging import get_logger

logger = get_logger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from supabase import Client

    from noteboard.core.repositories.record_store import FilterValue


class SupabaseRecordStore(RecordStore):
    """Supabase implementation of the RecordStore.

    Uses Supabase's PostgREST client. Each collection maps to a table with
    camelCase columns matching the record models. Conditional writes add the
    `match` fields as extra `eq` filters, so authorization and the write happen
    in a single statement.
    """

    def __init__(self, client: Client) -> None:
        self._client: Client = client

    async def list(
        self, collection: str, *, filters: Mapping[str, FilterValue] | None = None
    ) -> list[Row]:
        def _query():
            q = self._client.table(collection).select("*")
            for field, value in (filters or {}).items():
                q = q.in_(field, value) if isinstance(value, list) else q.eq(field, value)
            return q.execute()

        resp = await self._run(_query)
        return list(resp.data or [])

    async def get(self, collection: str, record_id: str) -> Row | None:
        resp = await self._run(
            lambda: self._client.table(collection)
            .select("*")
            .eq("id", record_id)
            .limit(1)
            .execute()
        )
        items = resp.data or []
        if not items:
            return None
        return items[0]

    async def create(self, collection: str, row: Row) -> Row:
        resp = await self._run(
            lambda: self._client.table(collection)
            .insert(row)
            .execute()
        )
        return self._first(resp.data) or row

    async def update(
        self,
        collection: str,
        record_id: str,
        changes: Row,
        *,
        match: Mapping[str, str] | None = None,
    ) -> Row | None:
        def _query():
            q = self._client.table(collection).update(changes).eq("id", record_id)
            for field, value in (match or {}).items():
                q = q.eq(field, value)
            return q.execute()

        resp = await self._run(_query)
        items = resp.data or []
        if not items:
            return None
        return items[0]

    async def delete(
        self,
        collection: str,
        record_id: str,
        *,
        match: Mapping[str, str] | None = None,
    ) -> bool:
        def _query():
            q = self._client.table(collection).delete().eq("id", record_id)
            for field, value in (match or {}).items():
                q = q.eq(field, value)
            return q.execute()

        resp = await self._run(_query)
        items = resp.data or []
        return len(items) > 0

    @staticmethod
    async def _run(func: Callable[[], Any]) -> Any:
        import asyncio
        try:
            return await asyncio.to_thread(func)
        except Exception as err:  # postgrest raises APIError, transport errors vary
            logger.warning(
                "Supabase request failed",
                extra={"error_type": type(err).__name__, "error_summary": str(err)[:100]},
            )
            raise BackendError("Record store request failed") from err

    @staticmethod
    def _first(data: Any) -> dict[str, Any]:
        if isinstance(data, list) and data:
            return data[0]
        if isinstance(data, dict):
            return data
        return {}
