from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx

from noteboard.core.errors import BackendError
from noteboard.core.repositories.record_store import RecordStore, Row
from noteboard.utils.logging import get_logger

logger = get_logger(__name__)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from noteboard.core.repositories.record_store import FilterValue


class RestRecordStore(RecordStore):
    """RecordStore over a json-server style REST API.

    Collections live at `/{collection}`, single rows at `/{collection}/{id}`,
    and query-string parameters filter by field equality (repeated keys OR).
    The API has no conditional writes, so `match` is checked against a fresh
    read right before the write.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def list(
        self, collection: str, *, filters: Mapping[str, FilterValue] | None = None
    ) -> list[Row]:
        params = [
            (field, item)
            for field, value in (filters or {}).items()
            for item in (value if isinstance(value, list) else [value])
        ]
        resp = await self._request("GET", f"/{collection}", params=params)
        data = resp.json()
        return data if isinstance(data, list) else []

    async def get(self, collection: str, record_id: str) -> Row | None:
        resp = await self._request("GET", f"/{collection}/{record_id}", allow_missing=True)
        if resp is None:
            return None
        return resp.json() or None

    async def create(self, collection: str, row: Row) -> Row:
        resp = await self._request("POST", f"/{collection}", json=row)
        return resp.json()

    async def update(
        self,
        collection: str,
        record_id: str,
        changes: Row,
        *,
        match: Mapping[str, str] | None = None,
    ) -> Row | None:
        if match:
            current = await self.get(collection, record_id)
            if current is None or not self.matches(current, match):
                return None
        resp = await self._request(
            "PATCH", f"/{collection}/{record_id}", json=changes, allow_missing=True
        )
        if resp is None:
            return None
        return resp.json()

    async def delete(
        self,
        collection: str,
        record_id: str,
        *,
        match: Mapping[str, str] | None = None,
    ) -> bool:
        if match:
            current = await self.get(collection, record_id)
            if current is None or not self.matches(current, match):
                return False
        resp = await self._request("DELETE", f"/{collection}/{record_id}", allow_missing=True)
        return resp is not None

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self, method: str, url: str, *, allow_missing: bool = False, **kwargs: Any
    ) -> httpx.Response | None:
        try:
            resp = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as err:
            logger.warning(
                "Record store request failed",
                extra={"method": method, "url": url, "error_type": type(err).__name__},
            )
            raise BackendError(f"{method} {url} failed: {err}") from err

        if allow_missing and resp.status_code == httpx.codes.NOT_FOUND:
            return None
        if resp.is_error:
            logger.warning(
                "Record store rejected request",
                extra={"method": method, "url": url, "status": resp.status_code},
            )
            raise BackendError(f"{method} {url} returned {resp.status_code}")
        return resp
