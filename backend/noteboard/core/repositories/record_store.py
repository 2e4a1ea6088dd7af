from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

Row = dict[str, Any]
FilterValue = str | list[str]


class RecordStore(ABC):
    """Abstract access to the generic JSON CRUD collections.

    Rows are plain dicts in the store's camelCase shape. Implementations perform
    network I/O and therefore expose async methods. `filters` values are matched
    for equality; a list value matches any of its items.
    """

    @abstractmethod
    async def list(
        self, collection: str, *, filters: Mapping[str, FilterValue] | None = None
    ) -> list[Row]:  # pragma: no cover - interface only
        """Return rows of a collection, optionally narrowed by `filters`."""

    @abstractmethod
    async def get(self, collection: str, record_id: str) -> Row | None:  # pragma: no cover
        """Fetch a row by id or return None if not found."""

    @abstractmethod
    async def create(self, collection: str, row: Row) -> Row:  # pragma: no cover
        """Insert a row and return the stored version."""

    @abstractmethod
    async def update(
        self,
        collection: str,
        record_id: str,
        changes: Row,
        *,
        match: Mapping[str, str] | None = None,
    ) -> Row | None:  # pragma: no cover
        """Apply `changes` to the row with `record_id` whose fields equal `match`.

        Returns the updated row, or None when no row satisfied both conditions.
        """

    @abstractmethod
    async def delete(
        self,
        collection: str,
        record_id: str,
        *,
        match: Mapping[str, str] | None = None,
    ) -> bool:  # pragma: no cover
        """Delete the row with `record_id` whose fields equal `match`.

        Return True if a row was removed, False otherwise.
        """

    async def aclose(self) -> None:
        """Release network resources held by the store."""
        return None

    @staticmethod
    def matches(row: Row, match: Mapping[str, str] | None) -> bool:
        """Check a fetched row against a `match` condition."""
        if not match:
            return True
        return all(str(row.get(field)) == str(value) for field, value in match.items())
