"""Generic entity repository over the RemoteStore port.

Each concrete repository names its table and maps rows to a domain
dataclass. All remote and mapping failures come back as ``StoreResult``
values with ``data=None``; nothing is raised to the caller.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from workshop_data.application.interfaces import (
    ErrorInfo,
    Pagination,
    QueryFilter,
    RemoteStore,
    Row,
    SortSpec,
    StoreResult,
)
from workshop_data.domain.entities import EntityType

logger = logging.getLogger(__name__)

E = TypeVar("E")

DEFAULT_SORT = SortSpec(column="created_at", ascending=False)


def parse_timestamp(value: Any) -> datetime | None:
    """Accept a datetime or an ISO-8601 string (PostgREST emits strings)."""
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


class EntityRepository(ABC, Generic[E]):
    """Fetch/create/update/delete for one entity type."""

    entity_type: EntityType

    def __init__(self, store: RemoteStore, default_limit: int | None = None):
        self._store = store
        self._default_limit = default_limit

    @property
    def table(self) -> str:
        return self.entity_type.table

    @abstractmethod
    def _to_entity(self, row: Row) -> E:
        """Map a remote row → domain entity."""
        ...

    def _map_one(self, row: Row | None, operation: str) -> StoreResult[E]:
        if row is None:
            return StoreResult(
                error=ErrorInfo(
                    message=f"{operation} on {self.table} returned no row",
                    code="NO_DATA",
                )
            )
        try:
            return StoreResult(data=self._to_entity(row))
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Could not map %s row %r: %s", self.table, row.get("id"), exc)
            return StoreResult(error=ErrorInfo(message=str(exc), code="INVALID_ROW"))

    async def fetch_all(
        self,
        filters: tuple[QueryFilter, ...] = (),
        sort: SortSpec | None = None,
        pagination: Pagination | None = None,
    ) -> StoreResult[list[E]]:
        if pagination is None and self._default_limit:
            pagination = Pagination(limit=self._default_limit)
        result = await self._store.fetch(
            self.table,
            filters=filters,
            sort=sort or DEFAULT_SORT,
            pagination=pagination,
        )
        if result.error is not None:
            return StoreResult(error=result.error)

        try:
            records = [self._to_entity(row) for row in result.data or []]
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Could not map %s rows: %s", self.table, exc)
            return StoreResult(error=ErrorInfo(message=str(exc), code="INVALID_ROW"))
        return StoreResult(data=records, count=result.count)

    async def create(self, data: BaseModel) -> StoreResult[E]:
        result = await self._store.insert(self.table, data.model_dump(mode="json"))
        if result.error is not None:
            return StoreResult(error=result.error)
        return self._map_one(result.data, "insert")

    async def update(self, record_id: str, data: BaseModel) -> StoreResult[E]:
        partial = data.model_dump(mode="json", exclude_unset=True)
        result = await self._store.update(self.table, record_id, partial)
        if result.error is not None:
            return StoreResult(error=result.error)
        return self._map_one(result.data, "update")

    async def delete(self, record_id: str) -> StoreResult[bool]:
        result = await self._store.delete(self.table, record_id)
        if result.error is not None:
            return StoreResult(error=result.error)
        return StoreResult(data=True)
