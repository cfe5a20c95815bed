"""Abstract remote row-store interface (port) and its value types.

The store is an asynchronous, table-scoped CRUD backend (hosted Postgres via
PostgREST, or a local database). Every operation returns a ``StoreResult``;
failures are carried in ``error`` rather than raised.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeVar

T = TypeVar("T")

Row = dict[str, Any]

FilterOperator = Literal[
    "eq", "neq", "gt", "gte", "lt", "lte", "like", "ilike", "in", "is",
]


@dataclass(frozen=True)
class ErrorInfo:
    """Structured failure description.

    ``code`` is provider-specific (PostgREST / Postgres codes, or one of the
    adapter codes such as ``TIMEOUT``); callers only test for presence.
    """

    message: str
    code: str | None = None
    details: str | None = None
    hint: str | None = None

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


@dataclass
class StoreResult(Generic[T]):
    """Uniform ``{data, error, count}`` result of a remote store call."""

    data: T | None = None
    error: ErrorInfo | None = None
    count: int | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class QueryFilter:
    column: str
    value: Any
    operator: FilterOperator = "eq"


@dataclass(frozen=True)
class SortSpec:
    column: str
    ascending: bool = True


@dataclass(frozen=True)
class Pagination:
    offset: int = 0
    limit: int | None = None


class RemoteStore(ABC):
    """Port for remote persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def fetch(
        self,
        table: str,
        filters: tuple[QueryFilter, ...] = (),
        sort: SortSpec | None = None,
        pagination: Pagination | None = None,
    ) -> StoreResult[list[Row]]:
        """Select rows from ``table``; ``count`` holds the total match count when known."""
        ...

    @abstractmethod
    async def insert(self, table: str, row: Row) -> StoreResult[Row]:
        """Insert a row and return it with server-assigned columns."""
        ...

    @abstractmethod
    async def update(self, table: str, row_id: str, partial_row: Row) -> StoreResult[Row]:
        """Apply a partial update to the row with ``id == row_id``."""
        ...

    @abstractmethod
    async def delete(self, table: str, row_id: str) -> StoreResult[None]:
        """Delete the row with ``id == row_id``."""
        ...

    async def close(self) -> None:
        """Release transport resources. Adapters without any may keep the default."""
        return None
