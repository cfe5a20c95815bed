"""RemoteStore adapter backed by SQLAlchemy async Core statements.

Serves the same table contract as the hosted PostgREST endpoint, against a
local Postgres (asyncpg) or SQLite (aiosqlite) database. Row ids and
``created_at`` are assigned by column defaults.
"""

import logging
from typing import Any

from sqlalchemy import Table, delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from workshop_data.application.interfaces import (
    ErrorInfo,
    Pagination,
    QueryFilter,
    RemoteStore,
    Row,
    SortSpec,
    StoreResult,
)
from workshop_data.infrastructure.database import Base, create_session_factory

logger = logging.getLogger(__name__)


class _QueryError(Exception):
    def __init__(self, code: str, message: str):
        self.code = code
        super().__init__(message)


def _condition(table: Table, query_filter: QueryFilter) -> Any:
    column = table.c.get(query_filter.column)
    if column is None:
        raise _QueryError(
            "UNKNOWN_COLUMN",
            f"Column '{query_filter.column}' does not exist on '{table.name}'",
        )
    value = query_filter.value
    match query_filter.operator:
        case "eq":
            return column == value
        case "neq":
            return column != value
        case "gt":
            return column > value
        case "gte":
            return column >= value
        case "lt":
            return column < value
        case "lte":
            return column <= value
        case "like":
            return column.like(value)
        case "ilike":
            return column.ilike(value)
        case "in":
            return column.in_(list(value))
        case "is":
            return column.is_(value)
    raise _QueryError("UNKNOWN_OPERATOR", f"Unsupported operator '{query_filter.operator}'")


def _database_error(exc: SQLAlchemyError, code: str) -> ErrorInfo:
    original = getattr(exc, "orig", None)
    return ErrorInfo(
        message=str(original or exc).splitlines()[0],
        code=code,
        details=type(exc).__name__,
    )


class SQLAlchemyRemoteStore(RemoteStore):
    """Implements the RemoteStore port with one short transaction per call."""

    def __init__(self, engine: AsyncEngine, metadata=Base.metadata):
        self._engine = engine
        self._metadata = metadata
        self._session_factory = create_session_factory(engine)

    async def create_schema(self) -> None:
        async with self._engine.begin() as conn:
            await conn.run_sync(self._metadata.create_all)

    async def close(self) -> None:
        await self._engine.dispose()

    def _table(self, name: str) -> Table:
        table = self._metadata.tables.get(name)
        if table is None:
            raise _QueryError("UNKNOWN_TABLE", f"Table '{name}' does not exist")
        return table

    async def fetch(
        self,
        table: str,
        filters: tuple[QueryFilter, ...] = (),
        sort: SortSpec | None = None,
        pagination: Pagination | None = None,
    ) -> StoreResult[list[Row]]:
        try:
            target = self._table(table)
            conditions = [_condition(target, query_filter) for query_filter in filters]

            stmt = select(target).where(*conditions)
            count_stmt = select(func.count()).select_from(target).where(*conditions)
            if sort is not None:
                column = target.c.get(sort.column)
                if column is None:
                    raise _QueryError("UNKNOWN_COLUMN", f"Cannot order by '{sort.column}'")
                stmt = stmt.order_by(column.asc() if sort.ascending else column.desc())
            if pagination is not None:
                stmt = stmt.offset(pagination.offset)
                if pagination.limit is not None:
                    stmt = stmt.limit(pagination.limit)

            async with self._session_factory() as session:
                rows = (await session.execute(stmt)).mappings().all()
                count = await session.scalar(count_stmt)
        except _QueryError as exc:
            return StoreResult(error=ErrorInfo(message=str(exc), code=exc.code))
        except SQLAlchemyError as exc:
            logger.warning("Fetch from %s failed: %s", table, exc)
            return StoreResult(error=_database_error(exc, "DATABASE_ERROR"))

        return StoreResult(data=[dict(row) for row in rows], count=count)

    async def insert(self, table: str, row: Row) -> StoreResult[Row]:
        try:
            target = self._table(table)
            stmt = insert(target).values(**row).returning(*target.c)
            async with self._session_factory() as session:
                async with session.begin():
                    created = (await session.execute(stmt)).mappings().one()
        except _QueryError as exc:
            return StoreResult(error=ErrorInfo(message=str(exc), code=exc.code))
        except IntegrityError as exc:
            return StoreResult(error=_database_error(exc, "CONSTRAINT_VIOLATION"))
        except SQLAlchemyError as exc:
            logger.warning("Insert into %s failed: %s", table, exc)
            return StoreResult(error=_database_error(exc, "DATABASE_ERROR"))

        return StoreResult(data=dict(created))

    async def update(self, table: str, row_id: str, partial_row: Row) -> StoreResult[Row]:
        try:
            target = self._table(table)
            async with self._session_factory() as session:
                async with session.begin():
                    if partial_row:
                        stmt = (
                            update(target)
                            .where(target.c.id == row_id)
                            .values(**partial_row)
                            .returning(*target.c)
                        )
                    else:
                        stmt = select(target).where(target.c.id == row_id)
                    updated = (await session.execute(stmt)).mappings().one_or_none()
        except _QueryError as exc:
            return StoreResult(error=ErrorInfo(message=str(exc), code=exc.code))
        except IntegrityError as exc:
            return StoreResult(error=_database_error(exc, "CONSTRAINT_VIOLATION"))
        except SQLAlchemyError as exc:
            logger.warning("Update of %s/%s failed: %s", table, row_id, exc)
            return StoreResult(error=_database_error(exc, "DATABASE_ERROR"))

        if updated is None:
            return StoreResult(
                error=ErrorInfo(message=f"No row in '{table}' with id '{row_id}'", code="NOT_FOUND")
            )
        return StoreResult(data=dict(updated))

    async def delete(self, table: str, row_id: str) -> StoreResult[None]:
        try:
            target = self._table(table)
            async with self._session_factory() as session:
                async with session.begin():
                    await session.execute(delete(target).where(target.c.id == row_id))
        except _QueryError as exc:
            return StoreResult(error=ErrorInfo(message=str(exc), code=exc.code))
        except IntegrityError as exc:
            return StoreResult(error=_database_error(exc, "CONSTRAINT_VIOLATION"))
        except SQLAlchemyError as exc:
            logger.warning("Delete of %s/%s failed: %s", table, row_id, exc)
            return StoreResult(error=_database_error(exc, "DATABASE_ERROR"))

        return StoreResult()
