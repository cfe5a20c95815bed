"""In-memory search and query helpers over cached records."""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal

from workshop_data.domain.entities import Client, Connection, EntityType, Instrument

SortDirection = Literal["asc", "desc"]

SEARCH_FIELDS: Mapping[EntityType, tuple[str, ...]] = {
    EntityType.CLIENTS: ("first_name", "last_name", "email", "client_number"),
    EntityType.INSTRUMENTS: ("maker", "type", "serial_number"),
    EntityType.CONNECTIONS: ("notes", "relationship_type"),
}

# First entry is the fallback when an unknown column is requested
ALLOWED_SORT_COLUMNS: Mapping[EntityType, tuple[str, ...]] = {
    EntityType.CLIENTS: (
        "created_at",
        "first_name",
        "last_name",
        "email",
        "contact_number",
        "client_number",
    ),
    EntityType.INSTRUMENTS: ("created_at", "type", "maker", "serial_number", "status", "price"),
    EntityType.CONNECTIONS: ("created_at", "relationship_type", "display_order"),
}


@dataclass(frozen=True)
class SearchResult:
    clients: tuple[Client, ...]
    instruments: tuple[Instrument, ...]
    connections: tuple[Connection, ...]

    @property
    def total(self) -> int:
        return len(self.clients) + len(self.instruments) + len(self.connections)


def _field_value(record: Any, name: str) -> Any:
    value = getattr(record, name, None)
    if isinstance(value, Enum):
        return value.value
    return value


def matches_text(record: Any, query: str, fields: Sequence[str]) -> bool:
    """Case-insensitive substring match of ``query`` against any of ``fields``."""
    if not query:
        return True
    needle = query.lower()
    for name in fields:
        value = _field_value(record, name)
        if value is not None and needle in str(value).lower():
            return True
    return False


def search_records(entity_type: EntityType, records: Sequence[Any], query: str) -> tuple:
    fields = SEARCH_FIELDS[entity_type]
    return tuple(record for record in records if matches_text(record, query, fields))


def search_all(
    clients: Sequence[Client],
    instruments: Sequence[Instrument],
    connections: Sequence[Connection],
    query: str,
) -> SearchResult:
    """Search each collection independently; an empty query returns everything."""
    return SearchResult(
        clients=search_records(EntityType.CLIENTS, clients, query),
        instruments=search_records(EntityType.INSTRUMENTS, instruments, query),
        connections=search_records(EntityType.CONNECTIONS, connections, query),
    )


def resolve_sort_column(entity_type: EntityType, column: str | None) -> str:
    allowed = ALLOWED_SORT_COLUMNS[entity_type]
    if column in allowed:
        return column
    return allowed[0]


def _matches_filter(record: Any, filters: Mapping[str, Any] | None) -> bool:
    if not filters:
        return True
    for name, expected in filters.items():
        if expected is None or expected == "":
            continue
        if isinstance(expected, Enum):
            expected = expected.value
        if _field_value(record, name) != expected:
            return False
    return True


def _sort_key(column: str) -> Callable[[Any], Any]:
    def key(record: Any) -> Any:
        value = _field_value(record, column)
        if isinstance(value, str):
            return value.casefold()
        return value

    return key


def apply_query(
    entity_type: EntityType,
    records: Sequence[Any],
    *,
    search_term: str | None = None,
    sort_by: str | None = None,
    direction: SortDirection = "asc",
    filters: Mapping[str, Any] | None = None,
) -> list:
    """Filter by field equality, search the type's text fields, then sort.

    Records whose sort value is ``None`` always come last, whichever the
    direction. Sorting is skipped when ``sort_by`` is not given.
    """
    fields = SEARCH_FIELDS[entity_type]
    selected = [
        record
        for record in records
        if _matches_filter(record, filters) and matches_text(record, search_term or "", fields)
    ]
    if sort_by is None:
        return selected

    column = resolve_sort_column(entity_type, sort_by)
    key = _sort_key(column)
    present = [record for record in selected if key(record) is not None]
    missing = [record for record in selected if key(record) is None]
    present.sort(key=key, reverse=(direction == "desc"))
    return present + missing
