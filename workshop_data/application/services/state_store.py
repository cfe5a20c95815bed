"""Unified State Store — single in-memory holder of the cached entity collections.

Every mutation replaces the ``DataState`` snapshot; a changed collection is a
new tuple, so consumers can detect changes by identity. The store does no
I/O: repositories fetch, the facade decides, the store records.
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any

from workshop_data.application.interfaces import ErrorInfo
from workshop_data.domain.entities import EntityType
from workshop_data.domain.exceptions import UnknownEntityTypeError

logger = logging.getLogger(__name__)

Listener = Callable[["DataState"], None]

_COLLECTION_FIELDS = {
    EntityType.CLIENTS: "clients",
    EntityType.INSTRUMENTS: "instruments",
    EntityType.CONNECTIONS: "connections",
}


def entity_key(entity_type: EntityType | str) -> EntityType:
    """Normalise ``"clients"`` / ``EntityType.CLIENTS`` to the enum member."""
    try:
        return EntityType(entity_type)
    except ValueError:
        raise UnknownEntityTypeError(entity_type) from None


def _per_type(value: Any) -> Mapping[EntityType, Any]:
    return MappingProxyType({entity_type: value for entity_type in EntityType})


def _with(mapping: Mapping[EntityType, Any], key: EntityType, value: Any) -> Mapping[EntityType, Any]:
    updated = dict(mapping)
    updated[key] = value
    return MappingProxyType(updated)


@dataclass(frozen=True)
class DataState:
    """Read-only snapshot of everything the data layer caches."""

    clients: tuple = ()
    instruments: tuple = ()
    connections: tuple = ()
    loading: Mapping[EntityType, bool] = field(default_factory=lambda: _per_type(False))
    submitting: Mapping[EntityType, bool] = field(default_factory=lambda: _per_type(False))
    last_updated: Mapping[EntityType, datetime | None] = field(
        default_factory=lambda: _per_type(None)
    )
    errors: Mapping[EntityType, ErrorInfo | None] = field(
        default_factory=lambda: _per_type(None)
    )

    def records(self, entity_type: EntityType | str) -> tuple:
        return getattr(self, _COLLECTION_FIELDS[entity_key(entity_type)])


class UnifiedStateStore:
    """Observable single-writer container for ``DataState``.

    Listeners registered with ``subscribe`` are called with the new snapshot
    after each mutation that actually changes the state.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None):
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._state = DataState()
        self._listeners: list[Listener] = []

    def get_state(self) -> DataState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ── Collections ─────────────────────────────────────────────────

    def set_entities(self, entity_type: EntityType | str, records: Iterable[Any]) -> None:
        key = entity_key(entity_type)
        state = self._state
        self._commit(
            replace(
                state,
                **{_COLLECTION_FIELDS[key]: tuple(records)},
                last_updated=_with(state.last_updated, key, self._clock()),
                loading=_with(state.loading, key, False),
                errors=_with(state.errors, key, None),
            )
        )

    def upsert_entity(self, entity_type: EntityType | str, record: Any) -> None:
        """Replace the record with the same id, or prepend it when new."""
        key = entity_key(entity_type)
        current = self._state.records(key)
        if any(existing.id == record.id for existing in current):
            updated = tuple(record if existing.id == record.id else existing for existing in current)
        else:
            updated = (record, *current)
        self._commit(replace(self._state, **{_COLLECTION_FIELDS[key]: updated}))

    def remove_entity(self, entity_type: EntityType | str, record_id: str) -> None:
        key = entity_key(entity_type)
        current = self._state.records(key)
        updated = tuple(existing for existing in current if existing.id != record_id)
        if len(updated) == len(current):
            return
        self._commit(replace(self._state, **{_COLLECTION_FIELDS[key]: updated}))

    # ── Flags ───────────────────────────────────────────────────────

    def set_loading(self, entity_type: EntityType | str, loading: bool) -> None:
        key = entity_key(entity_type)
        if self._state.loading[key] == loading:
            return
        self._commit(replace(self._state, loading=_with(self._state.loading, key, loading)))

    def set_submitting(self, entity_type: EntityType | str, submitting: bool) -> None:
        key = entity_key(entity_type)
        if self._state.submitting[key] == submitting:
            return
        self._commit(
            replace(self._state, submitting=_with(self._state.submitting, key, submitting))
        )

    def set_error(self, entity_type: EntityType | str, error: ErrorInfo | None) -> None:
        key = entity_key(entity_type)
        if self._state.errors[key] == error:
            return
        self._commit(replace(self._state, errors=_with(self._state.errors, key, error)))

    # ── Cache control ───────────────────────────────────────────────

    def invalidate(self, entity_type: EntityType | str) -> None:
        """Mark a collection stale. Data stays in place."""
        key = entity_key(entity_type)
        if self._state.last_updated[key] is None:
            return
        self._commit(
            replace(self._state, last_updated=_with(self._state.last_updated, key, None))
        )

    def reset(self) -> None:
        self._commit(DataState())

    def _commit(self, state: DataState) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("State listener %r failed", listener)
