"""Unified Data Facade — the read/write surface consumers use.

Layers fetch deduplication, a per-type stale-response guard, relationship
derivation, search and cache control on top of the ``UnifiedStateStore``.

Fetch state per entity type::

    EMPTY --ensure_loaded--> LOADING --success--> POPULATED --invalidate--> INVALIDATED
    LOADING --error--> EMPTY (or INVALIDATED when stale data is kept)

All remote failures are returned as values (``FetchResult`` /
``MutationResult``); only programming errors raise.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Generic, TypeVar

from workshop_data.application.interfaces import ErrorInfo, StoreResult
from workshop_data.application.repositories import (
    ClientRepository,
    ConnectionRepository,
    EntityRepository,
    InstrumentRepository,
)
from workshop_data.application.schemas import (
    ClientCreate,
    ClientUpdate,
    ConnectionCreate,
    ConnectionUpdate,
    InstrumentCreate,
    InstrumentUpdate,
)
from workshop_data.application.services.relationships import RelationshipProjector
from workshop_data.application.services.search import (
    SearchResult,
    SortDirection,
    apply_query,
    search_all,
)
from workshop_data.application.services.state_store import (
    DataState,
    Listener,
    UnifiedStateStore,
    entity_key,
)
from workshop_data.domain.entities import (
    Client,
    Connection,
    EntityType,
    Instrument,
    RelationshipType,
    RelationshipView,
)

logger = logging.getLogger(__name__)

E = TypeVar("E")


class CacheStatus(str, Enum):
    EMPTY = "empty"
    LOADING = "loading"
    POPULATED = "populated"
    INVALIDATED = "invalidated"


@dataclass(frozen=True)
class FetchResult:
    """Outcome of a fetch. ``stale`` marks a response superseded by a newer request."""

    data: tuple | None = None
    error: ErrorInfo | None = None
    stale: bool = False

    @property
    def success(self) -> bool:
        return self.error is None and not self.stale


@dataclass(frozen=True)
class MutationResult(Generic[E]):
    data: E | None = None
    error: ErrorInfo | None = None

    @property
    def success(self) -> bool:
        return self.error is None


class UnifiedDataFacade:
    """Cached, deduplicated access to clients, instruments and connections."""

    def __init__(
        self,
        store: UnifiedStateStore,
        clients: ClientRepository,
        instruments: InstrumentRepository,
        connections: ConnectionRepository,
    ):
        self._store = store
        self._repositories: dict[EntityType, EntityRepository] = {
            EntityType.CLIENTS: clients,
            EntityType.INSTRUMENTS: instruments,
            EntityType.CONNECTIONS: connections,
        }
        self._request_ids: dict[EntityType, int] = {key: 0 for key in EntityType}
        self._inflight: dict[EntityType, asyncio.Task[FetchResult]] = {}
        self._submissions: dict[EntityType, int] = {key: 0 for key in EntityType}
        self._generation = 0
        self._projector = RelationshipProjector()

    # ── Read accessors ──────────────────────────────────────────────

    @property
    def state(self) -> DataState:
        return self._store.get_state()

    @property
    def clients(self) -> tuple[Client, ...]:
        return self.state.clients

    @property
    def instruments(self) -> tuple[Instrument, ...]:
        return self.state.instruments

    @property
    def connections(self) -> tuple[Connection, ...]:
        return self.state.connections

    @property
    def loading(self) -> Mapping[EntityType, bool]:
        return self.state.loading

    @property
    def submitting(self) -> Mapping[EntityType, bool]:
        return self.state.submitting

    @property
    def last_updated(self) -> Mapping[EntityType, datetime | None]:
        return self.state.last_updated

    @property
    def errors(self) -> Mapping[EntityType, ErrorInfo | None]:
        return self.state.errors

    @property
    def loading_any(self) -> bool:
        return any(self.state.loading.values())

    @property
    def submitting_any(self) -> bool:
        return any(self.state.submitting.values())

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self._store.subscribe(listener)

    def status(self, entity_type: EntityType | str) -> CacheStatus:
        key = entity_key(entity_type)
        state = self.state
        if state.loading[key]:
            return CacheStatus.LOADING
        if state.last_updated[key] is not None:
            return CacheStatus.POPULATED
        if state.records(key):
            return CacheStatus.INVALIDATED
        return CacheStatus.EMPTY

    def needs_fetch(self, entity_type: EntityType | str) -> bool:
        """True when no fetch is running and the collection is empty or stale."""
        key = entity_key(entity_type)
        state = self.state
        if state.loading[key]:
            return False
        return len(state.records(key)) == 0 or state.last_updated[key] is None

    # ── Fetching ────────────────────────────────────────────────────

    async def ensure_loaded(self, entity_type: EntityType | str) -> FetchResult:
        """Fetch ``entity_type`` only if needed; joins a fetch already in flight."""
        key = entity_key(entity_type)
        task = self._trigger(key)
        if task is None:
            return FetchResult(data=self.state.records(key))
        return await self._settle(key, task)

    async def ensure_loaded_many(
        self, entity_types: Iterable[EntityType | str]
    ) -> dict[EntityType, FetchResult]:
        """Batch form of ``ensure_loaded``; missing types are fetched concurrently."""
        keys = list(dict.fromkeys(entity_key(entity_type) for entity_type in entity_types))
        tasks = {key: self._trigger(key) for key in keys}
        pending = {key: task for key, task in tasks.items() if task is not None}

        settled = await asyncio.gather(*(self._settle(key, task) for key, task in pending.items()))
        results = dict(zip(pending, settled))
        for key in keys:
            if key not in results:
                results[key] = FetchResult(data=self.state.records(key))
        return results

    async def load_all(self) -> dict[EntityType, FetchResult]:
        return await self.ensure_loaded_many(EntityType)

    async def load_dashboard(self) -> dict[EntityType, FetchResult]:
        return await self.ensure_loaded_many((EntityType.INSTRUMENTS, EntityType.CONNECTIONS))

    async def load_connection_form(self) -> dict[EntityType, FetchResult]:
        """Load the client and instrument pickers.

        Connections are loaded alongside only when a picker list is missing.
        """
        keys = [EntityType.CLIENTS, EntityType.INSTRUMENTS]
        if any(self.needs_fetch(key) for key in keys):
            keys.append(EntityType.CONNECTIONS)
        return await self.ensure_loaded_many(keys)

    async def fetch(self, entity_type: EntityType | str) -> FetchResult:
        """Always issue a new request; an older in-flight one becomes stale."""
        return await self._start_fetch(entity_key(entity_type))

    async def fetch_clients(self) -> FetchResult:
        return await self.fetch(EntityType.CLIENTS)

    async def fetch_instruments(self) -> FetchResult:
        return await self.fetch(EntityType.INSTRUMENTS)

    async def fetch_connections(self) -> FetchResult:
        return await self.fetch(EntityType.CONNECTIONS)

    def _trigger(self, key: EntityType) -> asyncio.Task[FetchResult] | None:
        # Synchronous check-and-set: the loading flag flips before any await
        if self.needs_fetch(key):
            return self._start_fetch(key)
        if self.state.loading[key]:
            return self._inflight.get(key)
        return None

    def _start_fetch(self, key: EntityType) -> asyncio.Task[FetchResult]:
        self._request_ids[key] += 1
        request_id = self._request_ids[key]
        self._store.set_loading(key, True)

        task = asyncio.get_running_loop().create_task(self._run_fetch(key, request_id))
        self._inflight[key] = task
        task.add_done_callback(lambda done: self._forget(key, done))
        return task

    async def _settle(self, key: EntityType, task: asyncio.Task[FetchResult]) -> FetchResult:
        """Await a joined fetch; if it was superseded, follow the newer request instead."""
        result = await task
        while result.stale:
            newer = self._inflight.get(key)
            if newer is None or newer is task:
                state = self.state
                return FetchResult(data=state.records(key), error=state.errors[key])
            task = newer
            result = await task
        return result

    def _forget(self, key: EntityType, task: asyncio.Task) -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]

    def _is_latest(self, key: EntityType, request_id: int) -> bool:
        return self._request_ids[key] == request_id

    async def _run_fetch(self, key: EntityType, request_id: int) -> FetchResult:
        repository = self._repositories[key]
        logger.debug("Fetching %s (request %d)", key.value, request_id)
        try:
            result = await repository.fetch_all()
        except BaseException:
            if self._is_latest(key, request_id):
                self._store.set_loading(key, False)
            raise

        if not self._is_latest(key, request_id):
            logger.debug(
                "Discarding stale %s response (request %d, latest %d)",
                key.value,
                request_id,
                self._request_ids[key],
            )
            return FetchResult(stale=True)

        if result.error is not None:
            logger.warning("Fetch %s failed: %s", key.value, result.error)
            self._store.set_error(key, result.error)
            self._store.set_loading(key, False)
            return FetchResult(error=result.error)

        self._store.set_entities(key, result.data or [])
        records = self.state.records(key)
        logger.debug("Fetched %d %s", len(records), key.value)
        return FetchResult(data=records)

    # ── Mutations ───────────────────────────────────────────────────

    async def _mutate(
        self,
        key: EntityType,
        operation: str,
        call: Callable[[], Awaitable[StoreResult[Any]]],
        on_success: Callable[[Any], None],
    ) -> MutationResult:
        generation = self._generation
        self._submissions[key] += 1
        self._store.set_submitting(key, True)
        try:
            result = await call()
        finally:
            if generation == self._generation:
                self._submissions[key] -= 1
                self._store.set_submitting(key, self._submissions[key] > 0)

        if result.error is not None:
            logger.warning("%s %s failed: %s", operation, key.value, result.error)
            return MutationResult(error=result.error)

        if generation != self._generation:
            # The store was reset while the write was in flight
            logger.debug("%s %s confirmed after reset; not cached", operation, key.value)
            return MutationResult(data=result.data)

        on_success(result.data)
        return MutationResult(data=result.data)

    def _upsert(self, key: EntityType, invalidates_connections: bool) -> Callable[[Any], None]:
        def apply(record: Any) -> None:
            self._store.upsert_entity(key, record)
            if invalidates_connections:
                self._store.invalidate(EntityType.CONNECTIONS)

        return apply

    def _remove(
        self, key: EntityType, record_id: str, invalidates_connections: bool
    ) -> Callable[[Any], None]:
        def apply(_: Any) -> None:
            self._store.remove_entity(key, record_id)
            if invalidates_connections:
                self._store.invalidate(EntityType.CONNECTIONS)

        return apply

    async def _create(
        self, key: EntityType, data: Any, invalidates_connections: bool = False
    ) -> MutationResult:
        repository = self._repositories[key]
        return await self._mutate(
            key,
            "Create",
            lambda: repository.create(data),
            self._upsert(key, invalidates_connections),
        )

    async def _update(
        self, key: EntityType, record_id: str, data: Any, invalidates_connections: bool = False
    ) -> MutationResult:
        repository = self._repositories[key]
        return await self._mutate(
            key,
            "Update",
            lambda: repository.update(record_id, data),
            self._upsert(key, invalidates_connections),
        )

    async def _delete(
        self, key: EntityType, record_id: str, invalidates_connections: bool = False
    ) -> MutationResult[bool]:
        repository = self._repositories[key]
        return await self._mutate(
            key,
            "Delete",
            lambda: repository.delete(record_id),
            self._remove(key, record_id, invalidates_connections),
        )

    # Clients and instruments: connection rows may change server-side with them
    async def create_client(self, data: ClientCreate) -> MutationResult[Client]:
        return await self._create(EntityType.CLIENTS, data, invalidates_connections=True)

    async def update_client(self, client_id: str, data: ClientUpdate) -> MutationResult[Client]:
        return await self._update(EntityType.CLIENTS, client_id, data, invalidates_connections=True)

    async def delete_client(self, client_id: str) -> MutationResult[bool]:
        return await self._delete(EntityType.CLIENTS, client_id, invalidates_connections=True)

    async def create_instrument(self, data: InstrumentCreate) -> MutationResult[Instrument]:
        return await self._create(EntityType.INSTRUMENTS, data, invalidates_connections=True)

    async def update_instrument(
        self, instrument_id: str, data: InstrumentUpdate
    ) -> MutationResult[Instrument]:
        return await self._update(
            EntityType.INSTRUMENTS, instrument_id, data, invalidates_connections=True
        )

    async def delete_instrument(self, instrument_id: str) -> MutationResult[bool]:
        return await self._delete(
            EntityType.INSTRUMENTS, instrument_id, invalidates_connections=True
        )

    async def create_connection(self, data: ConnectionCreate) -> MutationResult[Connection]:
        return await self._create(EntityType.CONNECTIONS, data)

    async def update_connection(
        self, connection_id: str, data: ConnectionUpdate
    ) -> MutationResult[Connection]:
        return await self._update(EntityType.CONNECTIONS, connection_id, data)

    async def delete_connection(self, connection_id: str) -> MutationResult[bool]:
        return await self._delete(EntityType.CONNECTIONS, connection_id)

    async def link_client_instrument(
        self,
        client_id: str,
        instrument_id: str,
        relationship_type: RelationshipType | str,
        notes: str | None = None,
    ) -> MutationResult[Connection]:
        """Connection-form shortcut; blank notes are stored as null."""
        return await self.create_connection(
            ConnectionCreate(
                client_id=client_id,
                instrument_id=instrument_id,
                relationship_type=relationship_type,
                notes=notes,
            )
        )

    async def relink_connection(
        self,
        connection_id: str,
        relationship_type: RelationshipType | str,
        notes: str | None = None,
    ) -> MutationResult[Connection]:
        return await self.update_connection(
            connection_id,
            ConnectionUpdate(relationship_type=relationship_type, notes=notes),
        )

    # ── Derived views ───────────────────────────────────────────────

    @property
    def client_relationships(self) -> tuple[RelationshipView, ...]:
        state = self.state
        return self._projector.project(state.clients, state.instruments, state.connections)

    def relationships_for_client(self, client_id: str) -> list[RelationshipView]:
        return _by_display_order(
            view for view in self.client_relationships if view.client.id == client_id
        )

    def relationships_for_instrument(self, instrument_id: str) -> list[RelationshipView]:
        return _by_display_order(
            view for view in self.client_relationships if view.instrument.id == instrument_id
        )

    def search_all(self, query: str) -> SearchResult:
        state = self.state
        return search_all(state.clients, state.instruments, state.connections, query)

    def query(
        self,
        entity_type: EntityType | str,
        *,
        search_term: str | None = None,
        sort_by: str | None = None,
        direction: SortDirection = "asc",
        filters: Mapping[str, Any] | None = None,
    ) -> list:
        key = entity_key(entity_type)
        return apply_query(
            key,
            self.state.records(key),
            search_term=search_term,
            sort_by=sort_by,
            direction=direction,
            filters=filters,
        )

    # ── Cache control ───────────────────────────────────────────────

    def invalidate(self, entity_type: EntityType | str) -> None:
        self._store.invalidate(entity_key(entity_type))

    def invalidate_all(self) -> None:
        for key in EntityType:
            self._store.invalidate(key)

    def reset(self) -> None:
        """Hard-clear all state.

        Fetch responses and mutation confirmations for requests issued before
        now are not applied to the store.
        """
        self._generation += 1
        self._submissions = {key: 0 for key in EntityType}
        for key in EntityType:
            self._request_ids[key] += 1
        self._inflight.clear()
        self._projector.clear()
        self._store.reset()


def _by_display_order(views: Iterable[RelationshipView]) -> list[RelationshipView]:
    return sorted(
        views,
        key=lambda view: (
            view.connection.display_order is None,
            view.connection.display_order or 0,
        ),
    )
