"""Relationship derivation — joins connections to their client and instrument."""

from collections.abc import Sequence

from workshop_data.domain.entities import Client, Connection, Instrument, RelationshipView


def derive_relationships(
    clients: Sequence[Client],
    instruments: Sequence[Instrument],
    connections: Sequence[Connection],
) -> tuple[RelationshipView, ...]:
    """One view per connection whose client and instrument are both present.

    Connections pointing at a missing id are dropped. Runs in
    O(clients + instruments + connections).
    """
    clients_by_id = {client.id: client for client in clients}
    instruments_by_id = {instrument.id: instrument for instrument in instruments}

    views = []
    for connection in connections:
        client = clients_by_id.get(connection.client_id)
        instrument = instruments_by_id.get(connection.instrument_id)
        if client is None or instrument is None:
            continue
        views.append(RelationshipView(connection=connection, client=client, instrument=instrument))
    return tuple(views)


class RelationshipProjector:
    """Memoises ``derive_relationships`` on the identity of its three inputs.

    Equal-but-new collections trigger a recompute; the same collection
    objects never do.
    """

    def __init__(self) -> None:
        self._inputs: tuple[object, object, object] | None = None
        self._views: tuple[RelationshipView, ...] = ()
        self.computations = 0

    def project(
        self,
        clients: Sequence[Client],
        instruments: Sequence[Instrument],
        connections: Sequence[Connection],
    ) -> tuple[RelationshipView, ...]:
        if self._inputs is not None:
            last_clients, last_instruments, last_connections = self._inputs
            if (
                last_clients is clients
                and last_instruments is instruments
                and last_connections is connections
            ):
                return self._views

        self._views = derive_relationships(clients, instruments, connections)
        self._inputs = (clients, instruments, connections)
        self.computations += 1
        return self._views

    def clear(self) -> None:
        self._inputs = None
        self._views = ()
