"""Unit tests for relationship derivation and its memoisation."""

from workshop_data.application.services import RelationshipProjector, derive_relationships
from workshop_data.domain.entities import Client, Connection, Instrument, RelationshipType


def _connection(connection_id: str, client_id: str, instrument_id: str) -> Connection:
    return Connection(
        id=connection_id,
        client_id=client_id,
        instrument_id=instrument_id,
        relationship_type=RelationshipType.INTERESTED,
    )


CLIENTS = (Client(id="c1", first_name="Ada"), Client(id="c2", first_name="Ben"))
INSTRUMENTS = (Instrument(id="i1", maker="Gagliano"),)


def test_joins_each_connection_to_both_ends():
    views = derive_relationships(CLIENTS, INSTRUMENTS, (_connection("x1", "c2", "i1"),))

    assert len(views) == 1
    assert views[0].id == "x1"
    assert views[0].client.first_name == "Ben"
    assert views[0].instrument.maker == "Gagliano"
    assert views[0].relationship_type is RelationshipType.INTERESTED


def test_dangling_references_are_dropped():
    connections = (
        _connection("x1", "c1", "i1"),
        _connection("x2", "c-gone", "i1"),
        _connection("x3", "c1", "i-gone"),
        _connection("x4", None, "i1"),
    )

    views = derive_relationships(CLIENTS, INSTRUMENTS, connections)

    assert [view.id for view in views] == ["x1"]


def test_connection_order_is_preserved():
    connections = (_connection("x2", "c2", "i1"), _connection("x1", "c1", "i1"))

    views = derive_relationships(CLIENTS, INSTRUMENTS, connections)

    assert [view.id for view in views] == ["x2", "x1"]


def test_projector_reuses_result_for_identical_inputs():
    projector = RelationshipProjector()
    connections = (_connection("x1", "c1", "i1"),)

    first = projector.project(CLIENTS, INSTRUMENTS, connections)
    second = projector.project(CLIENTS, INSTRUMENTS, connections)

    assert second is first
    assert projector.computations == 1


def test_projector_recomputes_when_any_input_is_replaced():
    projector = RelationshipProjector()
    connections = (_connection("x1", "c1", "i1"),)
    projector.project(CLIENTS, INSTRUMENTS, connections)

    projector.project(list(CLIENTS), INSTRUMENTS, connections)
    projector.project(CLIENTS, INSTRUMENTS, connections)
    projector.project(CLIENTS, INSTRUMENTS, (*connections, _connection("x2", "c2", "i1")))

    # Equal content in a new object still counts as a change
    assert projector.computations == 4


def test_projector_clear_forces_recompute():
    projector = RelationshipProjector()
    connections = (_connection("x1", "c1", "i1"),)
    projector.project(CLIENTS, INSTRUMENTS, connections)

    projector.clear()
    projector.project(CLIENTS, INSTRUMENTS, connections)

    assert projector.computations == 2
