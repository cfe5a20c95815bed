"""Unit tests for in-memory search and query helpers."""

from workshop_data.application.services import apply_query, search_all
from workshop_data.application.services.search import resolve_sort_column
from workshop_data.domain.entities import (
    Client,
    Connection,
    EntityType,
    Instrument,
    InstrumentStatus,
    RelationshipType,
)

CLIENTS = (
    Client(id="c1", first_name="Ada", last_name="Lovelace", email="ada@example.com"),
    Client(id="c2", first_name="ben", last_name="Hill", client_number="CL-0042"),
    Client(id="c3", first_name="Carla", last_name=None),
)
INSTRUMENTS = (
    Instrument(id="i1", maker="Hill", type="Bow", price=1200.0),
    Instrument(id="i2", maker="Amati", type="Violin", price=None, status=InstrumentStatus.SOLD),
    Instrument(id="i3", maker="bergonzi", type="Violin", price=90000.0),
)
CONNECTIONS = (
    Connection(
        id="x1",
        client_id="c1",
        instrument_id="i2",
        relationship_type=RelationshipType.SOLD,
        notes="Paid in full",
        display_order=2,
    ),
    Connection(
        id="x2",
        client_id="c2",
        instrument_id="i1",
        relationship_type=RelationshipType.INTERESTED,
    ),
)


# ── search_all ──


def test_search_matches_any_field_case_insensitively():
    result = search_all(CLIENTS, INSTRUMENTS, CONNECTIONS, "HILL")

    assert [c.id for c in result.clients] == ["c2"]
    assert [i.id for i in result.instruments] == ["i1"]
    assert result.connections == ()
    assert result.total == 2


def test_search_matches_enum_values():
    result = search_all(CLIENTS, INSTRUMENTS, CONNECTIONS, "interest")

    assert [c.id for c in result.connections] == ["x2"]


def test_empty_query_returns_everything():
    result = search_all(CLIENTS, INSTRUMENTS, CONNECTIONS, "")

    assert result.clients == CLIENTS
    assert result.instruments == INSTRUMENTS
    assert result.connections == CONNECTIONS


def test_search_skips_missing_fields():
    result = search_all(CLIENTS, (), (), "0042")

    assert [c.id for c in result.clients] == ["c2"]


# ── apply_query ──


def test_sort_is_case_insensitive():
    ordered = apply_query(EntityType.CLIENTS, CLIENTS, sort_by="first_name")

    assert [c.id for c in ordered] == ["c1", "c2", "c3"]


def test_none_values_sort_last_in_both_directions():
    ascending = apply_query(EntityType.INSTRUMENTS, INSTRUMENTS, sort_by="price")
    descending = apply_query(EntityType.INSTRUMENTS, INSTRUMENTS, sort_by="price", direction="desc")

    assert [i.id for i in ascending] == ["i1", "i3", "i2"]
    assert [i.id for i in descending] == ["i3", "i1", "i2"]


def test_unknown_sort_column_falls_back_to_created_at():
    assert resolve_sort_column(EntityType.CLIENTS, "password") == "created_at"
    assert resolve_sort_column(EntityType.CONNECTIONS, "display_order") == "display_order"


def test_filters_match_enum_and_ignore_blank_values():
    sold = apply_query(
        EntityType.INSTRUMENTS,
        INSTRUMENTS,
        filters={"status": InstrumentStatus.SOLD, "type": ""},
    )
    violins = apply_query(EntityType.INSTRUMENTS, INSTRUMENTS, filters={"type": "Violin", "maker": None})

    assert [i.id for i in sold] == ["i2"]
    assert [i.id for i in violins] == ["i2", "i3"]


def test_query_combines_search_filter_and_sort():
    result = apply_query(
        EntityType.INSTRUMENTS,
        INSTRUMENTS,
        search_term="violin",
        sort_by="maker",
        direction="desc",
        filters={"status": "Available"},
    )

    assert [i.id for i in result] == ["i3"]


def test_without_sort_original_order_is_kept():
    result = apply_query(EntityType.CONNECTIONS, CONNECTIONS, search_term="")

    assert [c.id for c in result] == ["x1", "x2"]
