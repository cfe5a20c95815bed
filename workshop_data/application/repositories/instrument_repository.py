from workshop_data.application.interfaces import Row
from workshop_data.application.repositories.base import EntityRepository, parse_timestamp
from workshop_data.domain.entities import (
    EntityType,
    Instrument,
    InstrumentStatus,
    split_instrument_type,
)


def _to_float(value: object) -> float | None:
    return None if value is None else float(value)


class InstrumentRepository(EntityRepository[Instrument]):
    """Repository for the ``instruments`` table.

    Combined ``type`` values such as ``"Violin / 4/4"`` are split into
    type and subtype on the way in.
    """

    entity_type = EntityType.INSTRUMENTS

    def _to_entity(self, row: Row) -> Instrument:
        year = row.get("year")
        instrument = Instrument(
            id=str(row["id"]),
            status=InstrumentStatus(row.get("status") or InstrumentStatus.AVAILABLE.value),
            maker=row.get("maker"),
            type=row.get("type"),
            subtype=row.get("subtype"),
            year=int(year) if year is not None else None,
            serial_number=row.get("serial_number"),
            price=_to_float(row.get("price")),
            cost_price=_to_float(row.get("cost_price")),
            consignment_price=_to_float(row.get("consignment_price")),
            ownership=row.get("ownership"),
            certificate=bool(row.get("certificate")),
            certificate_name=row.get("certificate_name"),
            size=row.get("size"),
            weight=row.get("weight"),
            note=row.get("note"),
            created_at=parse_timestamp(row.get("created_at")),
            updated_at=parse_timestamp(row.get("updated_at")),
        )
        return split_instrument_type(instrument)
