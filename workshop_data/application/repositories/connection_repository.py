from workshop_data.application.interfaces import QueryFilter, Row, StoreResult
from workshop_data.application.repositories.base import EntityRepository, parse_timestamp
from workshop_data.domain.entities import Connection, EntityType, RelationshipType


class ConnectionRepository(EntityRepository[Connection]):
    """Repository for the ``client_instruments`` join table."""

    entity_type = EntityType.CONNECTIONS

    def _to_entity(self, row: Row) -> Connection:
        display_order = row.get("display_order")
        return Connection(
            id=str(row["id"]),
            client_id=row.get("client_id"),
            instrument_id=row.get("instrument_id"),
            relationship_type=RelationshipType(row["relationship_type"]),
            notes=row.get("notes"),
            display_order=int(display_order) if display_order is not None else None,
            created_at=parse_timestamp(row.get("created_at")),
        )

    async def fetch_for_client(self, client_id: str) -> StoreResult[list[Connection]]:
        return await self.fetch_all(filters=(QueryFilter("client_id", client_id),))

    async def fetch_for_instrument(self, instrument_id: str) -> StoreResult[list[Connection]]:
        return await self.fetch_all(filters=(QueryFilter("instrument_id", instrument_id),))
