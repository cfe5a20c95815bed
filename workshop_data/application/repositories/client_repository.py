from workshop_data.application.interfaces import Row
from workshop_data.application.repositories.base import EntityRepository, parse_timestamp
from workshop_data.domain.entities import Client, ClientStatus, ClientType, EntityType


class ClientRepository(EntityRepository[Client]):
    """Repository for the ``clients`` table."""

    entity_type = EntityType.CLIENTS

    def _to_entity(self, row: Row) -> Client:
        return Client(
            id=str(row["id"]),
            first_name=row.get("first_name"),
            last_name=row.get("last_name"),
            email=row.get("email") or None,
            contact_number=row.get("contact_number"),
            tags=list(row.get("tags") or []),
            interest=row.get("interest"),
            note=row.get("note"),
            client_number=row.get("client_number"),
            type=ClientType(row["type"]) if row.get("type") else None,
            status=ClientStatus(row["status"]) if row.get("status") else None,
            address=row.get("address"),
            created_at=parse_timestamp(row.get("created_at")),
        )
