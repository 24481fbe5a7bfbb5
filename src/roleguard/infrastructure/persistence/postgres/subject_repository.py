"""PostgreSQL subject repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from roleguard.domain.entities import Subject
from roleguard.infrastructure.persistence.postgres.grant_codec import (
    decode_permission_grants,
    decode_role_grants,
    encode_permission_grants,
    encode_role_grants,
    to_jsonb,
)

_UPSERT = (
    "INSERT INTO subject (id, kind, roles, permissions, attributes) "
    "VALUES (%s, %s, %s, %s, %s) "
    "ON CONFLICT (id) DO UPDATE SET kind = EXCLUDED.kind, roles = EXCLUDED.roles, "
    "permissions = EXCLUDED.permissions, attributes = EXCLUDED.attributes"
)


class PostgresSubjectRepository:
    """Subject repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, subject_id: UUID) -> Subject | None:
        """Get subject by id."""
        cur = await self._conn.execute(
            "SELECT id, kind, roles, permissions, attributes FROM subject WHERE id = %s",
            (subject_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return Subject(
            id=r[0],
            kind=r[1],
            roles=decode_role_grants(r[2]),
            permissions=decode_permission_grants(r[3]),
            attributes=r[4] or {},
        )

    async def create(self, subject: Subject) -> Subject:
        """Create subject."""
        return await self.save(subject)

    async def save(self, subject: Subject) -> Subject:
        """Insert or update subject with its grants."""
        await self._conn.execute(
            _UPSERT,
            (
                subject.id,
                subject.kind,
                encode_role_grants(subject.roles),
                encode_permission_grants(subject.permissions),
                to_jsonb(subject.attributes),
            ),
        )
        return subject
