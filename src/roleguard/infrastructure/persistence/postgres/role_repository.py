"""PostgreSQL role repository implementation."""

from collections.abc import Iterable
from uuid import UUID

from psycopg import AsyncConnection

from roleguard.domain.entities import Role
from roleguard.infrastructure.persistence.postgres.grant_codec import (
    decode_permission_grants,
    decode_role_grants,
    encode_permission_grants,
    encode_role_grants,
)

_COLUMNS = "id, name, display_name, description, roles, permissions"


def _row_to_role(r: tuple) -> Role:
    return Role(
        id=r[0],
        name=r[1],
        display_name=r[2],
        description=r[3],
        roles=decode_role_grants(r[4]),
        permissions=decode_permission_grants(r[5]),
    )


class PostgresRoleRepository:
    """Role repository implementation. Grant lists are stored as JSONB."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, role_id: UUID) -> Role | None:
        """Get role by id."""
        cur = await self._conn.execute(f"SELECT {_COLUMNS} FROM role WHERE id = %s", (role_id,))
        r = await cur.fetchone()
        return _row_to_role(r) if r else None

    async def get_by_name(self, name: str) -> Role | None:
        """Get role by name."""
        cur = await self._conn.execute(f"SELECT {_COLUMNS} FROM role WHERE name = %s", (name,))
        r = await cur.fetchone()
        return _row_to_role(r) if r else None

    async def get_many(self, role_ids: Iterable[UUID]) -> list[Role]:
        """Get all roles with the given ids; unknown ids are skipped."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM role WHERE id = ANY(%s)",
            (list(role_ids),),
        )
        return [_row_to_role(r) for r in await cur.fetchall()]

    async def list_all(self) -> list[Role]:
        """List all roles."""
        cur = await self._conn.execute(f"SELECT {_COLUMNS} FROM role ORDER BY name")
        return [_row_to_role(r) for r in await cur.fetchall()]

    async def create(self, role: Role) -> Role:
        """Create role."""
        await self._conn.execute(
            f"INSERT INTO role ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s)",
            (
                role.id,
                role.name,
                role.display_name,
                role.description,
                encode_role_grants(role.roles),
                encode_permission_grants(role.permissions),
            ),
        )
        return role

    async def save(self, role: Role) -> Role:
        """Insert or update role with its grants."""
        await self._conn.execute(
            f"INSERT INTO role ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s) "
            "ON CONFLICT (id) DO UPDATE SET name = EXCLUDED.name, "
            "display_name = EXCLUDED.display_name, description = EXCLUDED.description, "
            "roles = EXCLUDED.roles, permissions = EXCLUDED.permissions",
            (
                role.id,
                role.name,
                role.display_name,
                role.description,
                encode_role_grants(role.roles),
                encode_permission_grants(role.permissions),
            ),
        )
        return role

    async def delete(self, role_id: UUID) -> None:
        """Delete role."""
        await self._conn.execute("DELETE FROM role WHERE id = %s", (role_id,))
