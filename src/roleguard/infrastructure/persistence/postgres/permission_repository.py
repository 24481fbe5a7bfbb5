"""PostgreSQL permission repository implementation."""

from collections.abc import Iterable
from uuid import UUID, uuid4

from psycopg import AsyncConnection

from roleguard.application.dto.permission_spec import PermissionSpec
from roleguard.domain.entities import Permission
from roleguard.domain.exceptions import ValidationError

_COLUMNS = "id, name, display_name, description"


def _row_to_permission(r: tuple) -> Permission:
    return Permission(id=r[0], name=r[1], display_name=r[2], description=r[3])


class PostgresPermissionRepository:
    """Permission repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, permission_id: UUID) -> Permission | None:
        """Get permission by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission WHERE id = %s", (permission_id,)
        )
        r = await cur.fetchone()
        return _row_to_permission(r) if r else None

    async def get_by_name(self, name: str) -> Permission | None:
        """Get permission by name."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission WHERE name = %s", (name,)
        )
        r = await cur.fetchone()
        return _row_to_permission(r) if r else None

    async def get_many(self, permission_ids: Iterable[UUID]) -> list[Permission]:
        """Get all permissions with the given ids; unknown ids are skipped."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission WHERE id = ANY(%s)",
            (list(permission_ids),),
        )
        return [_row_to_permission(r) for r in await cur.fetchall()]

    async def find_or_create(self, specs: list[PermissionSpec]) -> list[Permission]:
        """Find each permission by name, creating it when missing.

        An existing permission whose stored fields disagree with the spec
        raises ValidationError.
        """
        result: list[Permission] = []
        for spec in specs:
            existing = await self.get_by_name(spec.name)
            if existing is not None:
                conflicts = spec.conflicts(existing)
                if conflicts:
                    raise ValidationError(
                        f"Permission {spec.name} already exists with different {', '.join(conflicts)}"
                    )
                result.append(existing)
                continue
            permission = Permission(
                id=uuid4(),
                name=spec.name,
                display_name=spec.display_name,
                description=spec.description,
            )
            await self._conn.execute(
                f"INSERT INTO permission ({_COLUMNS}) VALUES (%s, %s, %s, %s)",
                (permission.id, permission.name, permission.display_name, permission.description),
            )
            result.append(permission)
        return result
