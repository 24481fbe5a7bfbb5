"""In-memory snapshot of the roles and permissions reachable from a subject."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from uuid import UUID

from roleguard.domain.entities import GrantHolder, Permission, Role
from roleguard.domain.exceptions import UnknownPermissionError, UnknownRoleError


@dataclass
class RoleGraph:
    """Adjacency data for one resolution call, loaded in batches from storage."""

    roles: dict[UUID, Role] = field(default_factory=dict)
    permissions: dict[UUID, Permission] = field(default_factory=dict)

    def add_roles(self, roles: Iterable[Role]) -> None:
        for role in roles:
            self.roles[role.id] = role

    def add_permissions(self, permissions: Iterable[Permission]) -> None:
        for permission in permissions:
            self.permissions[permission.id] = permission

    def role(self, role_id: UUID) -> Role:
        try:
            return self.roles[role_id]
        except KeyError:
            raise UnknownRoleError(role_id) from None

    def permission(self, permission_id: UUID) -> Permission:
        try:
            return self.permissions[permission_id]
        except KeyError:
            raise UnknownPermissionError(permission_id) from None

    def missing_role_ids(self, holders: Iterable[GrantHolder]) -> set[UUID]:
        """Role ids referenced by ``holders`` that are not loaded yet."""
        return {g.role_id for h in holders for g in h.roles if g.role_id not in self.roles}

    def missing_permission_ids(self, holders: Iterable[GrantHolder]) -> set[UUID]:
        """Permission ids referenced by ``holders`` that are not loaded yet."""
        return {
            g.permission_id
            for h in holders
            for g in h.permissions
            if g.permission_id not in self.permissions
        }
