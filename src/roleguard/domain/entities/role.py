"""Role entity for RBAC."""

from dataclasses import dataclass, field
from uuid import UUID

from roleguard.domain.entities.grant import PermissionGrant, RoleGrant


@dataclass
class Role:
    """Role - holds permission grants and may nest other roles."""

    id: UUID
    name: str
    display_name: str | None = None
    description: str | None = None
    roles: list[RoleGrant] = field(default_factory=list)
    permissions: list[PermissionGrant] = field(default_factory=list)
