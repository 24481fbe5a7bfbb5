"""Domain entities."""

from roleguard.domain.entities.grant import Decoration, PermissionGrant, RoleGrant
from roleguard.domain.entities.permission import Permission
from roleguard.domain.entities.role import Role
from roleguard.domain.entities.subject import GrantHolder, Subject

__all__ = [
    "Decoration",
    "GrantHolder",
    "Permission",
    "PermissionGrant",
    "Role",
    "RoleGrant",
    "Subject",
]
