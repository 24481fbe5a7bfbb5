"""Grant entities - decorated edges from a subject to a role or permission."""

from dataclasses import dataclass
from typing import Any
from uuid import UUID

Decoration = dict[str, Any]


@dataclass
class RoleGrant:
    """Edge from a subject to a role, optionally decorated."""

    role_id: UUID
    settings: Decoration | None = None
    settings_factory: str | None = None


@dataclass
class PermissionGrant:
    """Edge from a subject to a permission, optionally decorated."""

    permission_id: UUID
    settings: Decoration | None = None
    settings_factory: str | None = None
