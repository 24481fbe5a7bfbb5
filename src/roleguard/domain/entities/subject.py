"""Subject entity - any record type that holds grants."""

from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from roleguard.domain.entities.grant import PermissionGrant, RoleGrant
from roleguard.domain.entities.role import Role


@dataclass
class Subject:
    """Record of an arbitrary kind (e.g. ``User``) augmented with grants."""

    id: UUID
    kind: str
    roles: list[RoleGrant] = field(default_factory=list)
    permissions: list[PermissionGrant] = field(default_factory=list)
    attributes: dict[str, Any] = field(default_factory=dict)


GrantHolder = Subject | Role
