"""Permission checker port - role graph authorization."""

from collections.abc import Sequence
from typing import Protocol
from uuid import UUID

from roleguard.application.dto.can_result import CanResult
from roleguard.domain.entities import GrantHolder, Permission, Role
from roleguard.domain.value_objects import GrantOptions


class PermissionChecker(Protocol):
    """Port for checking what a subject or role is granted."""

    async def can(self, holder: GrantHolder, permission_name: str) -> CanResult: ...

    async def can_all(self, holder: GrantHolder, permission_names: Sequence[str]) -> CanResult: ...

    async def can_any(
        self, holder: GrantHolder, permission_names: Sequence[str], need_all: bool = False
    ) -> CanResult: ...

    async def has_role(
        self,
        holder: GrantHolder,
        role: Role | UUID | str,
        options: GrantOptions = GrantOptions(),
        recursive: bool = True,
    ) -> bool: ...

    async def has_permission(
        self,
        holder: GrantHolder,
        permission: Permission | UUID | str,
        options: GrantOptions = GrantOptions(),
    ) -> bool: ...
