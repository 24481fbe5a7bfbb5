"""Permission repository port."""

from collections.abc import Iterable
from typing import Protocol
from uuid import UUID

from roleguard.application.dto.permission_spec import PermissionSpec
from roleguard.domain.entities import Permission


class PermissionRepository(Protocol):
    """Port for permission persistence."""

    async def get_by_id(self, permission_id: UUID) -> Permission | None: ...

    async def get_by_name(self, name: str) -> Permission | None: ...

    async def get_many(self, permission_ids: Iterable[UUID]) -> list[Permission]: ...

    async def find_or_create(self, specs: list[PermissionSpec]) -> list[Permission]:
        """Return one permission per spec, looked up by name and created when missing.

        Specs are processed in order; results keep input order. A stored
        permission whose fields disagree with its spec raises ValidationError.
        """
        ...
