"""Bulk bootstrap of roles and their permissions."""

import logging
from collections.abc import Mapping, Sequence
from uuid import uuid4

from roleguard.application.dto.permission_spec import PermissionSpec
from roleguard.application.use_cases.grant.references import ensure_unique_role_name
from roleguard.domain.entities import PermissionGrant, Role
from roleguard.domain.exceptions import ValidationError

logger = logging.getLogger(__name__)

PermissionInput = str | PermissionSpec | Mapping[str, str]


def to_permission_spec(value: PermissionInput) -> PermissionSpec:
    """Accept ``"read@Post"``, a PermissionSpec, or a dict with a ``name`` key."""
    if isinstance(value, PermissionSpec):
        return value
    if isinstance(value, str):
        return PermissionSpec(name=value)
    if "name" not in value:
        raise ValidationError("Permission spec requires a name")
    return PermissionSpec(
        name=value["name"],
        display_name=value.get("display_name"),
        description=value.get("description"),
    )


class InitRolesUseCase:
    """Create roles, find-or-create their permissions, and attach plain grants.

    Runs in one unit of work: a duplicate role name aborts the whole batch.
    """

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self, roles_and_permissions: Mapping[str, Sequence[PermissionInput]]
    ) -> list[Role]:
        roles: list[Role] = []
        async with self._uow_factory() as uow:
            for name, permissions in roles_and_permissions.items():
                role = Role(id=uuid4(), name=name)
                await ensure_unique_role_name(uow, role)
                await uow.roles.create(role)

                specs = [to_permission_spec(p) for p in permissions]
                found = await uow.permissions.find_or_create(specs)
                unique = {p.id: p for p in found}
                role.permissions = [PermissionGrant(permission_id=pid) for pid in unique]
                await uow.roles.save(role)
                roles.append(role)
                logger.info("Initialized role %s with %d permissions", name, len(unique))
        return roles
