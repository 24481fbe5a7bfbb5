"""Resolution of role/permission references and persistence of grant holders."""

from uuid import UUID

from roleguard.application.ports import UnitOfWork
from roleguard.domain.entities import GrantHolder, Permission, Role
from roleguard.domain.exceptions import (
    DuplicateNameError,
    UnknownPermissionError,
    UnknownRoleError,
)


async def resolve_role(uow: UnitOfWork, role: Role | UUID | str) -> Role:
    """Role given by object, id or name."""
    if isinstance(role, Role):
        return role
    found = (
        await uow.roles.get_by_name(role)
        if isinstance(role, str)
        else await uow.roles.get_by_id(role)
    )
    if found is None:
        raise UnknownRoleError(role)
    return found


async def resolve_permission(uow: UnitOfWork, permission: Permission | UUID | str) -> Permission:
    """Permission given by object, id or name."""
    if isinstance(permission, Permission):
        return permission
    found = (
        await uow.permissions.get_by_name(permission)
        if isinstance(permission, str)
        else await uow.permissions.get_by_id(permission)
    )
    if found is None:
        raise UnknownPermissionError(permission)
    return found


async def ensure_unique_role_name(uow: UnitOfWork, role: Role) -> None:
    """Pre-save check: no other role may carry the same name."""
    existing = await uow.roles.get_by_name(role.name)
    if existing is not None and existing.id != role.id:
        raise DuplicateNameError("Role name must be unique")


async def save_holder(uow: UnitOfWork, holder: GrantHolder) -> GrantHolder:
    """Persist a role (after the name check) or a subject."""
    if isinstance(holder, Role):
        await ensure_unique_role_name(uow, holder)
        await uow.roles.save(holder)
    else:
        await uow.subjects.save(holder)
    return holder
