"""Remove permission grant use case."""

import logging
from uuid import UUID

from roleguard.application.use_cases.grant.references import resolve_permission, save_holder
from roleguard.domain.entities import GrantHolder, Permission
from roleguard.domain.services.grant_lookup import first_permission_grant
from roleguard.domain.value_objects import GrantOptions

logger = logging.getLogger(__name__)


class RemovePermissionUseCase:
    """Remove the first direct grant of a permission that matches the decoration."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        holder: GrantHolder,
        permission: Permission | UUID | str,
        options: GrantOptions = GrantOptions(),
    ) -> GrantHolder:
        async with self._uow_factory() as uow:
            target = await resolve_permission(uow, permission)
            grant = first_permission_grant(holder, target.id, options)
            if grant is None:
                return holder

            index = next(i for i, g in enumerate(holder.permissions) if g is grant)
            del holder.permissions[index]
            try:
                await save_holder(uow, holder)
            except Exception:
                holder.permissions.insert(index, grant)
                raise
            logger.info("Revoked permission %s from %s", target.name, holder.id)
        return holder
