"""Remove role grant use case."""

import logging
from uuid import UUID

from roleguard.application.use_cases.grant.references import resolve_role, save_holder
from roleguard.domain.entities import GrantHolder, Role
from roleguard.domain.services.grant_lookup import first_role_grant
from roleguard.domain.services.role_graph import RoleGraph
from roleguard.domain.value_objects import GrantOptions

logger = logging.getLogger(__name__)


class RemoveRoleUseCase:
    """Remove the first direct grant of a role that matches the decoration."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        holder: GrantHolder,
        role: Role | UUID | str,
        options: GrantOptions = GrantOptions(),
    ) -> GrantHolder:
        """Without options, any direct grant of the role matches. No-op if none does."""
        async with self._uow_factory() as uow:
            target = await resolve_role(uow, role)
            grant = first_role_grant(RoleGraph(), holder, target.id, options, recursive=False)
            if grant is None:
                return holder

            index = next(i for i, g in enumerate(holder.roles) if g is grant)
            del holder.roles[index]
            try:
                await save_holder(uow, holder)
            except Exception:
                holder.roles.insert(index, grant)
                raise
            logger.info("Revoked role %s from %s", target.name, holder.id)
        return holder
