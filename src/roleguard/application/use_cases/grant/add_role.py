"""Add role grant use case."""

import logging
from uuid import UUID

from roleguard.application.ports import UnitOfWork
from roleguard.application.role_graph_loader import load_role_graph
from roleguard.application.use_cases.grant.references import resolve_role, save_holder
from roleguard.domain.entities import GrantHolder, Role, RoleGrant
from roleguard.domain.exceptions import (
    RecursiveNestingError,
    TemplatingNotAllowedError,
    UnknownSettingsFactoryError,
)
from roleguard.domain.services.grant_lookup import first_role_grant, reaches
from roleguard.domain.services.settings_factories import SettingsFactoryRegistry
from roleguard.domain.value_objects import GrantOptions

logger = logging.getLogger(__name__)


class AddRoleUseCase:
    """Grant a role to a subject or nest it in another role."""

    def __init__(
        self,
        unit_of_work_factory: type,
        settings_factories: SettingsFactoryRegistry,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._factories = settings_factories

    async def can_add(
        self,
        holder: GrantHolder,
        role: Role | UUID | str,
        options: GrantOptions = GrantOptions(),
    ) -> bool:
        """False if an equal grant is already held; raises on recursive nesting."""
        async with self._uow_factory() as uow:
            target = await resolve_role(uow, role)
            return await self._can_add(uow, holder, target, options)

    async def execute(
        self,
        holder: GrantHolder,
        role: Role | UUID | str,
        options: GrantOptions = GrantOptions(),
    ) -> GrantHolder:
        """Append a grant and persist the holder. No-op if an equal grant exists."""
        if options.is_templated:
            if not isinstance(holder, Role):
                raise TemplatingNotAllowedError("Can not add templated role to user")
            if options.factory not in self._factories:
                raise UnknownSettingsFactoryError(options.factory)

        async with self._uow_factory() as uow:
            target = await resolve_role(uow, role)
            if not await self._can_add(uow, holder, target, options):
                logger.debug("Role %s already granted to %s", target.name, holder.id)
                return holder

            grant = RoleGrant(
                role_id=target.id,
                settings=dict(options.decoration) if options.decoration is not None else None,
                settings_factory=options.factory,
            )
            holder.roles.append(grant)
            try:
                await save_holder(uow, holder)
            except Exception:
                holder.roles.pop()
                raise
            logger.info("Granted role %s to %s", target.name, holder.id)
        return holder

    async def _can_add(
        self, uow: UnitOfWork, holder: GrantHolder, target: Role, options: GrantOptions
    ) -> bool:
        if holder.id == target.id:
            logger.warning("Rejected self-nesting of role %s", target.name)
            raise RecursiveNestingError("Recursive role nesting detected")

        lookup = options if options.is_templated else GrantOptions(decoration=options.decoration or {})
        graph = await load_role_graph(uow, holder, target)
        if first_role_grant(graph, holder, target.id, lookup, recursive=True) is not None:
            return False

        if isinstance(holder, Role) and reaches(graph, target, holder.id):
            logger.warning("Rejected nesting %s under %s: cycle", target.name, holder.name)
            raise RecursiveNestingError("Recursive role nesting detected")
        return True
