"""Add permission grant use case."""

import logging
from uuid import UUID

from roleguard.application.use_cases.grant.references import resolve_permission, save_holder
from roleguard.domain.entities import GrantHolder, Permission, PermissionGrant, Role
from roleguard.domain.exceptions import TemplatingNotAllowedError, UnknownSettingsFactoryError
from roleguard.domain.services.grant_lookup import first_permission_grant
from roleguard.domain.services.settings_factories import SettingsFactoryRegistry
from roleguard.domain.value_objects import GrantOptions

logger = logging.getLogger(__name__)


class AddPermissionUseCase:
    """Grant a permission directly to a subject or role."""

    def __init__(
        self,
        unit_of_work_factory: type,
        settings_factories: SettingsFactoryRegistry,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._factories = settings_factories

    async def execute(
        self,
        holder: GrantHolder,
        permission: Permission | UUID | str,
        options: GrantOptions = GrantOptions(),
    ) -> GrantHolder:
        """Append a grant and persist the holder. No-op if an equal grant exists."""
        if options.is_templated:
            if not isinstance(holder, Role):
                raise TemplatingNotAllowedError("Can not add templated permission to user")
            if options.factory not in self._factories:
                raise UnknownSettingsFactoryError(options.factory)

        async with self._uow_factory() as uow:
            target = await resolve_permission(uow, permission)
            lookup = options if options.is_templated else GrantOptions(decoration=options.decoration or {})
            if first_permission_grant(holder, target.id, lookup) is not None:
                logger.debug("Permission %s already granted to %s", target.name, holder.id)
                return holder

            grant = PermissionGrant(
                permission_id=target.id,
                settings=dict(options.decoration) if options.decoration is not None else None,
                settings_factory=options.factory,
            )
            holder.permissions.append(grant)
            try:
                await save_holder(uow, holder)
            except Exception:
                holder.permissions.pop()
                raise
            logger.info("Granted permission %s to %s", target.name, holder.id)
        return holder
