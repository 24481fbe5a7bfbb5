"""Application entry point and composition root."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from roleguard import __version__
from roleguard.application.ports import PermissionChecker, UnitOfWorkFactory
from roleguard.application.use_cases.acl.create_records import AclCreateUseCase
from roleguard.application.use_cases.acl.filter_records import AclFilterUseCase
from roleguard.application.use_cases.acl.policy import AclPolicy
from roleguard.application.use_cases.acl.remove_records import (
    AclRemoveRecordUseCase,
    AclRemoveUseCase,
)
from roleguard.application.use_cases.acl.save_record import AclSaveUseCase
from roleguard.application.use_cases.acl.update_records import AclUpdateUseCase
from roleguard.application.use_cases.grant.add_permission import AddPermissionUseCase
from roleguard.application.use_cases.grant.add_role import AddRoleUseCase
from roleguard.application.use_cases.grant.remove_permission import RemovePermissionUseCase
from roleguard.application.use_cases.grant.remove_role import RemoveRoleUseCase
from roleguard.application.use_cases.role.create_role import CreateRoleUseCase
from roleguard.application.use_cases.role.init_roles import InitRolesUseCase
from roleguard.config import Settings, get_settings
from roleguard.domain.services.settings_factories import SettingsFactoryRegistry
from roleguard.infrastructure.permission.permission_checker import RoleGraphPermissionChecker
from roleguard.infrastructure.persistence.postgres.connection import pooled
from roleguard.infrastructure.persistence.postgres.unit_of_work import create_uow_factory


@dataclass
class RoleGuard:
    """Wired services exposed to callers."""

    checker: PermissionChecker
    create_role: CreateRoleUseCase
    init_roles: InitRolesUseCase
    add_role: AddRoleUseCase
    remove_role: RemoveRoleUseCase
    add_permission: AddPermissionUseCase
    remove_permission: RemovePermissionUseCase
    acl_create: AclCreateUseCase
    acl_update: AclUpdateUseCase
    acl_remove: AclRemoveUseCase
    acl_remove_record: AclRemoveRecordUseCase
    acl_save: AclSaveUseCase
    acl_filter: AclFilterUseCase


def main() -> None:
    """CLI entry point."""
    print(f"RoleGuard v{__version__}")


def _resolve_log_level(value: str) -> int:
    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(settings: Settings) -> None:
    """Root logger at the configured level, unless the host already set one up."""
    level = logging.DEBUG if settings.debug else _resolve_log_level(settings.log_level)
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    logging.getLogger("roleguard").setLevel(level)


def build_roleguard(
    uow_factory: UnitOfWorkFactory,
    settings_factories: SettingsFactoryRegistry | None = None,
    settings: Settings | None = None,
) -> RoleGuard:
    """Composition root - wire use cases over any UnitOfWork factory."""
    settings = settings or get_settings()
    factories = SettingsFactoryRegistry() if settings_factories is None else settings_factories
    policy = AclPolicy(deny_missing_permission=settings.acl_deny_missing_permission)
    acl_remove = AclRemoveUseCase(uow_factory, policy)

    return RoleGuard(
        checker=RoleGraphPermissionChecker(uow_factory, factories),
        create_role=CreateRoleUseCase(uow_factory),
        init_roles=InitRolesUseCase(uow_factory),
        add_role=AddRoleUseCase(uow_factory, factories),
        remove_role=RemoveRoleUseCase(uow_factory),
        add_permission=AddPermissionUseCase(uow_factory, factories),
        remove_permission=RemovePermissionUseCase(uow_factory),
        acl_create=AclCreateUseCase(uow_factory, policy),
        acl_update=AclUpdateUseCase(uow_factory, policy),
        acl_remove=acl_remove,
        acl_remove_record=AclRemoveRecordUseCase(acl_remove),
        acl_save=AclSaveUseCase(uow_factory, policy),
        acl_filter=AclFilterUseCase(uow_factory, policy),
    )


@asynccontextmanager
async def open_roleguard(
    settings_factories: SettingsFactoryRegistry | None = None,
    settings: Settings | None = None,
) -> AsyncIterator[RoleGuard]:
    """Open the PostgreSQL pool, yield wired services, close the pool on exit."""
    settings = settings or get_settings()
    configure_logging(settings)
    async with pooled(settings) as pool:
        yield build_roleguard(create_uow_factory(pool), settings_factories, settings)
