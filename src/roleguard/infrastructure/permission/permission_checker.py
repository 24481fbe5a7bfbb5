"""Permission checker implementation - resolves grants over the role graph."""

import logging
from collections.abc import Sequence
from uuid import UUID

from roleguard.application.dto.can_result import CanResult
from roleguard.application.role_graph_loader import load_role_graph
from roleguard.application.use_cases.grant.references import resolve_permission, resolve_role
from roleguard.domain.entities import GrantHolder, Permission, Role, RoleGrant
from roleguard.domain.services.grant_lookup import first_permission_grant, first_role_grant
from roleguard.domain.services.resolution import Evaluation, PermissionResolution
from roleguard.domain.services.settings_factories import SettingsFactoryRegistry
from roleguard.domain.value_objects import EvaluationMode, GrantOptions

logger = logging.getLogger(__name__)


class RoleGraphPermissionChecker:
    """Checks subject and role grants against the stored role graph.

    Every call reloads the reachable graph; nothing is cached between calls.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        settings_factories: SettingsFactoryRegistry,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._factories = settings_factories

    async def can(self, holder: GrantHolder, permission_name: str) -> CanResult:
        """Decision for one permission and the decorations of the first grant path found."""
        result = await self._evaluate(holder, {}, EvaluationMode.ALL, [permission_name], False)
        return CanResult(result.granted, result.found.get(permission_name, []))

    async def can_all(self, holder: GrantHolder, permission_names: Sequence[str]) -> CanResult:
        """All names required; decorations collected for every name across the graph."""
        result = await self._evaluate(holder, {}, EvaluationMode.ALL, permission_names, True)
        return CanResult(result.granted, result.found)

    async def can_any(
        self, holder: GrantHolder, permission_names: Sequence[str], need_all: bool = False
    ) -> CanResult:
        """Any name suffices. Stops at the first hit unless ``need_all`` is set."""
        result = await self._evaluate(holder, {}, EvaluationMode.ANY, permission_names, need_all)
        return CanResult(result.granted, result.found)

    async def can_via_grant(self, grant: RoleGrant, permission_name: str) -> CanResult:
        """Like ``can_all([name])`` but starting at the role a grant points to."""
        role, settings = await self._grant_root(grant)
        result = await self._evaluate(role, settings, EvaluationMode.ALL, [permission_name], True)
        return CanResult(result.granted, result.found.get(permission_name, []))

    async def can_all_via_grant(self, grant: RoleGrant, permission_names: Sequence[str]) -> CanResult:
        role, settings = await self._grant_root(grant)
        result = await self._evaluate(role, settings, EvaluationMode.ALL, permission_names, True)
        return CanResult(result.granted, result.found)

    async def can_any_via_grant(
        self, grant: RoleGrant, permission_names: Sequence[str], need_all: bool = False
    ) -> CanResult:
        role, settings = await self._grant_root(grant)
        result = await self._evaluate(role, settings, EvaluationMode.ANY, permission_names, need_all)
        return CanResult(result.granted, result.found)

    async def has_role(
        self,
        holder: GrantHolder,
        role: Role | UUID | str,
        options: GrantOptions = GrantOptions(),
        recursive: bool = True,
    ) -> bool:
        async with self._uow_factory() as uow:
            target = await resolve_role(uow, role)
            graph = await load_role_graph(uow, holder)
        return first_role_grant(graph, holder, target.id, options, recursive) is not None

    async def has_permission(
        self,
        holder: GrantHolder,
        permission: Permission | UUID | str,
        options: GrantOptions = GrantOptions(),
    ) -> bool:
        """Direct grants only; use ``can`` for inherited permissions."""
        async with self._uow_factory() as uow:
            target = await resolve_permission(uow, permission)
        return first_permission_grant(holder, target.id, options) is not None

    async def _grant_root(self, grant: RoleGrant) -> tuple[Role, dict]:
        async with self._uow_factory() as uow:
            role = await resolve_role(uow, grant.role_id)
        if grant.settings_factory is not None:
            return role, self._factories.apply(grant.settings_factory, {})
        return role, dict(grant.settings or {})

    async def _evaluate(
        self,
        holder: GrantHolder,
        settings: dict,
        mode: EvaluationMode,
        names: Sequence[str],
        collect_all: bool,
    ) -> Evaluation:
        async with self._uow_factory() as uow:
            graph = await load_role_graph(uow, holder)
        result = PermissionResolution(graph, self._factories).evaluate(
            holder, settings, mode, list(names), collect_all
        )
        logger.debug(
            "Evaluated %s %s for %s: %s", mode.value, list(names), holder.id, result.granted
        )
        return result
