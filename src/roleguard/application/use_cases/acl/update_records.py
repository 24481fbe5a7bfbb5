"""ACL-scoped bulk update."""

from collections.abc import Mapping
from typing import Any

from roleguard.application.use_cases.acl.policy import AclPolicy, PermissionDecorations
from roleguard.domain.services.conditions import AclScopedFilter, decoration_component
from roleguard.domain.services.presets import validate_patch
from roleguard.domain.value_objects import AclAction


class AclUpdateUseCase:
    """Update only the records the ``update`` conditions allow.

    Returns the affected count; zero means the conditions excluded every
    targeted record. A patch that sets a field against every preset
    template is rejected before touching storage.
    """

    def __init__(self, unit_of_work_factory: type, policy: AclPolicy) -> None:
        self._uow_factory = unit_of_work_factory
        self._policy = policy

    async def execute(
        self,
        permissions: PermissionDecorations,
        record_type: str,
        filter: Mapping[str, Any],
        patch: Mapping[str, Any],
    ) -> int:
        decorations = self._policy.decorations(permissions, AclAction.UPDATE, record_type)
        presets = decoration_component(decorations, "presets")
        if presets:
            validate_patch(patch, presets)

        conditions = decoration_component(decorations, "conditions") or []
        scoped = AclScopedFilter(base=filter, acl=tuple(conditions))
        async with self._uow_factory() as uow:
            return await uow.records.update(record_type, scoped.to_filter(), patch)
