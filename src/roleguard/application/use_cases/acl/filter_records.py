"""ACL-filtered reads."""

from collections.abc import Mapping
from typing import Any

from roleguard.application.ports.repositories import Record
from roleguard.application.use_cases.acl.policy import AclPolicy, PermissionDecorations
from roleguard.domain.services.conditions import AclScopedFilter
from roleguard.domain.value_objects import AclAction


class AclFilterUseCase:
    """Find records of a type, narrowed by the ``read`` conditions."""

    def __init__(self, unit_of_work_factory: type, policy: AclPolicy) -> None:
        self._uow_factory = unit_of_work_factory
        self._policy = policy

    def scope(
        self,
        permissions: PermissionDecorations,
        record_type: str,
        filter: Mapping[str, Any] | None = None,
    ) -> AclScopedFilter:
        """Compose the caller filter with the read conditions without running it."""
        conditions = self._policy.conditions(permissions, AclAction.READ, record_type) or []
        return AclScopedFilter(base=dict(filter or {}), acl=tuple(conditions))

    async def execute(
        self,
        permissions: PermissionDecorations,
        record_type: str,
        filter: Mapping[str, Any] | None = None,
    ) -> list[Record]:
        scoped = self.scope(permissions, record_type, filter)
        async with self._uow_factory() as uow:
            return await uow.records.find(record_type, scoped.to_filter())
