"""ACL-scoped removal."""

import logging
from collections.abc import Mapping
from typing import Any

from roleguard.application.ports.repositories import Record
from roleguard.application.use_cases.acl.policy import AclPolicy, PermissionDecorations
from roleguard.domain.exceptions import NotAuthorizedError, ValidationError
from roleguard.domain.services.conditions import AclScopedFilter
from roleguard.domain.value_objects import AclAction

logger = logging.getLogger(__name__)


class AclRemoveUseCase:
    """Remove only the records the ``delete`` conditions allow; returns the count."""

    def __init__(self, unit_of_work_factory: type, policy: AclPolicy) -> None:
        self._uow_factory = unit_of_work_factory
        self._policy = policy

    async def execute(
        self,
        permissions: PermissionDecorations,
        record_type: str,
        filter: Mapping[str, Any],
    ) -> int:
        conditions = self._policy.conditions(permissions, AclAction.DELETE, record_type) or []
        scoped = AclScopedFilter(base=filter, acl=tuple(conditions))
        async with self._uow_factory() as uow:
            return await uow.records.remove(record_type, scoped.to_filter())


class AclRemoveRecordUseCase:
    """Remove one stored record; raises NotAuthorizedError when nothing was removed."""

    def __init__(self, remove_records: AclRemoveUseCase) -> None:
        self._remove_records = remove_records

    async def execute(
        self,
        permissions: PermissionDecorations,
        record_type: str,
        record: Record,
    ) -> Record:
        if record.get("id") is None:
            raise ValidationError("Record has no id")
        removed = await self._remove_records.execute(
            permissions, record_type, {"id": record["id"]}
        )
        if not removed:
            logger.info("ACL denied removal of %s %s", record_type, record["id"])
            raise NotAuthorizedError("not authorized")
        return record
