"""ACL-checked save of a single record (create or update)."""

import copy
import logging
from collections.abc import MutableMapping
from typing import Any
from uuid import uuid4

from roleguard.application.use_cases.acl.policy import AclPolicy, PermissionDecorations
from roleguard.domain.exceptions import NotAuthorizedError, NotFound
from roleguard.domain.services.conditions import AclScopedFilter, decoration_component
from roleguard.domain.services.presets import apply_presets
from roleguard.domain.value_objects import AclAction

logger = logging.getLogger(__name__)


class AclSaveUseCase:
    """Save a record, updating it in place once the write succeeds.

    A record without ``id`` is new and checked against ``create`` presets.
    Otherwise ``update`` presets are applied and the write is scoped by the
    ``update`` conditions; if they exclude the record the save is reported
    as NotAuthorizedError.
    """

    def __init__(self, unit_of_work_factory: type, policy: AclPolicy) -> None:
        self._uow_factory = unit_of_work_factory
        self._policy = policy

    async def execute(
        self,
        permissions: PermissionDecorations,
        record_type: str,
        record: MutableMapping[str, Any],
    ) -> MutableMapping[str, Any]:
        is_new = record.get("id") is None
        action = AclAction.CREATE if is_new else AclAction.UPDATE
        decorations = self._policy.decorations(permissions, action, record_type)

        prepared = copy.deepcopy(dict(record))
        presets = decoration_component(decorations, "presets")
        if presets:
            apply_presets(prepared, presets)

        if is_new:
            prepared["id"] = uuid4()
            async with self._uow_factory() as uow:
                await uow.records.create(record_type, [prepared])
            record.update(prepared)
            return record

        conditions = decoration_component(decorations, "conditions") or []
        scoped = AclScopedFilter(base={"id": prepared["id"]}, acl=tuple(conditions))
        patch = {k: v for k, v in prepared.items() if k != "id"}
        async with self._uow_factory() as uow:
            updated = await uow.records.update(record_type, scoped.to_filter(), patch)
        if not updated:
            if conditions:
                logger.info("ACL denied update of %s %s", record_type, prepared["id"])
                raise NotAuthorizedError("not authorized")
            raise NotFound(record_type, prepared["id"])
        record.update(prepared)
        return record
