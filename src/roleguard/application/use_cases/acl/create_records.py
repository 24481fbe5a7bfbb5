"""ACL-checked record creation."""

import copy
import logging
from collections.abc import Mapping, Sequence
from typing import Any
from uuid import uuid4

from roleguard.application.ports.repositories import Record
from roleguard.application.use_cases.acl.policy import AclPolicy, PermissionDecorations
from roleguard.domain.exceptions import NotAuthorizedError
from roleguard.domain.services.presets import apply_presets
from roleguard.domain.value_objects import AclAction

logger = logging.getLogger(__name__)


class AclCreateUseCase:
    """Create records after checking (and auto-filling) ``create`` presets.

    Every record of a batch is checked before any is stored, so one
    rejected record means nothing from the batch is persisted.
    """

    def __init__(self, unit_of_work_factory: type, policy: AclPolicy) -> None:
        self._uow_factory = unit_of_work_factory
        self._policy = policy

    async def execute(
        self,
        permissions: PermissionDecorations,
        record_type: str,
        records: Sequence[Mapping[str, Any]],
    ) -> list[Record]:
        presets = self._policy.presets(permissions, AclAction.CREATE, record_type)
        prepared = [copy.deepcopy(dict(r)) for r in records]
        if presets:
            for position, record in enumerate(prepared):
                try:
                    apply_presets(record, presets)
                except NotAuthorizedError:
                    logger.info("ACL rejected %s #%d of batch on presets", record_type, position)
                    raise

        for record in prepared:
            if record.get("id") is None:
                record["id"] = uuid4()

        async with self._uow_factory() as uow:
            return await uow.records.create(record_type, prepared)
