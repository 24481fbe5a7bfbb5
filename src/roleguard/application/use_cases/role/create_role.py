"""Create role use case."""

import logging
from uuid import uuid4

from roleguard.application.use_cases.grant.references import ensure_unique_role_name
from roleguard.domain.entities import Role
from roleguard.domain.exceptions import ValidationError

logger = logging.getLogger(__name__)


class CreateRoleUseCase:
    """Create an empty role with a unique name."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        name: str,
        display_name: str | None = None,
        description: str | None = None,
    ) -> Role:
        if not name:
            raise ValidationError("Role name is required")

        role = Role(id=uuid4(), name=name, display_name=display_name, description=description)
        async with self._uow_factory() as uow:
            await ensure_unique_role_name(uow, role)
            await uow.roles.create(role)
        logger.info("Created role %s", name)
        return role
