"""Lookup of the decorations that govern one record operation."""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from roleguard.domain.entities import Decoration
from roleguard.domain.exceptions import NotAuthorizedError
from roleguard.domain.services.conditions import decoration_component
from roleguard.domain.value_objects import AclAction, PermissionName

logger = logging.getLogger(__name__)

PermissionDecorations = Mapping[str, Sequence[Decoration]]


class AclPolicy:
    """Reads ``presets`` and ``conditions`` for ``{action}@{record_type}``.

    ``permissions`` is the name -> decorations map returned by
    ``can_all``/``can_any``. A permission missing from the map is denied
    unless ``deny_missing_permission`` is False, in which case the operation
    runs unrestricted.
    """

    def __init__(self, deny_missing_permission: bool = True) -> None:
        self._deny_missing = deny_missing_permission

    def decorations(
        self, permissions: PermissionDecorations, action: AclAction, record_type: str
    ) -> Sequence[Decoration] | None:
        name = str(PermissionName(action.value, record_type))
        decorations = permissions.get(name)
        if not decorations and self._deny_missing:
            logger.info("ACL denied %s: permission not granted", name)
            raise NotAuthorizedError(f"not authorized: {name}")
        return decorations

    def presets(
        self, permissions: PermissionDecorations, action: AclAction, record_type: str
    ) -> list[dict[str, Any]] | None:
        return decoration_component(self.decorations(permissions, action, record_type), "presets")

    def conditions(
        self, permissions: PermissionDecorations, action: AclAction, record_type: str
    ) -> list[dict[str, Any]] | None:
        return decoration_component(
            self.decorations(permissions, action, record_type), "conditions"
        )
