"""Permission entity."""

from dataclasses import dataclass
from uuid import UUID


@dataclass
class Permission:
    """Named permission, e.g. ``read@Post``. Identity never changes once created."""

    id: UUID
    name: str
    display_name: str | None = None
    description: str | None = None
