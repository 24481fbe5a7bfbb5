"""Repository ports."""

from roleguard.application.ports.repositories.permission_repository import (
    PermissionRepository,
)
from roleguard.application.ports.repositories.record_repository import (
    Record,
    RecordRepository,
)
from roleguard.application.ports.repositories.role_repository import RoleRepository
from roleguard.application.ports.repositories.subject_repository import (
    SubjectRepository,
)

__all__ = [
    "PermissionRepository",
    "Record",
    "RecordRepository",
    "RoleRepository",
    "SubjectRepository",
]
