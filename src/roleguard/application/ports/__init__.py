"""Application ports - interfaces for external adapters."""

from roleguard.application.ports.permission_checker import PermissionChecker
from roleguard.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "PermissionChecker",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
