"""Domain value objects."""

from roleguard.domain.value_objects.acl_action import AclAction, PermissionName
from roleguard.domain.value_objects.evaluation_mode import EvaluationMode
from roleguard.domain.value_objects.grant_options import GrantOptions

__all__ = [
    "AclAction",
    "EvaluationMode",
    "GrantOptions",
    "PermissionName",
]
