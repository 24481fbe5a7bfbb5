"""ACL actions and permission names keyed by record type."""

from dataclasses import dataclass
from enum import StrEnum


class AclAction(StrEnum):
    """Record operations guarded by the ACL layer."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class PermissionName:
    """Permission name of the form ``{action}@{record_type}``."""

    action: str
    record_type: str

    def __post_init__(self) -> None:
        if not self.action or not self.record_type:
            raise ValueError("Permission name needs both action and record type")
        if "@" in self.action or "@" in self.record_type:
            raise ValueError("Action and record type must not contain '@'")

    @classmethod
    def parse(cls, value: str) -> "PermissionName":
        action, sep, record_type = value.partition("@")
        if not sep:
            raise ValueError(f"Not an action@record_type name: {value!r}")
        return cls(action=action, record_type=record_type)

    def __str__(self) -> str:
        return f"{self.action}@{self.record_type}"
