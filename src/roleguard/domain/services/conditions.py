"""Record conditions attached to permission decorations."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from roleguard.domain.entities import Decoration


def decoration_component(
    decorations: Sequence[Decoration] | None, component: str
) -> list[Any] | None:
    """Collect ``component`` (``presets`` or ``conditions``) from every decoration.

    Returns None, meaning unrestricted, when there are no decorations or any
    one of them lacks the component: the most permissive grant wins.
    """
    if not decorations:
        return None
    values = []
    for decoration in decorations:
        value = decoration.get(component)
        if not value:
            return None
        values.append(value)
    return values


def combine_conditions(acl: Sequence[Mapping[str, Any]]) -> dict[str, Any]:
    """One condition as is, several joined with ``$or``."""
    if len(acl) == 1:
        return dict(acl[0])
    return {"$or": [dict(c) for c in acl]}


@dataclass(frozen=True)
class AclScopedFilter:
    """Caller filter narrowed by the OR of the ACL conditions."""

    base: Mapping[str, Any] = field(default_factory=dict)
    acl: tuple[Mapping[str, Any], ...] = ()

    def to_filter(self) -> dict[str, Any]:
        if not self.acl:
            return dict(self.base)
        conditions = combine_conditions(self.acl)
        if not self.base:
            return conditions
        return {"$and": [dict(self.base), conditions]}
