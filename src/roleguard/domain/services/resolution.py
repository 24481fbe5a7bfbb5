"""Permission resolution over a role graph.

The walk is depth-first in grant insertion order. Unless ``collect_all`` is
set, it stops as soon as the request is satisfied, so the decorations it
reports are those of the first grants that satisfied it. Settings handed down
a role edge come from that edge's factory (applied to the parent's settings)
or its static settings, which lets factories compose top-down through a chain
of roles.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any, NamedTuple
from uuid import UUID

from roleguard.domain.entities import Decoration, GrantHolder, PermissionGrant, Role, RoleGrant
from roleguard.domain.services.decorations import (
    DecorationMap,
    merge_decoration_list,
    merge_decoration_maps,
)
from roleguard.domain.services.role_graph import RoleGraph
from roleguard.domain.services.settings_factories import SettingsFactoryRegistry
from roleguard.domain.value_objects import EvaluationMode

logger = logging.getLogger(__name__)


class Evaluation(NamedTuple):
    """Decision plus the decorations collected per permission name.

    Names without any grant on the walked part of the graph are absent.
    """

    granted: bool
    found: DecorationMap


def is_satisfied(found: Mapping[str, Sequence[Decoration]], mode: EvaluationMode, names: Sequence[str]) -> bool:
    if mode is EvaluationMode.ANY:
        return any(found.get(name) for name in names)
    return all(found.get(name) for name in names)


class PermissionResolution:
    """Evaluates permission requests against one loaded ``RoleGraph``."""

    def __init__(self, graph: RoleGraph, factories: SettingsFactoryRegistry) -> None:
        self._graph = graph
        self._factories = factories

    def effective_settings(
        self, grant: RoleGrant | PermissionGrant, local_settings: Mapping[str, Any]
    ) -> Decoration:
        """Factory output for templated grants, else a copy of the static settings."""
        if grant.settings_factory is not None:
            return self._factories.apply(grant.settings_factory, local_settings)
        return dict(grant.settings or {})

    def evaluate(
        self,
        holder: GrantHolder,
        local_settings: Mapping[str, Any],
        mode: EvaluationMode,
        names: Sequence[str],
        collect_all: bool,
        _path: frozenset[UUID] = frozenset(),
    ) -> Evaluation:
        path = _path | {holder.id} if isinstance(holder, Role) else _path
        found: DecorationMap = {}

        for name in names:
            hits: list[Decoration] = []
            for grant in holder.permissions:
                if self._graph.permission(grant.permission_id).name != name:
                    continue
                hits.append(self.effective_settings(grant, local_settings))
                if not collect_all:
                    break
            merged = merge_decoration_list(found.get(name), hits)
            if merged is not None:
                found[name] = merged
            if hits and mode is EvaluationMode.ANY and not collect_all:
                break

        satisfied = is_satisfied(found, mode, names)

        for grant in holder.roles:
            if satisfied and not collect_all:
                break
            if grant.role_id in path:
                logger.warning("Role cycle at %s; skipping nested grant", grant.role_id)
                continue
            child = self._graph.role(grant.role_id)
            downstream = self.effective_settings(grant, local_settings)
            result = self.evaluate(child, downstream, mode, names, collect_all, path)
            found = merge_decoration_maps(found, result.found)
            satisfied = satisfied or result.granted or is_satisfied(found, mode, names)

        return Evaluation(satisfied, found)
