"""Lookup of existing grants by target and decoration, and nesting checks."""

import logging
from uuid import UUID

from roleguard.domain.entities import GrantHolder, PermissionGrant, Role, RoleGrant
from roleguard.domain.services.role_graph import RoleGraph
from roleguard.domain.value_objects import GrantOptions

logger = logging.getLogger(__name__)


def grant_matches(
    grant: RoleGrant | PermissionGrant, target_id: UUID, options: GrantOptions
) -> bool:
    """Same target, and the same decoration or factory when one is requested."""
    grant_target = grant.role_id if isinstance(grant, RoleGrant) else grant.permission_id
    if grant_target != target_id:
        return False
    if options.decoration is not None and dict(options.decoration) != (grant.settings or {}):
        return False
    if options.factory is not None and grant.settings_factory != options.factory:
        return False
    return True


def first_role_grant(
    graph: RoleGraph,
    holder: GrantHolder,
    role_id: UUID,
    options: GrantOptions = GrantOptions(),
    recursive: bool = True,
    _path: frozenset[UUID] = frozenset(),
) -> RoleGrant | None:
    """First grant of ``role_id`` on ``holder``, searching nested roles depth-first."""
    path = _path | {holder.id}
    for grant in holder.roles:
        if grant_matches(grant, role_id, options):
            return grant
        if not recursive:
            continue
        if grant.role_id in path:
            logger.warning("Skipping cyclic role %s below %s", grant.role_id, holder.id)
            continue
        found = first_role_grant(graph, graph.role(grant.role_id), role_id, options, True, path)
        if found is not None:
            return found
    return None


def first_permission_grant(
    holder: GrantHolder, permission_id: UUID, options: GrantOptions = GrantOptions()
) -> PermissionGrant | None:
    """First direct grant of ``permission_id`` on ``holder``."""
    for grant in holder.permissions:
        if grant_matches(grant, permission_id, options):
            return grant
    return None


def reaches(graph: RoleGraph, start: Role, target_id: UUID) -> bool:
    """True if ``target_id`` is ``start`` or nested anywhere below it."""
    pending = [start]
    visited: set[UUID] = set()
    while pending:
        role = pending.pop()
        if role.id == target_id:
            return True
        if role.id in visited:
            continue
        visited.add(role.id)
        pending.extend(graph.role(g.role_id) for g in role.roles)
    return False
