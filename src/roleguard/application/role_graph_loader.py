"""Batch loading of the role graph reachable from grant holders."""

from roleguard.application.ports import UnitOfWork
from roleguard.domain.entities import GrantHolder, Role
from roleguard.domain.exceptions import UnknownPermissionError, UnknownRoleError
from roleguard.domain.services.role_graph import RoleGraph


async def load_role_graph(uow: UnitOfWork, *holders: GrantHolder) -> RoleGraph:
    """Load every role and permission reachable from ``holders``, one level per query.

    Holders that are roles are taken as given (in-memory state wins over the
    stored copy). Dangling references raise UnknownRoleError or
    UnknownPermissionError.
    """
    graph = RoleGraph()
    graph.add_roles(h for h in holders if isinstance(h, Role))

    frontier: list[GrantHolder] = list(holders)
    while missing := graph.missing_role_ids(frontier):
        loaded = await uow.roles.get_many(missing)
        graph.add_roles(loaded)
        unresolved = missing - {role.id for role in loaded}
        if unresolved:
            raise UnknownRoleError(min(unresolved))
        frontier = list(loaded)

    every_holder = [*holders, *graph.roles.values()]
    missing_permissions = graph.missing_permission_ids(every_holder)
    if missing_permissions:
        loaded_permissions = await uow.permissions.get_many(missing_permissions)
        graph.add_permissions(loaded_permissions)
        unresolved = missing_permissions - {p.id for p in loaded_permissions}
        if unresolved:
            raise UnknownPermissionError(min(unresolved))
    return graph
