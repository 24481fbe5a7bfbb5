"""Unit tests for load_role_graph."""

from uuid import uuid4

import pytest

from roleguard.application.role_graph_loader import load_role_graph
from roleguard.domain.entities import PermissionGrant, RoleGrant, Subject
from roleguard.domain.exceptions import UnknownPermissionError, UnknownRoleError


@pytest.mark.asyncio
async def test_loads_nested_roles_and_permissions(uow_factory, world, store) -> None:
    store.roles[world.guest.id].roles = [RoleGrant(role_id=world.readonly.id)]
    world.henry.roles = [RoleGrant(role_id=world.guest.id)]

    async with uow_factory() as uow:
        graph = await load_role_graph(uow, world.henry)

    assert set(graph.roles) == {world.guest.id, world.readonly.id}
    assert {p.name for p in graph.permissions.values()} == {"read@Post", "read@Comment", "read@Foo"}


@pytest.mark.asyncio
async def test_in_memory_role_wins_over_stored_copy(uow_factory, world) -> None:
    world.guest.permissions = [PermissionGrant(permission_id=world.permissions["read@Foo"].id)]

    async with uow_factory() as uow:
        graph = await load_role_graph(uow, world.guest)

    assert graph.role(world.guest.id) is world.guest
    assert world.permissions["read@Foo"].id in graph.permissions


@pytest.mark.asyncio
async def test_dangling_role_reference(uow_factory) -> None:
    subject = Subject(id=uuid4(), kind="User", roles=[RoleGrant(role_id=uuid4())])

    async with uow_factory() as uow:
        with pytest.raises(UnknownRoleError):
            await load_role_graph(uow, subject)


@pytest.mark.asyncio
async def test_dangling_permission_reference(uow_factory) -> None:
    subject = Subject(id=uuid4(), kind="User", permissions=[PermissionGrant(permission_id=uuid4())])

    async with uow_factory() as uow:
        with pytest.raises(UnknownPermissionError):
            await load_role_graph(uow, subject)
