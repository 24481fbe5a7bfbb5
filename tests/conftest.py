"""Pytest fixtures for RoleGuard tests."""

from __future__ import annotations

import copy
from collections.abc import AsyncIterator, Iterable, Mapping
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any
from uuid import UUID, uuid4

import pytest

from roleguard.application.dto.permission_spec import PermissionSpec
from roleguard.config import Settings
from roleguard.domain.entities import Permission, PermissionGrant, Role, Subject
from roleguard.domain.exceptions import ValidationError
from roleguard.domain.services.settings_factories import SettingsFactoryRegistry
from roleguard.main import RoleGuard, build_roleguard


# --- Record filter matching (Mongo-style subset) ---


_MISSING = object()


def _lookup(record: Mapping[str, Any], path: str) -> Any:
    value: Any = record
    for part in path.split("."):
        if not isinstance(value, Mapping) or part not in value:
            return _MISSING
        value = value[part]
    return value


def _contains(actual: Any, expected: Any) -> bool:
    """JSONB ``@>`` on values: objects match supersets, arrays any-order subsets."""
    if isinstance(expected, Mapping):
        return isinstance(actual, Mapping) and all(
            k in actual and _contains(actual[k], v) for k, v in expected.items()
        )
    if isinstance(expected, list):
        return isinstance(actual, list) and all(
            any(_contains(a, e) for a in actual) for e in expected
        )
    return actual == expected


def matches(record: Mapping[str, Any], filter: Mapping[str, Any]) -> bool:
    """Containment on dotted paths, ``$in``, ``$and`` and ``$or``; a missing key never matches."""
    for key, expected in filter.items():
        if key == "$and":
            if not all(matches(record, f) for f in expected):
                return False
        elif key == "$or":
            if not any(matches(record, f) for f in expected):
                return False
        elif isinstance(expected, Mapping) and "$in" in expected:
            actual = _lookup(record, key)
            if actual is _MISSING or not any(_contains(actual, o) for o in expected["$in"]):
                return False
        else:
            actual = _lookup(record, key)
            if actual is _MISSING or not _contains(actual, expected):
                return False
    return True


# --- Shared in-memory store ---


@dataclass
class FakeStore:
    """Backing data shared by every FakeUnitOfWork of one test."""

    roles: dict[UUID, Role] = field(default_factory=dict)
    permissions: dict[UUID, Permission] = field(default_factory=dict)
    subjects: dict[UUID, Subject] = field(default_factory=dict)
    records: dict[str, list[dict[str, Any]]] = field(default_factory=dict)

    def snapshot(self) -> FakeStore:
        return copy.deepcopy(self)

    def restore(self, snapshot: FakeStore) -> None:
        self.roles = snapshot.roles
        self.permissions = snapshot.permissions
        self.subjects = snapshot.subjects
        self.records = snapshot.records


# --- Fake repositories ---


class FakeRoleRepository:
    """In-memory role repository. Stores and returns copies, like a database."""

    def __init__(self, store: FakeStore) -> None:
        self._store = store

    async def get_by_id(self, role_id: UUID) -> Role | None:
        role = self._store.roles.get(role_id)
        return copy.deepcopy(role) if role else None

    async def get_by_name(self, name: str) -> Role | None:
        for role in self._store.roles.values():
            if role.name == name:
                return copy.deepcopy(role)
        return None

    async def get_many(self, role_ids: Iterable[UUID]) -> list[Role]:
        return [copy.deepcopy(self._store.roles[i]) for i in role_ids if i in self._store.roles]

    async def list_all(self) -> list[Role]:
        return [copy.deepcopy(r) for r in sorted(self._store.roles.values(), key=lambda r: r.name)]

    async def create(self, role: Role) -> Role:
        self._store.roles[role.id] = copy.deepcopy(role)
        return role

    async def save(self, role: Role) -> Role:
        self._store.roles[role.id] = copy.deepcopy(role)
        return role

    async def delete(self, role_id: UUID) -> None:
        self._store.roles.pop(role_id, None)


class FakePermissionRepository:
    """In-memory permission repository."""

    def __init__(self, store: FakeStore) -> None:
        self._store = store

    async def get_by_id(self, permission_id: UUID) -> Permission | None:
        return self._store.permissions.get(permission_id)

    async def get_by_name(self, name: str) -> Permission | None:
        return next((p for p in self._store.permissions.values() if p.name == name), None)

    async def get_many(self, permission_ids: Iterable[UUID]) -> list[Permission]:
        return [self._store.permissions[i] for i in permission_ids if i in self._store.permissions]

    async def find_or_create(self, specs: list[PermissionSpec]) -> list[Permission]:
        result = []
        for spec in specs:
            found = next((p for p in self._store.permissions.values() if p.name == spec.name), None)
            if found is None:
                found = Permission(
                    id=uuid4(),
                    name=spec.name,
                    display_name=spec.display_name,
                    description=spec.description,
                )
                self._store.permissions[found.id] = found
            elif spec.conflicts(found):
                raise ValidationError(f"Permission {spec.name} already exists")
            result.append(found)
        return result


class FakeSubjectRepository:
    """In-memory subject repository."""

    def __init__(self, store: FakeStore) -> None:
        self._store = store

    async def get_by_id(self, subject_id: UUID) -> Subject | None:
        subject = self._store.subjects.get(subject_id)
        return copy.deepcopy(subject) if subject else None

    async def create(self, subject: Subject) -> Subject:
        self._store.subjects[subject.id] = copy.deepcopy(subject)
        return subject

    async def save(self, subject: Subject) -> Subject:
        self._store.subjects[subject.id] = copy.deepcopy(subject)
        return subject


class FakeRecordRepository:
    """In-memory record repository keyed by record type, insertion ordered."""

    def __init__(self, store: FakeStore) -> None:
        self._store = store

    async def find(self, record_type: str, filter: Mapping[str, Any]) -> list[dict[str, Any]]:
        rows = self._store.records.get(record_type, [])
        return [copy.deepcopy(r) for r in rows if matches(r, filter)]

    async def create(self, record_type: str, records: list[dict[str, Any]]) -> list[dict[str, Any]]:
        self._store.records.setdefault(record_type, []).extend(copy.deepcopy(records))
        return records

    async def update(
        self, record_type: str, filter: Mapping[str, Any], patch: Mapping[str, Any]
    ) -> int:
        count = 0
        for row in self._store.records.get(record_type, []):
            if matches(row, filter):
                row.update({k: copy.deepcopy(v) for k, v in patch.items() if k != "id"})
                count += 1
        return count

    async def remove(self, record_type: str, filter: Mapping[str, Any]) -> int:
        rows = self._store.records.get(record_type, [])
        kept = [r for r in rows if not matches(r, filter)]
        self._store.records[record_type] = kept
        return len(rows) - len(kept)


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories over a shared store."""

    def __init__(self, store: FakeStore | None = None) -> None:
        self.store = store or FakeStore()
        self.roles = FakeRoleRepository(self.store)
        self.permissions = FakePermissionRepository(self.store)
        self.subjects = FakeSubjectRepository(self.store)
        self.records = FakeRecordRepository(self.store)

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass


def make_uow_factory(store: FakeStore):
    """Factory over one store; a failing block restores the store as it was."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        snapshot = store.snapshot()
        try:
            yield FakeUnitOfWork(store)
        except BaseException:
            store.restore(snapshot)
            raise

    return _factory


# --- Fixtures ---

FIXTURE_PERMISSIONS = [
    "create@Post",
    "read@Post",
    "update@Post",
    "delete@Post",
    "create@Comment",
    "read@Comment",
    "update@Comment",
    "delete@Comment",
    "read@Foo",
]


@dataclass
class World:
    """Seeded roles, permissions and the user ``henry``."""

    store: FakeStore
    permissions: dict[str, Permission]
    admin: Role
    readonly: Role
    guest: Role
    henry: Subject


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def uow_factory(store: FakeStore):
    """Factory returning async context manager with FakeUnitOfWork over ``store``."""
    return make_uow_factory(store)


@pytest.fixture
def world(store: FakeStore) -> World:
    """admin: every permission but read@Foo; readonly: read@Post, read@Comment, read@Foo; guest: none."""
    permissions = {}
    for name in FIXTURE_PERMISSIONS:
        permission = Permission(id=uuid4(), name=name)
        store.permissions[permission.id] = permission
        permissions[name] = permission

    def role(name: str, granted: list[str]) -> Role:
        r = Role(
            id=uuid4(),
            name=name,
            permissions=[PermissionGrant(permission_id=permissions[p].id) for p in granted],
        )
        store.roles[r.id] = copy.deepcopy(r)
        return r

    admin = role("admin", FIXTURE_PERMISSIONS[:-1])
    readonly = role("readonly", ["read@Post", "read@Comment", "read@Foo"])
    guest = role("guest", [])
    henry = Subject(id=uuid4(), kind="User", attributes={"username": "henry"})
    store.subjects[henry.id] = copy.deepcopy(henry)
    return World(store, permissions, admin, readonly, guest, henry)


@pytest.fixture
def settings_factories() -> SettingsFactoryRegistry:
    """Registry with the factories used by templated-grant tests."""
    registry = SettingsFactoryRegistry()

    @registry.register("b_from_a")
    def _b_from_a(opts: Mapping[str, Any]) -> dict[str, Any]:
        return {"b": opts.get("a")}

    @registry.register("c_from_b")
    def _c_from_b(opts: Mapping[str, Any]) -> dict[str, Any]:
        return {"c": opts.get("b")}

    @registry.register("club_scope")
    def _club_scope(opts: Mapping[str, Any]) -> dict[str, Any]:
        club = opts.get("club")
        return {"presets": {"club": club}, "conditions": {"club": club}}

    return registry


@pytest.fixture
def guard(uow_factory, settings_factories) -> RoleGuard:
    """Services wired over the in-memory store."""
    return build_roleguard(uow_factory, settings_factories, Settings(_env_file=None))
