"""Unit of Work port - transactional boundary."""

from contextlib import AbstractAsyncContextManager
from typing import Protocol

from roleguard.application.ports.repositories.permission_repository import (
    PermissionRepository,
)
from roleguard.application.ports.repositories.record_repository import RecordRepository
from roleguard.application.ports.repositories.role_repository import RoleRepository
from roleguard.application.ports.repositories.subject_repository import (
    SubjectRepository,
)


class UnitOfWork(Protocol):
    """Unit of Work - one transaction spanning the repositories below.

    Grant mutations read the holder, check, and save inside one unit, but
    nothing locks the rows they read: two callers changing the same grant
    list concurrently can lose one of the updates.
    """

    @property
    def roles(self) -> RoleRepository: ...

    @property
    def permissions(self) -> PermissionRepository: ...

    @property
    def subjects(self) -> SubjectRepository: ...

    @property
    def records(self) -> RecordRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Opens a unit of work: commit on clean exit, rollback when the block raises."""

    def __call__(self) -> AbstractAsyncContextManager[UnitOfWork]: ...
