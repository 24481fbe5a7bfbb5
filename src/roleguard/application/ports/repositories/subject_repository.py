"""Subject repository port."""

from typing import Protocol
from uuid import UUID

from roleguard.domain.entities import Subject


class SubjectRepository(Protocol):
    """Port for persistence of grant-holding records (users etc.)."""

    async def get_by_id(self, subject_id: UUID) -> Subject | None: ...

    async def create(self, subject: Subject) -> Subject: ...

    async def save(self, subject: Subject) -> Subject: ...
