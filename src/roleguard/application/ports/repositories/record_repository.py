"""Record repository port - document store behind the ACL layer."""

from collections.abc import Mapping
from typing import Any, Protocol

Record = dict[str, Any]


class RecordRepository(Protocol):
    """Port for records of arbitrary type, queried with Mongo-style filters.

    Filters support field equality (dotted paths into nested objects),
    ``$in`` on a field, and ``$and`` / ``$or`` lists. The ``id`` field is the
    record identifier.
    """

    async def find(self, record_type: str, filter: Mapping[str, Any]) -> list[Record]: ...

    async def create(self, record_type: str, records: list[Record]) -> list[Record]: ...

    async def update(
        self, record_type: str, filter: Mapping[str, Any], patch: Mapping[str, Any]
    ) -> int:
        """Set top-level fields of every matching record; return affected count."""
        ...

    async def remove(self, record_type: str, filter: Mapping[str, Any]) -> int: ...
