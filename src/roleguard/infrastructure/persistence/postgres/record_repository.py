"""PostgreSQL record repository implementation - JSONB document store."""

from collections.abc import Mapping
from typing import Any

from psycopg import AsyncConnection

from roleguard.application.ports.repositories import Record
from roleguard.domain.exceptions import ValidationError
from roleguard.infrastructure.persistence.postgres.grant_codec import to_jsonb


def _nest(path: str, value: Any) -> dict[str, Any]:
    """``("adres.plaats", "X")`` -> ``{"adres": {"plaats": "X"}}``."""
    nested: Any = value
    for part in reversed(path.split(".")):
        nested = {part: nested}
    return nested


def _build_field_condition(path: str, value: Any) -> tuple[str, list[object]]:
    """SQL for one field. Equality uses JSONB containment so types are kept."""
    if isinstance(value, Mapping) and any(str(k).startswith("$") for k in value):
        operators = set(value)
        if operators != {"$in"}:
            raise ValidationError(f"Unsupported operators for {path}: {sorted(operators)}")
        options = value["$in"]
        if not isinstance(options, list | tuple):
            raise ValidationError(f"$in for {path} requires a list")
        if not options:
            return "FALSE", []
        if path == "id":
            return "id = ANY(%s)", [list(options)]
        return (
            "(" + " OR ".join("data @> %s" for _ in options) + ")",
            [to_jsonb(_nest(path, option)) for option in options],
        )
    if path == "id":
        return "id = %s", [value]
    return "data @> %s", [to_jsonb(_nest(path, value))]


def _build_record_filter(filter: Mapping[str, Any]) -> tuple[str, list[object]]:
    """Translate a Mongo-style filter into a WHERE fragment and params.

    Supports field equality (dotted paths), ``$in``, ``$and`` and ``$or``.
    Top-level keys are ANDed. An empty filter matches everything.

    Equality is JSONB containment: an object value matches any stored
    superset, an array value matches arrays holding its elements in any
    order, and ``None`` matches an explicit null only, never a missing key.
    """
    conditions: list[str] = []
    params: list[object] = []
    for key, value in filter.items():
        if key in ("$and", "$or"):
            if not isinstance(value, list | tuple):
                raise ValidationError(f"{key} requires a list")
            if not value:
                conditions.append("TRUE" if key == "$and" else "FALSE")
                continue
            parts = [_build_record_filter(item) for item in value]
            joiner = " AND " if key == "$and" else " OR "
            conditions.append("(" + joiner.join(sql for sql, _ in parts) + ")")
            for _, part_params in parts:
                params.extend(part_params)
        elif key.startswith("$"):
            raise ValidationError(f"Unsupported operator: {key}")
        else:
            sql, field_params = _build_field_condition(key, value)
            conditions.append(sql)
            params.extend(field_params)
    if not conditions:
        return "TRUE", []
    if len(conditions) == 1:
        return conditions[0], params
    return "(" + " AND ".join(conditions) + ")", params


def _row_to_record(r: tuple) -> Record:
    return {"id": r[0], **(r[1] or {})}


class PostgresRecordRepository:
    """Records of every type in one table, bodies stored as JSONB."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def find(self, record_type: str, filter: Mapping[str, Any]) -> list[Record]:
        """Find records matching filter, oldest first."""
        where, params = _build_record_filter(filter)
        cur = await self._conn.execute(
            f"SELECT id, data FROM record WHERE record_type = %s AND {where} "
            "ORDER BY created_at, id",
            (record_type, *params),
        )
        return [_row_to_record(r) for r in await cur.fetchall()]

    async def create(self, record_type: str, records: list[Record]) -> list[Record]:
        """Create records in batch."""
        for record in records:
            body = {k: v for k, v in record.items() if k != "id"}
            await self._conn.execute(
                "INSERT INTO record (id, record_type, data, created_at) VALUES (%s, %s, %s, now())",
                (record["id"], record_type, to_jsonb(body)),
            )
        return records

    async def update(
        self, record_type: str, filter: Mapping[str, Any], patch: Mapping[str, Any]
    ) -> int:
        """Merge patch into every matching record; return affected count."""
        where, params = _build_record_filter(filter)
        body = {k: v for k, v in patch.items() if k != "id"}
        cur = await self._conn.execute(
            f"UPDATE record SET data = data || %s WHERE record_type = %s AND {where}",
            (to_jsonb(body), record_type, *params),
        )
        return cur.rowcount

    async def remove(self, record_type: str, filter: Mapping[str, Any]) -> int:
        """Delete matching records; return affected count."""
        where, params = _build_record_filter(filter)
        cur = await self._conn.execute(
            f"DELETE FROM record WHERE record_type = %s AND {where}",
            (record_type, *params),
        )
        return cur.rowcount
