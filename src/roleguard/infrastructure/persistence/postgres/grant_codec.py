"""JSONB encoding of grant lists."""

import json
from functools import partial
from typing import Any
from uuid import UUID

from psycopg.types.json import Jsonb

from roleguard.domain.entities import PermissionGrant, RoleGrant

dumps = partial(json.dumps, default=str)


def to_jsonb(value: Any) -> Jsonb:
    """Wrap for a JSONB parameter; UUIDs and dates are written as strings."""
    return Jsonb(value, dumps=dumps)


def encode_role_grants(grants: list[RoleGrant]) -> Jsonb:
    return to_jsonb(
        [
            {"role_id": str(g.role_id), "settings": g.settings, "settings_factory": g.settings_factory}
            for g in grants
        ]
    )


def encode_permission_grants(grants: list[PermissionGrant]) -> Jsonb:
    return to_jsonb(
        [
            {
                "permission_id": str(g.permission_id),
                "settings": g.settings,
                "settings_factory": g.settings_factory,
            }
            for g in grants
        ]
    )


def decode_role_grants(raw: list[dict[str, Any]] | None) -> list[RoleGrant]:
    return [
        RoleGrant(
            role_id=UUID(g["role_id"]),
            settings=g.get("settings"),
            settings_factory=g.get("settings_factory"),
        )
        for g in raw or []
    ]


def decode_permission_grants(raw: list[dict[str, Any]] | None) -> list[PermissionGrant]:
    return [
        PermissionGrant(
            permission_id=UUID(g["permission_id"]),
            settings=g.get("settings"),
            settings_factory=g.get("settings_factory"),
        )
        for g in raw or []
    ]
