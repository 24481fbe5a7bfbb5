"""Merging of permission decorations without duplicates."""

import json
from collections.abc import Mapping, Sequence
from typing import Any

from roleguard.domain.entities import Decoration

DecorationMap = dict[str, list[Decoration]]


def decoration_key(decoration: Mapping[str, Any]) -> str:
    """Canonical serialization; equal for structurally equal decorations."""
    return json.dumps(decoration, sort_keys=True, separators=(",", ":"), default=str)


def merge_decoration_list(
    existing: Sequence[Decoration] | None,
    incoming: Sequence[Decoration],
) -> list[Decoration] | None:
    """Append incoming decorations not already present, keeping first-seen order.

    Returns None when there is nothing recorded yet and nothing incoming,
    so callers can tell "no decorations" apart from an empty grant.
    """
    if existing is None:
        return list(incoming) if incoming else None

    merged = list(existing)
    seen = {decoration_key(d) for d in merged}
    for decoration in incoming:
        key = decoration_key(decoration)
        if key not in seen:
            seen.add(key)
            merged.append(decoration)
    return merged


def merge_decoration_maps(set_a: Mapping[str, Sequence[Decoration]], set_b: Mapping[str, Sequence[Decoration]]) -> DecorationMap:
    """Merge two name -> decorations maps. Inputs are left untouched."""
    result: DecorationMap = {name: list(decorations) for name, decorations in set_a.items()}
    for name, decorations in set_b.items():
        merged = merge_decoration_list(result.get(name), decorations)
        if merged is not None:
            result[name] = merged
    return result
