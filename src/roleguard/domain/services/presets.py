"""Field presets applied on record writes.

A preset template names fields and the values a write must carry. Unset
fields are candidates for auto-fill; set fields must equal the template.
Nested objects are compared field by field.
"""

import copy
from collections.abc import Mapping, MutableMapping, Sequence
from dataclasses import dataclass
from typing import Any

from roleguard.domain.exceptions import NotAuthorizedError


@dataclass(frozen=True)
class PresetCheck:
    """Outcome of comparing one record against one preset template.

    ``match``: every templated field is set and equal.
    ``empty``: every templated field is unset.
    ``conflict``: some set field differs from the template.
    """

    match: bool
    empty: bool
    conflict: bool

    @property
    def fillable(self) -> bool:
        """Not matching only because fields are unset."""
        return not self.match and not self.conflict


def is_unset(value: Any) -> bool:
    return value is None or value == ""


def check_presets(record: Mapping[str, Any], presets: Mapping[str, Any]) -> PresetCheck:
    match, empty, conflict = True, True, False
    for key, preset in presets.items():
        value = record.get(key)
        if is_unset(value):
            match = match and is_unset(preset)
            continue
        if isinstance(value, Mapping) and isinstance(preset, Mapping):
            nested = check_presets(value, preset)
            match = match and nested.match
            empty = empty and nested.empty
            conflict = conflict or nested.conflict
        else:
            empty = False
            if value != preset:
                match = False
                conflict = True
    return PresetCheck(match=match, empty=empty, conflict=conflict)


def set_presets(record: MutableMapping[str, Any], presets: Mapping[str, Any]) -> None:
    """Fill unset fields of ``record`` from ``presets``, recursing into objects."""
    for key, preset in presets.items():
        value = record.get(key)
        if is_unset(value):
            record[key] = copy.deepcopy(preset)
        elif isinstance(value, MutableMapping) and isinstance(preset, Mapping):
            set_presets(value, preset)


def apply_presets(record: MutableMapping[str, Any], preset_sets: Sequence[Mapping[str, Any]]) -> None:
    """Accept the record if any template matches, else fill from the first fillable one.

    Raises NotAuthorizedError when every template conflicts with a set field.
    """
    checks = [check_presets(record, presets) for presets in preset_sets]
    if any(check.match for check in checks):
        return
    for presets, check in zip(preset_sets, checks):
        if check.fillable:
            set_presets(record, presets)
            return
    raise NotAuthorizedError("not authorized")


def validate_patch(patch: Mapping[str, Any], preset_sets: Sequence[Mapping[str, Any]]) -> None:
    """Reject a partial update only if it sets a field against every template."""
    if all(check_presets(patch, presets).conflict for presets in preset_sets):
        raise NotAuthorizedError("not authorized")
