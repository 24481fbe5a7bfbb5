"""Unit tests for preset checking and auto-fill."""

import pytest

from roleguard.domain.exceptions import NotAuthorizedError
from roleguard.domain.services.presets import (
    apply_presets,
    check_presets,
    is_unset,
    set_presets,
    validate_patch,
)


class TestCheckPresets:
    """Tests for check_presets."""

    def test_match(self) -> None:
        check = check_presets({"club": "exc", "name": "x"}, {"club": "exc"})
        assert check.match and not check.empty and not check.conflict

    def test_unset_field_is_fillable(self) -> None:
        check = check_presets({"name": "x"}, {"club": "exc"})
        assert not check.match
        assert check.empty
        assert not check.conflict
        assert check.fillable

    def test_empty_string_counts_as_unset(self) -> None:
        assert check_presets({"club": ""}, {"club": "exc"}).fillable

    def test_conflict(self) -> None:
        check = check_presets({"club": "dkc"}, {"club": "exc"})
        assert not check.match and not check.empty and check.conflict
        assert not check.fillable

    def test_nested_object(self) -> None:
        presets = {"adres": {"plaats": "Utrecht"}}
        assert check_presets({"adres": {"plaats": "Utrecht"}}, presets).match
        assert check_presets({"adres": {}}, presets).fillable
        assert check_presets({"adres": {"plaats": "Delft"}}, presets).conflict

    def test_partially_set_record(self) -> None:
        check = check_presets({"club": "exc"}, {"club": "exc", "team": "A1"})
        assert not check.match
        assert not check.empty
        assert check.fillable


def test_is_unset() -> None:
    assert is_unset(None) and is_unset("")
    assert not is_unset(0) and not is_unset(False) and not is_unset({})


def test_set_presets_fills_only_unset_fields() -> None:
    record = {"club": "", "team": "B2", "adres": {"straat": "Dorpsweg"}}
    set_presets(record, {"club": "exc", "team": "A1", "adres": {"plaats": "Utrecht"}})

    assert record == {
        "club": "exc",
        "team": "B2",
        "adres": {"straat": "Dorpsweg", "plaats": "Utrecht"},
    }


def test_set_presets_copies_template_values() -> None:
    presets = {"adres": {"plaats": "Utrecht"}}
    record: dict = {}
    set_presets(record, presets)
    record["adres"]["plaats"] = "Delft"

    assert presets == {"adres": {"plaats": "Utrecht"}}


class TestApplyPresets:
    """Tests for apply_presets over several templates."""

    def test_any_match_accepts_unchanged(self) -> None:
        record = {"club": "des"}
        apply_presets(record, [{"club": "exc"}, {"club": "des"}])
        assert record == {"club": "des"}

    def test_fills_from_first_fillable_template(self) -> None:
        record = {"name": "x"}
        apply_presets(record, [{"club": "exc"}, {"club": "des"}])
        assert record == {"name": "x", "club": "exc"}

    def test_skips_conflicting_template_when_filling(self) -> None:
        record = {"club": "des"}
        apply_presets(record, [{"club": "exc", "team": "A1"}, {"club": "des", "team": "B1"}])
        assert record == {"club": "des", "team": "B1"}

    def test_rejects_when_every_template_conflicts(self) -> None:
        record = {"club": "dkc"}
        with pytest.raises(NotAuthorizedError):
            apply_presets(record, [{"club": "exc"}, {"club": "des"}])
        assert record == {"club": "dkc"}


def test_validate_patch() -> None:
    presets = [{"club": "exc"}, {"club": "des"}]

    validate_patch({"name": "renamed"}, presets)
    validate_patch({"club": "des"}, presets)
    with pytest.raises(NotAuthorizedError):
        validate_patch({"club": "dkc"}, presets)
