"""Unit tests for record_repository._build_record_filter."""

from uuid import uuid4

import pytest

from roleguard.domain.exceptions import ValidationError
from roleguard.infrastructure.persistence.postgres.record_repository import (
    _build_record_filter,
)


def _objs(params: list) -> list:
    return [getattr(p, "obj", p) for p in params]


class TestBuildRecordFilter:
    """Tests for _build_record_filter."""

    def test_empty_filter(self) -> None:
        assert _build_record_filter({}) == ("TRUE", [])

    def test_equality_uses_containment(self) -> None:
        sql, params = _build_record_filter({"club": "exc"})
        assert sql == "data @> %s"
        assert _objs(params) == [{"club": "exc"}]

    def test_dotted_path_nests(self) -> None:
        sql, params = _build_record_filter({"adres.plaats": "Utrecht"})
        assert sql == "data @> %s"
        assert _objs(params) == [{"adres": {"plaats": "Utrecht"}}]

    def test_none_contains_explicit_null(self) -> None:
        sql, params = _build_record_filter({"nick": None})
        assert sql == "data @> %s"
        assert _objs(params) == [{"nick": None}]

    def test_id_uses_column(self) -> None:
        record_id = uuid4()
        sql, params = _build_record_filter({"id": record_id})
        assert sql == "id = %s"
        assert params == [record_id]

    def test_id_in(self) -> None:
        ids = [uuid4(), uuid4()]
        sql, params = _build_record_filter({"id": {"$in": ids}})
        assert sql == "id = ANY(%s)"
        assert params == [ids]

    def test_in_on_field(self) -> None:
        sql, params = _build_record_filter({"club": {"$in": ["exc", "des"]}})
        assert sql == "(data @> %s OR data @> %s)"
        assert _objs(params) == [{"club": "exc"}, {"club": "des"}]

    def test_empty_in_matches_nothing(self) -> None:
        assert _build_record_filter({"club": {"$in": []}}) == ("FALSE", [])

    def test_top_level_keys_are_anded(self) -> None:
        sql, params = _build_record_filter({"club": "exc", "name": "Anna"})
        assert sql == "(data @> %s AND data @> %s)"
        assert _objs(params) == [{"club": "exc"}, {"name": "Anna"}]

    def test_and_of_or(self) -> None:
        record_id = uuid4()
        sql, params = _build_record_filter(
            {"$and": [{"id": record_id}, {"$or": [{"club": "exc"}, {"club": "des"}]}]}
        )
        assert sql == "(id = %s AND (data @> %s OR data @> %s))"
        assert _objs(params) == [record_id, {"club": "exc"}, {"club": "des"}]

    def test_empty_logical_lists(self) -> None:
        assert _build_record_filter({"$and": []}) == ("TRUE", [])
        assert _build_record_filter({"$or": []}) == ("FALSE", [])

    def test_plain_object_value_is_containment(self) -> None:
        sql, params = _build_record_filter({"adres": {"plaats": "Utrecht"}})
        assert sql == "data @> %s"
        assert _objs(params) == [{"adres": {"plaats": "Utrecht"}}]

    @pytest.mark.parametrize(
        "filter",
        [
            {"$nor": []},
            {"club": {"$ne": "exc"}},
            {"club": {"$in": "exc"}},
            {"$or": {"club": "exc"}},
        ],
    )
    def test_unsupported_filters_rejected(self, filter: dict) -> None:
        with pytest.raises(ValidationError):
            _build_record_filter(filter)
