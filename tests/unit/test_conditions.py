"""Unit tests for ACL conditions and scoped filters."""

from roleguard.domain.services.conditions import (
    AclScopedFilter,
    combine_conditions,
    decoration_component,
)


def test_decoration_component_collects_values() -> None:
    decorations = [{"conditions": {"club": "exc"}}, {"conditions": {"club": "des"}, "x": 1}]
    assert decoration_component(decorations, "conditions") == [{"club": "exc"}, {"club": "des"}]


def test_decoration_component_unrestricted() -> None:
    assert decoration_component(None, "presets") is None
    assert decoration_component([], "presets") is None
    # one decoration without the component lifts the restriction
    assert decoration_component([{"presets": {"club": "exc"}}, {}], "presets") is None


def test_combine_conditions() -> None:
    assert combine_conditions([{"club": "exc"}]) == {"club": "exc"}
    assert combine_conditions([{"club": "exc"}, {"club": "des"}]) == {
        "$or": [{"club": "exc"}, {"club": "des"}]
    }


def test_scoped_filter_shapes() -> None:
    assert AclScopedFilter().to_filter() == {}
    assert AclScopedFilter(base={"name": "x"}).to_filter() == {"name": "x"}
    assert AclScopedFilter(acl=({"club": "exc"},)).to_filter() == {"club": "exc"}
    assert AclScopedFilter(base={"name": "x"}, acl=({"club": "exc"}, {"club": "des"})).to_filter() == {
        "$and": [{"name": "x"}, {"$or": [{"club": "exc"}, {"club": "des"}]}]
    }
