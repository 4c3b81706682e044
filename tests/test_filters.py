import json

import pytest

from esquery.filters import (
    BoolClause,
    FilterWrap,
    bool_filter,
    compound_filter,
    filter_,
    has_child,
    has_parent,
    range_,
    to_jsonable,
)


def test_range_gt():
    f = range_().field("stock").gt(0)
    assert f.to_json_value() == {"range": {"stock": {"gt": 0}}}


def test_range_from_to():
    f = range_().field("created_at").from_("a").to("b")
    assert f.to_json_value()["range"]["created_at"] == {"from": "a", "to": "b"}


def test_range_bound_without_field_raises():
    with pytest.raises(ValueError):
        range_().lte(3)


def test_exists_and_missing():
    assert filter_().exists("repository.name").to_json_value() == {
        "exists": {"field": "repository.name"}
    }
    assert filter_().missing("repository.name").to_json_value() == {
        "missing": {"field": "repository.name"}
    }


def test_terms_accumulate():
    f = filter_().terms("user", "kimchy").terms("user", "elasticsearch", True)
    assert f.to_json_value()["terms"]["user"] == ["kimchy", "elasticsearch", True]


def test_terms_without_values_adds_nothing():
    assert filter_().terms("user").to_json_value() == {}


def test_compound_single_filter_unwrapped():
    f = filter_().exists("x")
    assert compound_filter(f).to_json_value() == f.to_json_value()


def test_compound_default_and():
    a = filter_().exists("x")
    b = filter_().missing("y")
    assert compound_filter(a, b).to_json_value() == {
        "and": [a.to_json_value(), b.to_json_value()]
    }


def test_compound_leading_or():
    a = filter_().terms("loc", "portland")
    b = filter_().terms("has_wiki", True)
    assert compound_filter("or", a, b).to_json_value() == {
        "or": [a.to_json_value(), b.to_json_value()]
    }


def test_bool_clause_enum_accepted():
    a, b = filter_().exists("x"), filter_().exists("y")
    out = compound_filter(BoolClause.OR, a, b).to_json_value()
    assert list(out) == ["or"]


def test_lone_string_is_kept_as_filter():
    assert compound_filter("or").to_json_value() == "or"


def test_empty_wrap_is_null():
    wrap = FilterWrap()
    assert wrap.to_json_value() is None
    assert str(wrap).startswith("fopv: 0:")


def test_wrap_bool_setter():
    wrap = compound_filter(filter_().exists("x"), filter_().exists("y"))
    wrap.bool("or")
    assert set(wrap.to_json_value()) == {"or"}


def test_has_child_omits_zero_counts():
    assert has_child("comment", 0, 0).to_json_value() == {"has_child": {"type": "comment"}}


def test_has_child_with_filter():
    op = has_child("comment", 1, 5)
    inner = filter_().exists("body")
    op.has_child_op.filter(inner)
    value = op.to_json_value()["has_child"]
    assert value["min_children"] == 1
    assert value["max_children"] == 5
    assert value["filter"] == inner.to_json_value()


def test_has_parent():
    op = has_parent("blog")
    op.has_parent_op.filter(filter_().exists("title"))
    value = op.to_json_value()["has_parent"]
    assert value["type"] == "blog"
    assert value["filter"] == {"exists": {"field": "title"}}


def test_bool_filter():
    op = bool_filter(1, 2.0)
    op.bool_op.add_should("user", "kimchy")
    op.bool_op.add_must("tag", "x")
    value = op.to_json_value()["bool"]
    assert value["should"] == [{"term": {"user": "kimchy"}}]
    assert value["must"] == [{"term": {"tag": "x"}}]
    assert value["minimum_should_match"] == 1


def test_add_merges_parts():
    base = filter_().exists("a")
    other = range_().field("n").gte(1).missing("b")
    base.add(other)
    value = base.to_json_value()
    assert value["missing"] == other.missing_val
    assert value["range"] == other.to_json_value()["range"]
    assert value["exists"] == {"field": "a"}


def test_to_jsonable_is_json_serialisable():
    wrap = compound_filter(range_().field("x").lt(5), filter_().exists("y"))
    data = to_jsonable({"filter": wrap})
    assert json.loads(json.dumps(data)) == data