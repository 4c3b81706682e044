import json

from esquery.facet import RangeVal, facet, facet_range
from esquery.filters import filter_
from esquery.query import new_term


def test_fields_facet_with_size():
    out = facet().fields("type").size("25").to_json_value()
    assert out == {"type": {"terms": {"field": "type", "size": "25"}}}


def test_multiple_fields_keyed_by_first():
    out = facet().fields("actor", "repo").to_json_value()
    assert out == {"actor": {"terms": {"fields": ["actor", "repo"]}}}


def test_fields_without_arguments_is_noop():
    f = facet()
    assert f.fields() is f
    assert f.to_json_value() == {}


def test_regex_facet():
    out = facet().regex("repository.name", "no.*").size("8").to_json_value()
    assert out == {
        "repository.name": {
            "terms": {"field": "repository.name", "regex": "no.*", "size": "8"}
        }
    }


def test_size_change_applies_on_serialisation():
    f = facet().fields("type").size("25")
    f.to_json_value()
    f.size("10")
    assert f.to_json_value()["type"]["terms"]["size"] == "10"


def test_term_facet_keyed_by_first_field():
    t = new_term("user").filter(filter_().exists("user"))
    out = facet().term(t).to_json_value()
    assert out["user"]["terms"] == {"field": "user"}
    assert out["user"]["facet_filter"] == {"exists": {"field": "user"}}


def test_range_facet():
    r = facet_range("price").range("1", "10").range("", "5")
    out = facet().range(r).to_json_value()
    assert out == {
        "price": {
            "range": {
                "field": "price",
                "ranges": [{"from": "1", "to": "10"}, {"to": "5"}],
            }
        }
    }


def test_range_filter_and_json_round_trip():
    r = facet_range("price").range("1", "2").filter(filter_().missing("x"))
    value = r.to_json_value()
    assert json.loads(json.dumps(value)) == value
    assert value["facet_filter"] == {"missing": {"field": "x"}}


def test_range_val_omits_empty_bounds():
    assert RangeVal().to_json_value() == {}