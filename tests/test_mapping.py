import json
from dataclasses import dataclass

import pytest

from esquery.mapping import (
    IdOptions,
    Mapping,
    MappingOptions,
    ParentOptions,
    SourceOptions,
    TimestampOptions,
    elastic_field,
    get_properties,
    mapping_for_type,
    put_mapping,
    put_mapping_from_json,
)


class FakeConn:
    def __init__(self, response=b"{}"):
        self.response = response
        self.calls = []

    def do_command(self, method, url, args, body):
        self.calls.append((method, url, args, body))
        return self.response


@dataclass
class Embedded:
    embedded_field: str = elastic_field(
        json_name="embeddedField", elastic="type:string", default=""
    )


@dataclass
class InnerStruct:
    inner_field: str = elastic_field(
        json_name="innerField", elastic="type:date", default=""
    )


@dataclass
class NestedStruct:
    inner_field: str = elastic_field(
        json_name="innerField", elastic="type:date", default=""
    )


@dataclass
class SampleDoc:
    id: str = elastic_field(json_name="id", elastic="index:not_analyzed", default="")
    dont_index: str = elastic_field(json_name="dontIndex", elastic="index:no", default="")
    number: int = elastic_field(
        json_name="number", elastic="type:integer,index:analyzed", default=0
    )
    omitted: str = elastic_field(json_name="-", default="")
    NoJson: str = elastic_field(elastic="type:string", default="")
    _unexported: str = ""
    json_omit_empty: str = elastic_field(
        json_name="jsonOmitEmpty,omitempty", elastic="type:string", default=""
    )
    embedded: Embedded = elastic_field(embedded=True, default_factory=Embedded)
    inner: InnerStruct = elastic_field(json_name="inner", default_factory=InnerStruct)
    inner_p: InnerStruct | None = elastic_field(json_name="pointer_to_inner", default=None)
    inner_s: list[InnerStruct] = elastic_field(
        json_name="slice_of_inner", default_factory=list
    )
    multi_analyze: str = elastic_field(json_name="multi_analyze", default="")
    nested_object: NestedStruct = elastic_field(
        json_name="nestedObject", elastic="type:nested", default_factory=NestedStruct
    )


@dataclass
class EmptyElasticTag:
    field: str = elastic_field(json_name="field", elastic="", default="")


@dataclass
class BadTag:
    field: str = elastic_field(json_name="field", elastic="noseparator", default="")


MULTI_ANALYZE = {
    "type": "multi_field",
    "fields": {
        "ma_analyzed": {"type": "string", "index": "analyzed"},
        "ma_notanalyzed": {"type": "string", "index": "not_analyzed"},
    },
}


def test_put_mapping():
    conn = FakeConn()
    options = MappingOptions(
        timestamp=TimestampOptions(enabled=True),
        id=IdOptions(index="analyzed", path="id"),
        parent=ParentOptions(type="testParent"),
        properties={"multi_analyze": MULTI_ANALYZE},
    )
    put_mapping(conn, "myIndex", "myType", SampleDoc(), options)

    expected = {
        "myType": {
            "_id": {"index": "analyzed", "path": "id"},
            "_timestamp": {"enabled": True},
            "_parent": {"type": "testParent"},
            "properties": {
                "NoJson": {"type": "string"},
                "dontIndex": {"index": "no"},
                "embeddedField": {"type": "string"},
                "id": {"index": "not_analyzed"},
                "jsonOmitEmpty": {"type": "string"},
                "number": {"index": "analyzed", "type": "integer"},
                "multi_analyze": MULTI_ANALYZE,
                "inner": {"properties": {"innerField": {"type": "date"}}},
                "pointer_to_inner": {"properties": {"innerField": {"type": "date"}}},
                "slice_of_inner": {"properties": {"innerField": {"type": "date"}}},
                "nestedObject": {
                    "type": "nested",
                    "properties": {"innerField": {"type": "date"}},
                },
            },
        }
    }
    assert len(conn.calls) == 1
    method, url, args, body = conn.calls[0]
    assert method == "PUT"
    assert url == "/myIndex/myType/_mapping"
    assert args is None
    assert json.loads(body) == expected


def test_put_mapping_does_not_change_callers_properties():
    conn = FakeConn()
    props = {"multi_analyze": MULTI_ANALYZE}
    options = MappingOptions(properties=props)
    put_mapping(conn, "i", "t", SampleDoc, options)
    assert props == {"multi_analyze": MULTI_ANALYZE}
    assert options.properties is props


def test_put_mapping_rejects_non_dataclass():
    with pytest.raises(TypeError, match="instance kind was not struct"):
        put_mapping(FakeConn(), "i", "t", {"a": 1}, MappingOptions())


def test_put_mapping_from_json():
    conn = FakeConn()
    options = """{
        "myType": {
            "_id": {"index": "analyzed", "path": "id"},
            "_timestamp": {"enabled": true},
            "_parent": {"type": "testParent"},
            "properties": {
                "analyzed_string": {"type": "string", "index": "analyzed"},
                "multi_analyze": {
                    "type": "multi_field",
                    "fields": {
                        "ma_analyzed": {"type": "string", "index": "analyzed"},
                        "ma_notanalyzed": {"type": "string", "index": "not_analyzed"}
                    }
                }
            }
        }
    }"""
    expected = {
        "myType": {
            "_timestamp": {"enabled": True},
            "_id": {"index": "analyzed", "path": "id"},
            "_parent": {"type": "testParent"},
            "properties": {
                "analyzed_string": {"type": "string", "index": "analyzed"},
                "multi_analyze": MULTI_ANALYZE,
            },
        }
    }
    put_mapping_from_json(conn, "myIndex", "myType", options.encode("utf-8"))
    method, url, _args, body = conn.calls[0]
    assert method == "PUT"
    assert url == "/myIndex/myType/_mapping"
    assert json.loads(body) == expected


def test_empty_elastic_tag_is_accepted():
    properties = {}
    get_properties(EmptyElasticTag, properties)
    assert properties == {}


def test_malformed_elastic_attribute_raises():
    with pytest.raises(ValueError):
        get_properties(BadTag, {})


def test_mapping_options_defaults_to_json():
    assert MappingOptions().to_json_value() == {
        "_id": {},
        "_timestamp": {"enabled": False},
        "properties": None,
    }


def test_mapping_options_optional_parts():
    opts = MappingOptions(source=SourceOptions(enabled=True, includes=["a", "b"]))
    value = opts.to_json_value()
    assert value["_source"] == {"enabled": True, "includes": ["a", "b"]}
    assert "_parent" not in value


def test_mapping_for_type_and_options():
    opts = MappingOptions(parent=ParentOptions(type="p"))
    mapping = mapping_for_type("t", opts)
    assert mapping.options() is opts
    assert mapping.to_json_value()["t"]["_parent"] == {"type": "p"}


def test_empty_mapping_options_raises():
    with pytest.raises(ValueError, match="Malformed input"):
        Mapping().options()