"""Type mappings: mapping options, property discovery from dataclasses, upload."""

from __future__ import annotations

import dataclasses
import inspect
import json
import re
import types
import typing
from dataclasses import dataclass, field

from .filters import to_jsonable


def _opt(key, omitempty=True, **kwargs):
    """A dataclass field carrying its wire name and omit-when-empty flag."""
    return field(metadata={"wire": key, "omitempty": omitempty}, **kwargs)


def _encode_options(opts):
    out = {}
    for f in dataclasses.fields(opts):
        value = getattr(opts, f.name)
        if f.metadata.get("omitempty", True) and not value:
            continue
        out[f.metadata.get("wire", f.name)] = (
            list(value) if isinstance(value, (list, tuple)) else value
        )
    return out


@dataclass
class TimestampOptions:
    enabled: bool = _opt("enabled", omitempty=False, default=False)


@dataclass
class AnalyzerOptions:
    path: str = _opt("path", default="")
    index: str = _opt("index", default="")


@dataclass
class ParentOptions:
    type: str = _opt("type", omitempty=False, default="")


@dataclass
class RoutingOptions:
    required: bool = _opt("required", default=False)
    path: str = _opt("path", default="")


@dataclass
class SizeOptions:
    enabled: bool = _opt("enabled", default=False)
    store: bool = _opt("store", default=False)


@dataclass
class SourceOptions:
    enabled: bool = _opt("enabled", default=False)
    includes: list = _opt("includes", default_factory=list)
    excludes: list = _opt("excludes", default_factory=list)


@dataclass
class TypeOptions:
    store: bool = _opt("store", default=False)
    index: str = _opt("index", default="")


@dataclass
class IdOptions:
    index: str = _opt("index", default="")
    path: str = _opt("path", default="")


@dataclass
class MappingOptions:
    """The options of one type mapping, including its properties."""

    id: IdOptions = field(default_factory=IdOptions)
    timestamp: TimestampOptions = field(default_factory=TimestampOptions)
    analyzer: AnalyzerOptions | None = None
    parent: ParentOptions | None = None
    routing: RoutingOptions | None = None
    size: SizeOptions | None = None
    source: SourceOptions | None = None
    type: TypeOptions | None = None
    properties: dict | None = None

    def to_json_value(self):
        out = {
            "_id": _encode_options(self.id),
            "_timestamp": _encode_options(self.timestamp),
        }
        for key, value in (
            ("_analyzer", self.analyzer),
            ("_parent", self.parent),
            ("_routing", self.routing),
            ("_size", self.size),
            ("_source", self.source),
            ("_type", self.type),
        ):
            if value is not None:
                out[key] = _encode_options(value)
        out["properties"] = (
            to_jsonable(self.properties) if self.properties is not None else None
        )
        return out


class Mapping(dict):
    """Type name to mapping options."""

    def options(self):
        """Return the options of the (first) type in this mapping."""
        for value in self.values():
            return value
        raise ValueError(f"Malformed input: {dict(self)!r}")

    def to_json_value(self):
        return {key: to_jsonable(value) for key, value in self.items()}


def mapping_for_type(type_name, opts):
    return Mapping({type_name: opts})


def elastic_field(*, json_name=None, elastic="", embedded=False, **kwargs):
    """A dataclass field annotated with its JSON name and mapping attributes.

    ``elastic`` holds comma-separated ``key:value`` attributes; ``embedded``
    merges the properties of a dataclass-typed field into its parent.
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata.update({"json_name": json_name, "elastic": elastic, "embedded": embedded})
    return field(metadata=metadata, **kwargs)


def _split_tag(tag):
    tag = (tag or "").strip(" ")
    if not tag:
        return []
    return tag.split(",")


def _namespace(cls):
    """Names visible where ``cls`` was defined, for resolving string annotations."""
    module = inspect.getmodule(cls)
    namespace = dict(vars(module)) if module is not None else {}
    namespace.setdefault(cls.__name__, cls)
    return namespace


def _split_top_level(text, sep):
    parts, depth, current = [], 0, []
    for ch in text:
        if ch == "[":
            depth += 1
        elif ch == "]":
            depth -= 1
        if ch == sep and depth == 0:
            parts.append("".join(current).strip())
            current = []
        else:
            current.append(ch)
    parts.append("".join(current).strip())
    return parts


_WRAPPER = re.compile(r"^(?:typing\.)?(Optional|List|list)\[(.*)\]$", re.DOTALL)


def _lookup(name, namespace):
    head, *rest = name.split(".")
    if head not in namespace:
        return None
    obj = namespace[head]
    for attr in rest:
        obj = getattr(obj, attr, None)
        if obj is None:
            return None
    return obj


def _element_type_from_string(text, namespace):
    """Resolve a string annotation, unwrapping one level of Optional or list."""
    text = text.strip().strip("'\"")
    parts = [p for p in _split_top_level(text, "|") if p != "None"]
    if len(parts) != 1:
        return None
    if parts[0] != text:
        return _lookup(parts[0], namespace)
    match = _WRAPPER.match(text)
    if match:
        inner = match.group(2).strip()
        if match.group(1) == "Optional":
            return _lookup(inner, namespace)
        return _lookup(inner, namespace)
    return _lookup(text, namespace)


def _element_type(tp):
    """Unwrap one level of Optional or list, as a pointer or slice would be."""
    origin = typing.get_origin(tp)
    if origin in (typing.Union, types.UnionType):
        args = [a for a in typing.get_args(tp) if a is not type(None)]
        return args[0] if len(args) == 1 else tp
    if origin is list:
        args = typing.get_args(tp)
        return args[0] if args else tp
    return tp


def _field_target(f, namespace):
    if isinstance(f.type, str):
        return _element_type_from_string(f.type, namespace)
    return _element_type(f.type)


def get_properties(cls, prop):
    """Collect mapping properties of the dataclass ``cls`` into ``prop``."""
    if not isinstance(cls, type):
        cls = type(cls)
    if not dataclasses.is_dataclass(cls):
        raise TypeError(f"{cls.__name__} is not a dataclass")
    namespace = _namespace(cls)
    for f in dataclasses.fields(cls):
        name = (f.metadata.get("json_name") or "").split(",")[0]
        if name == "-":
            continue
        if not name:
            name = f.name

        attrs = {}
        for attr in _split_tag(f.metadata.get("elastic", "")):
            parts = attr.split(":")
            if len(parts) < 2:
                raise ValueError(
                    f"malformed elastic attribute {attr!r} on field {f.name}"
                )
            attrs[parts[0]] = parts[1]

        if not attrs or attrs.get("type") == "nested":
            target = _field_target(f, namespace)
            if isinstance(target, type) and dataclasses.is_dataclass(target):
                if f.metadata.get("embedded"):
                    get_properties(target, prop)
                else:
                    inner = {}
                    get_properties(target, inner)
                    attrs["properties"] = inner
        if attrs:
            prop[name] = attrs
    return prop


def put_mapping(conn, index, type_name, instance, opt):
    """Upload a mapping built from ``opt`` and the fields of a dataclass."""
    target = instance if isinstance(instance, type) else type(instance)
    if not dataclasses.is_dataclass(target):
        raise TypeError("instance kind was not struct")
    properties = dict(opt.properties) if opt.properties is not None else {}
    get_properties(target, properties)
    opt = dataclasses.replace(opt, properties=properties)
    body = json.dumps(to_jsonable(mapping_for_type(type_name, opt)))
    conn.do_command("PUT", f"/{index}/{type_name}/_mapping", None, body)


def put_mapping_from_json(conn, index, type_name, mapping):
    """Upload a mapping given as raw JSON, without checking its structure."""
    if isinstance(mapping, (bytes, bytearray)):
        mapping = mapping.decode("utf-8")
    conn.do_command("PUT", f"/{index}/{type_name}/_mapping", None, mapping)