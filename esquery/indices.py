"""Index administration calls: create, delete, open, close, flush and friends."""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Mapping
from dataclasses import dataclass, field

from .filters import to_jsonable
from .request import NotFoundError


@dataclass
class Token:
    """One token produced by the analyzer."""

    name: str = ""
    start_offset: int = 0
    end_offset: int = 0
    type: str = ""
    position: int = 0

    @classmethod
    def from_json(cls, data):
        return cls(
            name=data.get("token", ""),
            start_offset=data.get("start_offset", 0),
            end_offset=data.get("end_offset", 0),
            type=data.get("type", ""),
            position=data.get("position", 0),
        )


@dataclass
class AnalyzeResponse:
    """The token breakdown of an analyzed text."""

    tokens: list = field(default_factory=list)

    @classmethod
    def from_json(cls, data):
        return cls(tokens=[Token.from_json(t) for t in data.get("tokens") or []])


def _decode(body):
    if isinstance(body, (bytes, bytearray)):
        body = body.decode("utf-8")
    return json.loads(body)


def _settings_body(settings):
    if dataclasses.is_dataclass(settings) and not isinstance(settings, type):
        if callable(getattr(settings, "to_json_value", None)):
            value = to_jsonable(settings)
        else:
            value = to_jsonable(dataclasses.asdict(settings))
    else:
        value = to_jsonable(settings)
    return json.dumps(value).encode("utf-8")


def _is_struct(value):
    if isinstance(value, type):
        return False
    return dataclasses.is_dataclass(value) or callable(
        getattr(value, "to_json_value", None)
    )


def _joined(indices):
    return ",".join(indices)


def analyze_indices(conn, index, args):
    """Run the analyzer over ``args["text"]`` and return the tokens."""
    text = (args or {}).get("text")
    if not isinstance(text, str) or not text:
        raise ValueError("text to analyze must not be blank")
    url = f"/{index}/_analyze" if index else "/_analyze"
    body = conn.do_command("GET", url, args, None)
    return AnalyzeResponse.from_json(_decode(body))


def clear_cache(conn, clear_id, clear_bloom, args, *indices):
    """Clear all caches, or those of the given indices."""
    if indices:
        url = f"/{_joined(indices)}/_cache/clear"
    else:
        url = "/_cache/clear"
    return _decode(conn.do_command("POST", url, args, None))


def create_index(conn, index):
    """Create an index."""
    if not index:
        raise ValueError("You must specify an index to create")
    return _decode(conn.do_command("PUT", f"/{index}", None, None))


def create_index_with_settings(conn, index, settings):
    """Create an index with the given settings (a mapping or a dataclass)."""
    if not (isinstance(settings, Mapping) or _is_struct(settings)):
        raise TypeError("Settings kind was not struct or map")
    request_body = _settings_body(settings)
    if not index:
        raise ValueError("You must specify an index to create")
    return _decode(conn.do_command("PUT", f"/{index}", None, request_body))


def delete_index(conn, index):
    """Delete an index."""
    if not index:
        raise ValueError("You must specify at least one index to delete")
    return _decode(conn.do_command("DELETE", f"/{index}", None, None))


def delete_mapping(conn, index, type_name):
    """Delete the mapping of a type from an index."""
    if not index:
        raise ValueError("You must specify at least one index to delete a mapping from")
    if not type_name:
        raise ValueError("You must specify at least one mapping to delete")
    return _decode(conn.do_command("DELETE", f"/{index}/{type_name}", None, None))


def flush(conn, *indices):
    """Flush the given indices, or all of them."""
    url = f"/{_joined(indices)}/_flush" if indices else "/_flush"
    return _decode(conn.do_command("POST", url, None, None))


def indices_exists(conn, *indices):
    """Return whether the indices exist; other server errors are raised."""
    url = f"/{_joined(indices)}" if indices else ""
    try:
        conn.do_command("HEAD", url, None, None)
    except NotFoundError:
        return False
    return True


def _open_close(conn, index, mode):
    url = f"/{index}/{mode}" if index else f"/{mode}"
    return _decode(conn.do_command("POST", url, None, None))


def open_indices(conn):
    return _open_close(conn, "_all", "_open")


def close_indices(conn):
    return _open_close(conn, "_all", "_close")


def open_index(conn, index):
    return _open_close(conn, index, "_open")


def close_index(conn, index):
    return _open_close(conn, index, "_close")


def optimize_indices(conn, args, *indices):
    """Optimize the given indices, or all of them."""
    url = f"/{_joined(indices)}/_optimize" if indices else "/_optimize"
    return _decode(conn.do_command("POST", url, args, None))


def put_settings(conn, index, settings):
    """Update the settings of an index; ``settings`` must be a structured object."""
    if not _is_struct(settings):
        raise TypeError("Settings kind was not struct")
    url = f"/{index}/_settings" if index else "/_settings"
    request_body = _settings_body(settings)
    return _decode(conn.do_command("PUT", url, None, request_body))


def refresh(conn, *indices):
    """Refresh the given indices, or all of them."""
    url = f"/{_joined(indices)}/_refresh" if indices else "/_refresh"
    return _decode(conn.do_command("POST", url, None, None))


def snapshot(conn, *indices):
    """Take a gateway snapshot of the given indices, or all of them."""
    if indices:
        url = f"/{_joined(indices)}/_gateway/snapshot"
    else:
        url = "/_gateway/snapshot"
    return _decode(conn.do_command("POST", url, None, None))


def status(conn, args, *indices):
    """Return status details of the given indices, or all of them."""
    url = f"/{_joined(indices)}/_status" if indices else "/_status"
    return _decode(conn.do_command("GET", url, args, None))