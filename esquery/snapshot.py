"""Snapshot repositories: create, take, restore and list snapshots."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from datetime import datetime

logger = logging.getLogger(__name__)

_RFC3339 = re.compile(
    r"(\d{4}-\d{2}-\d{2})[Tt ](\d{2}:\d{2}:\d{2})(?:\.(\d+))?([Zz]|[+-]\d{2}:\d{2})$"
)


def _parse_time(text):
    if text is None:
        return None
    match = _RFC3339.match(text)
    if not match:
        raise ValueError(f"invalid timestamp: {text!r}")
    date, clock, frac, zone = match.groups()
    micro = (frac or "")[:6].ljust(6, "0")
    if zone in ("Z", "z"):
        zone = "+00:00"
    return datetime.fromisoformat(f"{date}T{clock}.{micro}{zone}")


def _decode(body):
    if isinstance(body, (bytes, bytearray)):
        body = body.decode("utf-8")
    return json.loads(body)


@dataclass
class SnapshotInfo:
    """One snapshot held in a repository."""

    snapshot: str = ""
    indices: list = field(default_factory=list)
    state: str = ""
    start_time: datetime | None = None
    end_time: datetime | None = None

    @classmethod
    def from_json(cls, data):
        return cls(
            snapshot=data.get("snapshot", ""),
            indices=list(data.get("indices") or []),
            state=data.get("state", ""),
            start_time=_parse_time(data.get("start_time")),
            end_time=_parse_time(data.get("end_time")),
        )


@dataclass
class GetSnapshotsResponse:
    """The snapshots listed by a repository."""

    snapshots: list = field(default_factory=list)

    @classmethod
    def from_json(cls, data):
        return cls(
            snapshots=[SnapshotInfo.from_json(s) for s in data.get("snapshots") or []]
        )


def create_snapshot_repository(conn, name, args, settings):
    """Create a snapshot repository on the cluster."""
    return _decode(conn.do_command("POST", f"/_snapshot/{name}", args, settings))


def take_snapshot(conn, repository, name, args, query):
    """Take a named snapshot into an existing repository."""
    return _decode(
        conn.do_command("PUT", f"/_snapshot/{repository}/{name}", args, query)
    )


def restore_snapshot(conn, repository, name, args, query):
    """Restore a named snapshot from an existing repository."""
    body = conn.do_command("POST", f"/_snapshot/{repository}/{name}/_restore", args, query)
    logger.debug("restore response: %r", body)
    return _decode(body)


def _get_snapshots(conn, repository, name, args):
    body = conn.do_command("GET", f"/_snapshot/{repository}/{name}", args, None)
    return GetSnapshotsResponse.from_json(_decode(body))


def get_snapshot_by_name(conn, repository, name, args):
    """Return the snapshots of a repository that carry the given name."""
    return _get_snapshots(conn, repository, name, args)


def get_snapshots(conn, repository, args):
    """Return every snapshot of a repository."""
    return _get_snapshots(conn, repository, "_all", args)