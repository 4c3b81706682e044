"""HTTP request objects and URL query-argument encoding."""

from __future__ import annotations

import json
import logging
import math
import urllib.request
from decimal import Decimal
from urllib.error import HTTPError
from urllib.parse import urlencode, urlsplit

from .filters import to_jsonable

logger = logging.getLogger(__name__)


class NotFoundError(Exception):
    """Raised when the server answers with HTTP 404."""

    def __init__(self, body=b""):
        super().__init__("record not found")
        self.body = body


class Request:
    """A single HTTP request against the search server."""

    def __init__(self, method, url, *, headers=None, opener=None, timeout=None):
        self.method = method.upper()
        self.url = url
        self.headers = dict(headers or {})
        self.body = None
        self.content_length = 0
        self.opener = opener or urllib.request.build_opener()
        self.timeout = timeout

    def set_body_json(self, data):
        """Serialise ``data`` as indented JSON and use it as the body."""
        body = json.dumps(to_jsonable(data), indent=2).encode("utf-8")
        self.set_body_bytes(body)
        # only queries are of interest, not the indexing of documents
        if urlsplit(self.url).path.endswith("_search"):
            logger.info(
                '{"method": %s, "url": %s, "body": %s}',
                json.dumps(self.method),
                json.dumps(self.url),
                body.decode("utf-8"),
            )
        self.headers["Content-Type"] = "application/json"

    def set_body_string(self, body):
        self.set_body(body)

    def set_body_bytes(self, body):
        self.set_body(body)

    def set_body(self, body):
        """Use ``body`` (str, bytes or a readable file object) as the request body."""
        if body is None:
            self.body = None
            return
        if hasattr(body, "read"):
            body = body.read()
        if isinstance(body, str):
            data = body.encode("utf-8")
        elif isinstance(body, (bytes, bytearray, memoryview)):
            data = bytes(body)
        else:
            raise TypeError(f"unsupported body type: {type(body).__name__}")
        self.body = data
        self.content_length = len(data)

    def do(self):
        """Send the request; return ``(status, body)``."""
        status, _headers, body = self.do_response()
        return status, body

    def do_response(self):
        """Send the request; return ``(status, headers, body)``.

        Raises NotFoundError when the server answers 404.
        """
        req = urllib.request.Request(
            self.url, data=self.body, headers=self.headers, method=self.method
        )
        try:
            if self.timeout is None:
                response = self.opener.open(req)
            else:
                response = self.opener.open(req, timeout=self.timeout)
            with response:
                status = response.status
                headers = response.headers
                body = response.read()
        except HTTPError as err:
            with err:
                status = err.code
                headers = err.headers
                body = err.read()
        if status == 404:
            raise NotFoundError(body)
        return status, headers, body


def _format_float(value):
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _format_arg(key, value):
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        return ",".join(value)
    raise ValueError(f"Could not format URL argument: {key}")


def escape(args):
    """Encode a mapping of arguments as a URL query string, sorted by key."""
    if not args:
        return ""
    return urlencode([(key, _format_arg(key, args[key])) for key in sorted(args)])