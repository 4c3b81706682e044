"""The search builder, the entry point of the search DSL."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass

from .filters import FilterWrap, to_jsonable
from .query import query

logger = logging.getLogger(__name__)


@dataclass
class SourceFilter:
    include: list | None = None
    exclude: list | None = None

    def to_json_value(self):
        out = {}
        if self.include:
            out["include"] = list(self.include)
        if self.exclude:
            out["exclude"] = list(self.exclude)
        return out


class SearchDsl:
    """Chainable builder for a search request against one index."""

    def __init__(self, index):
        self.index = index
        self.args = {}
        self.types = []
        self.from_val = 0
        self.size_val = 0
        self.facet_val = None
        self.query_val = None
        self.sort_body = None
        self.filter_val = None
        self.aggregates_val = {}
        self.source_filter = None

    def bytes(self, conn):
        """Send the search through ``conn`` and return the raw response body."""
        return conn.do_command("POST", self.url(), self.args, self)

    def result(self, conn):
        """Send the search and return the decoded JSON response."""
        body = self.bytes(conn)
        try:
            return json.loads(body)
        except ValueError as err:
            logger.error("%s \n\t%r", err, body)
            raise

    def url(self):
        return f"/{self.index}{self._type_path()}/_search"

    def _type_path(self):
        if self.types:
            return "/" + ",".join(self.types)
        return ""

    def pretty(self):
        self.args["pretty"] = "1"
        return self

    def type(self, index_type):
        self.types.append(index_type)
        return self

    def from_(self, value):
        self.args["from"] = value
        return self

    def search(self, srch):
        """Simple query-string search."""
        self.query_val = query().search(srch)
        return self

    def size(self, size):
        self.args["size"] = size
        return self

    def fields(self, *args):
        self.args["fields"] = ",".join(args)
        return self

    def source(self, return_source):
        self.args["_source"] = "true" if return_source else "false"
        return self

    def facet(self, facet_dsl):
        self.facet_val = facet_dsl
        return self

    def aggregates(self, *args):
        for agg in args:
            self.aggregates_val[agg.name] = agg
        return self

    def query(self, query_dsl):
        self.query_val = query_dsl
        return self

    def filter(self, *args):
        """Add filters; a leading "and"/"or" chooses how several are joined."""
        if self.filter_val is None:
            self.filter_val = FilterWrap()
        self.filter_val.add_filters(args)
        return self

    def sort(self, *args):
        if self.sort_body is None:
            self.sort_body = []
        self.sort_body.extend(args)
        return self

    def scroll(self, duration):
        self.args["scroll"] = duration
        return self

    def search_type(self, search_type):
        self.args["search_type"] = search_type
        return self

    def add_query_param(self, name, value):
        """Add a custom URL query parameter."""
        self.args[name] = value
        return self

    def to_json_value(self):
        out = {}
        if self.from_val:
            out["from"] = self.from_val
        if self.size_val:
            out["size"] = self.size_val
        if self.facet_val is not None:
            out["facets"] = self.facet_val.to_json_value()
        if self.query_val is not None:
            out["query"] = self.query_val.to_json_value()
        if self.sort_body:
            out["sort"] = [to_jsonable(s) for s in self.sort_body]
        if self.filter_val is not None:
            out["filter"] = self.filter_val.to_json_value()
        if self.aggregates_val:
            out["aggregations"] = {
                name: agg.to_json_value() for name, agg in self.aggregates_val.items()
            }
        if self.source_filter is not None:
            out["_source"] = self.source_filter.to_json_value()
        return out


def search(index):
    return SearchDsl(index)