"""Query clauses of the search DSL."""

from __future__ import annotations

from dataclasses import dataclass, field as dc_field

from .filters import FilterWrap, to_jsonable


@dataclass
class MultiMatch:
    query: str
    fields: list | None = None


@dataclass
class MatchAll:
    all: str = ""


@dataclass
class QueryString:
    default_operator: str = ""
    default_field: str = ""
    query: str = ""
    exists: str = ""
    missing: str = ""
    fields: list | None = None

    def to_json_value(self):
        out = {}
        if self.default_operator:
            out["default_operator"] = self.default_operator
        if self.default_field:
            out["default_field"] = self.default_field
        if self.query:
            out["query"] = self.query
        if self.exists:
            out["_exists_"] = self.exists
        if self.missing:
            out["_missing_"] = self.missing
        if self.fields:
            out["fields"] = list(self.fields)
        return out


@dataclass
class Terms:
    fields: list = dc_field(default_factory=list)
    size: str = ""
    regex: str = ""

    def to_json_value(self):
        out = {}
        if len(self.fields) == 1:
            out["field"] = self.fields[0]
        elif len(self.fields) > 1:
            out["fields"] = list(self.fields)
        if self.regex:
            out["regex"] = self.regex
        if self.size:
            out["size"] = self.size
        return out


@dataclass
class Term:
    """A terms clause used by queries, facets and filters."""

    terms: Terms = dc_field(default_factory=Terms)
    filter_val: FilterWrap | None = None

    def filter(self, *args):
        if self.filter_val is None:
            self.filter_val = FilterWrap()
        self.filter_val.add_filters(args)
        return self

    def to_json_value(self):
        out = {"terms": self.terms.to_json_value()}
        if self.filter_val is not None:
            out["facet_filter"] = self.filter_val.to_json_value()
        return out


class QueryDsl:
    """Chainable builder for the query part of a search."""

    def __init__(self):
        self.match_all = None
        self.terms = {}
        self.query_string = None
        self.multi_match_val = None
        self.function_score_map = {}
        self.filter_val = None

    def all(self):
        self.match_all = MatchAll()
        return self

    def term(self, name, value):
        self.terms[name] = value
        return self

    def function_score(self, mode, *args):
        self.function_score_map = {
            "functions": list(args) if args else None,
            "score_mode": mode,
        }
        return self

    def search(self, search_for):
        """Use a raw Lucene query string."""
        self.query_string = new_query_string("", "")
        self.query_string.query = search_for
        return self

    def qs(self, qs):
        self.query_string = qs
        return self

    def fields(self, fields, search, exists, missing):
        """Query-string search over one or several comma-separated fields."""
        field_list = fields.split(",")
        qs = new_query_string("", "")
        qs.query = search
        if len(field_list) == 1:
            qs.default_field = fields
        else:
            qs.fields = field_list
        qs.exists = exists
        qs.missing = missing
        self.query_string = qs
        return self

    def filter(self, *args):
        if self.filter_val is None:
            self.filter_val = FilterWrap()
        self.filter_val.add_filters(args)
        return self

    def multi_match(self, s, fields):
        self.multi_match_val = MultiMatch(query=s, fields=fields)
        return self

    def _embed(self):
        out = {}
        if self.match_all is not None:
            out["match_all"] = {}
        if self.terms:
            out["term"] = dict(self.terms)
        if self.query_string is not None:
            out["query_string"] = self.query_string.to_json_value()
        if self.multi_match_val is not None:
            mm = self.multi_match_val
            out["multi_match"] = {
                "query": mm.query,
                "fields": list(mm.fields) if mm.fields is not None else None,
            }
        if self.function_score_map:
            out["function_score"] = to_jsonable(self.function_score_map)
        return out

    def _has_query(self):
        return (
            self.query_string is not None
            or bool(self.terms)
            or self.match_all is not None
            or self.multi_match_val is not None
        )

    def to_json_value(self):
        embed = self._embed()
        if self.filter_val is not None and self._has_query():
            return {
                "filtered": {"query": embed, "filter": self.filter_val.to_json_value()}
            }
        return embed


def query():
    return QueryDsl()


def new_query_string(field, query):
    return QueryString(default_field=field, query=query)


def new_term(*args):
    return Term(Terms(fields=list(args)))