"""Simple fixed-shape search request bodies."""

from __future__ import annotations

from dataclasses import dataclass, field as dc_field

from .query import Term


@dataclass
class OneTermQuery:
    """A query body holding a single term."""

    term: str = ""

    def to_json_value(self):
        return {"query": {"term": self.term}}


@dataclass
class SearchRequest:
    """A paged search with a single-term query and a term filter."""

    from_: int = 0
    size: int = 0
    query: OneTermQuery = dc_field(default_factory=OneTermQuery)
    filter_term: Term = dc_field(default_factory=Term)

    def to_json_value(self):
        out = {}
        if self.from_:
            out["from"] = self.from_
        if self.size:
            out["size"] = self.size
        out["query"] = self.query.to_json_value()
        out["filter"] = {"term": self.filter_term.to_json_value()}
        return out


@dataclass
class Facets:
    """A terms facet named "tag"."""

    terms: str = ""

    def to_json_value(self):
        return {"tag": {"terms": self.terms}}