"""Facet clauses of the search DSL."""

from __future__ import annotations

from dataclasses import dataclass, field as dc_field

from .filters import FilterWrap
from .query import Term, Terms


@dataclass
class RangeVal:
    from_: str = ""
    to: str = ""

    def to_json_value(self):
        out = {}
        if self.from_:
            out["from"] = self.from_
        if self.to:
            out["to"] = self.to
        return out


@dataclass
class RangeDef:
    field: str = ""
    values: list = dc_field(default_factory=list)

    def to_json_value(self):
        out = {}
        if self.field:
            out["field"] = self.field
        if self.values:
            out["ranges"] = [v.to_json_value() for v in self.values]
        return out


class RangeDsl:
    """A range facet with optional facet filter."""

    def __init__(self, range_def=None, filter_val=None):
        self.range_def = range_def if range_def is not None else RangeDef()
        self.filter_val = filter_val

    def range(self, from_, to):
        self.range_def.values.append(RangeVal(from_=from_, to=to))
        return self

    def filter(self, *args):
        if self.filter_val is None:
            self.filter_val = FilterWrap()
        self.filter_val.add_filters(args)
        return self

    def to_json_value(self):
        out = {"range": self.range_def.to_json_value()}
        if self.filter_val is not None:
            out["facet_filter"] = self.filter_val.to_json_value()
        return out


class FacetDsl:
    """Chainable builder for the facets of a search."""

    def __init__(self):
        self._size = ""
        self.terms = {}
        self.ranges = {}

    def size(self, size):
        self._size = size
        return self

    def fields(self, *args):
        """Terms facet over the given fields, keyed by the first one."""
        if not args:
            return self
        self.terms[args[0]] = Term(Terms(fields=list(args)))
        return self

    def regex(self, field, match):
        self.terms[field] = Term(Terms(fields=[field], regex=match))
        return self

    def term(self, term):
        self.terms[term.terms.fields[0]] = term
        return self

    def range(self, range_dsl):
        self.ranges[range_dsl.range_def.field] = range_dsl
        return self

    def to_json_value(self):
        data = {}
        for key, term in self.terms.items():
            term.terms.size = self._size
            data[key] = term.to_json_value()
        for key, range_dsl in self.ranges.items():
            data[key] = range_dsl.to_json_value()
        return data


def facet():
    return FacetDsl()


def facet_range(field):
    return RangeDsl(RangeDef(field=field))