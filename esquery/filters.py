"""Filter clauses of the search DSL."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum


def to_jsonable(value):
    """Turn DSL objects and containers into plain JSON-ready values."""
    if not isinstance(value, type):
        to_json = getattr(value, "to_json_value", None)
        if callable(to_json):
            return to_jsonable(to_json())
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Mapping):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


class BoolClause(str, Enum):
    """Boolean combinator for several filters."""

    AND = "and"
    OR = "or"


class FilterWrap:
    """A list of filters joined by a boolean clause."""

    def __init__(self):
        self.bool_clause = "and"
        self.filters = []

    def __str__(self):
        return f"fopv: {len(self.filters)}:{self.filters}"

    def bool(self, clause):
        """Set the boolean clause: "and" or "or"."""
        self.bool_clause = clause.value if isinstance(clause, BoolClause) else clause

    def add_filters(self, filters):
        """Append filters; a leading string names the boolean clause."""
        filters = list(filters)
        if len(filters) > 1 and isinstance(filters[0], str):
            self.bool(filters[0])
            filters = filters[1:]
        self.filters.extend(filters)

    def to_json_value(self):
        if len(self.filters) > 1:
            return {self.bool_clause: [to_jsonable(f) for f in self.filters]}
        if len(self.filters) == 1:
            return to_jsonable(self.filters[0])
        return None


class HasChildFilterOp:
    """A has_child filter."""

    def __init__(self, doc_type, min_children=0, max_children=0):
        self.type = doc_type
        self.min_children = min_children
        self.max_children = max_children
        self.filters = None

    def filter(self, *args):
        if self.filters is None:
            self.filters = FilterWrap()
        self.filters.add_filters(args)
        return self

    def to_json_value(self):
        out = {"type": self.type}
        if self.min_children:
            out["min_children"] = self.min_children
        if self.max_children:
            out["max_children"] = self.max_children
        if self.filters is not None:
            out["filter"] = self.filters.to_json_value()
        return out


class HasParentFilterOp:
    """A has_parent filter."""

    def __init__(self, doc_type):
        self.type = doc_type
        self.filters = None

    def filter(self, *args):
        if self.filters is None:
            self.filters = FilterWrap()
        self.filters.add_filters(args)
        return self

    def to_json_value(self):
        out = {"type": self.type}
        if self.filters is not None:
            out["filter"] = self.filters.to_json_value()
        return out


class BoolFilterOp:
    """A bool filter with should and must term criteria."""

    def __init__(self, min_should_match=0, boost=0.0):
        self.min_should_match = min_should_match
        self.boost = boost
        self.should = []
        self.must = []

    def add_should(self, term, val):
        self.should.append({"term": {term: val}})

    def add_must(self, term, val):
        self.must.append({"term": {term: val}})

    def to_json_value(self):
        out = {}
        if self.min_should_match:
            out["minimum_should_match"] = self.min_should_match
        if self.boost:
            out["boost"] = self.boost
        if self.should:
            out["should"] = to_jsonable(self.should)
        if self.must:
            out["must"] = to_jsonable(self.must)
        return out


class FilterOp:
    """A single filter operation (terms, range, exists, missing, ...)."""

    def __init__(self):
        self.cur_field = None
        self.terms_map = {}
        self.range_map = {}
        self.exist = {}
        self.missing_val = {}
        self.bool_op = None
        self.has_child_op = None
        self.has_parent_op = None

    def field(self, fld):
        """Select the field that following range bounds apply to."""
        self.cur_field = fld
        self.range_map.setdefault(fld, {})
        return self

    def terms(self, field, *args):
        for value in args:
            self.terms_map.setdefault(field, []).append(value)
        return self

    def _bound(self, key, value):
        if self.cur_field is None:
            raise ValueError("no range field selected; call field() first")
        self.range_map[self.cur_field][key] = value
        return self

    def from_(self, value):
        return self._bound("from", value)

    def to(self, value):
        return self._bound("to", value)

    def gt(self, value):
        return self._bound("gt", value)

    def lt(self, value):
        return self._bound("lt", value)

    def gte(self, value):
        return self._bound("gte", value)

    def lte(self, value):
        return self._bound("lte", value)

    def exists(self, name):
        self.exist = {"field": name}
        return self

    def missing(self, name):
        self.missing_val = {"field": name}
        return self

    def add(self, fop):
        """Merge the exists, missing and range parts of another filter."""
        if fop.exist:
            self.exist = fop.exist
        if fop.missing_val:
            self.missing_val = fop.missing_val
        if fop.range_map:
            self.range_map = fop.range_map
        return self

    def to_json_value(self):
        out = {}
        if self.terms_map:
            out["terms"] = to_jsonable(self.terms_map)
        if self.range_map:
            out["range"] = to_jsonable(self.range_map)
        if self.exist:
            out["exists"] = dict(self.exist)
        if self.missing_val:
            out["missing"] = dict(self.missing_val)
        if self.bool_op is not None:
            out["bool"] = self.bool_op.to_json_value()
        if self.has_child_op is not None:
            out["has_child"] = self.has_child_op.to_json_value()
        if self.has_parent_op is not None:
            out["has_parent"] = self.has_parent_op.to_json_value()
        return out


def has_child(doc_type, min_children, max_children):
    op = FilterOp()
    op.has_child_op = HasChildFilterOp(doc_type, min_children, max_children)
    return op


def has_parent(doc_type):
    op = FilterOp()
    op.has_parent_op = HasParentFilterOp(doc_type)
    return op


def filter_():
    return FilterOp()


def compound_filter(*args):
    wrap = FilterWrap()
    wrap.add_filters(args)
    return wrap


def bool_filter(min_match, boost):
    op = FilterOp()
    op.bool_op = BoolFilterOp(min_match, boost)
    return op


def range_():
    return FilterOp()