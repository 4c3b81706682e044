"""Aggregation clauses of the search DSL."""

from __future__ import annotations

from dataclasses import dataclass

from .filters import FilterWrap, to_jsonable


def _number(value):
    """Render integral floats as integers, the way they appear on the wire."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


@dataclass
class FieldAggregate:
    """An aggregation that only names a field and an optional size."""

    field: str
    size: int | None = None

    def to_json_value(self):
        out = {"field": self.field}
        if self.size is not None:
            out["size"] = self.size
        return out


@dataclass
class Cardinality:
    """Body of a cardinality aggregation."""

    field: str
    precision_threshold: float = 0.0
    rehash: bool = False

    def to_json_value(self):
        out = {"field": self.field}
        if self.precision_threshold:
            out["precision_threshold"] = _number(self.precision_threshold)
        if self.rehash:
            out["rehash"] = True
        return out


@dataclass
class Histogram:
    """Body of a numeric histogram aggregation."""

    field: str
    interval: float

    def to_json_value(self):
        return {"field": self.field, "interval": _number(self.interval)}


@dataclass
class DateHistogram:
    """Body of a date histogram aggregation."""

    field: str
    interval: str

    def to_json_value(self):
        return {"field": self.field, "interval": self.interval}


class AggregateDsl:
    """Chainable builder for one named aggregation and its sub-aggregations."""

    def __init__(self, name):
        self.name = name
        self.type_name = ""
        self.type = None
        self.filters = None
        self.aggregates_val = {}

    def aggregates(self, *args):
        """Attach sub-aggregations, keyed by their names."""
        for agg in args:
            self.aggregates_val[agg.name] = agg
        return self

    def _field_agg(self, type_name, field):
        self.type = FieldAggregate(field=field)
        self.type_name = type_name
        return self

    def min(self, field):
        return self._field_agg("min", field)

    def max(self, field):
        return self._field_agg("max", field)

    def sum(self, field):
        return self._field_agg("sum", field)

    def avg(self, field):
        return self._field_agg("avg", field)

    def stats(self, field):
        return self._field_agg("stats", field)

    def extended_stats(self, field):
        return self._field_agg("extended_stats", field)

    def value_count(self, field):
        return self._field_agg("value_count", field)

    def percentiles(self, field):
        return self._field_agg("percentiles", field)

    def cardinality(self, field, rehash, threshold):
        """Cardinality aggregation; rehash is left at the server default."""
        card = Cardinality(field=field)
        if threshold > 0:
            card.precision_threshold = float(threshold)
        self.type = card
        self.type_name = "cardinality"
        return self

    def global_(self):
        self.type = {}
        self.type_name = "global"
        return self

    def filter(self, *args):
        if not args:
            return self
        if self.filters is None:
            self.filters = FilterWrap()
        self.filters.add_filters(args)
        return self

    def missing(self, field):
        return self._field_agg("missing", field)

    def terms(self, field):
        return self._field_agg("terms", field)

    def terms_with_size(self, field, size):
        self.type = FieldAggregate(field=field, size=size)
        self.type_name = "terms"
        return self

    def significant_terms(self, field):
        return self._field_agg("significant_terms", field)

    def histogram(self, field, interval):
        self.type = Histogram(field=field, interval=float(interval))
        self.type_name = "histogram"
        return self

    def date_histogram(self, field, interval):
        self.type = DateHistogram(field=field, interval=interval)
        self.type_name = "date_histogram"
        return self

    def to_json_value(self):
        root = {}
        if self.type is not None:
            root[self.type_name] = to_jsonable(self.type)
        if self.filters is not None:
            root["filter"] = self.filters.to_json_value()
        if self.aggregates_val:
            root["aggregations"] = {
                agg.name: agg.to_json_value() for agg in self.aggregates_val.values()
            }
        return root


def aggregate(name):
    return AggregateDsl(name)