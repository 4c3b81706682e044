"""Builders for Elasticsearch request bodies and helpers for index, mapping and snapshot administration."""

__version__ = "0.1.0"

__all__ = [
    "aggregate",
    "dsl",
    "facet",
    "filters",
    "indices",
    "mapping",
    "query",
    "request",
    "search",
    "snapshot",
    "sort",
]