"""Sort clauses of the search DSL."""

from __future__ import annotations


class SortDsl:
    """Sorting on a single field, ascending by default."""

    def __init__(self, name, is_desc=False):
        self.name = name
        self.is_desc = is_desc

    def desc(self):
        self.is_desc = True
        return self

    def asc(self):
        self.is_desc = False
        return self

    def to_json_value(self):
        if self.is_desc:
            return {self.name: "desc"}
        return self.name


def sort(field):
    return SortDsl(field)