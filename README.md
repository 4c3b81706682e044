# esquery

Chainable builders for Elasticsearch request bodies, a small HTTP request
helper, and functions for the index, mapping and snapshot administration
endpoints. It has no dependencies outside the standard library.

Every builder turns into plain Python data (dicts, lists, strings and
numbers) through `to_json_value()`, ready for `json.dumps`.
`esquery.filters.to_jsonable` does the same for any mix of builders, dicts
and lists.

## Installing

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Searches

```python
import json

from esquery.search import search
from esquery.query import query
from esquery.sort import sort

request = (
    search("github")
    .type("PushEvent")
    .pretty()
    .size("25")
    .query(query().search("add"))
    .sort(sort("repository.watchers").desc())
)

print(request.url())                        # /github/PushEvent/_search
print(json.dumps(request.to_json_value()))
```

`pretty`, `size`, `from_`, `fields`, `source`, `scroll`, `search_type` and
`add_query_param` set URL arguments, kept in `request.args`; the query,
filters, facets, aggregations and sort order go into the body.

A query that has both a query part and filters is written as a `filtered`
query. `query().term(...)`, `query().fields(...)`, `query().multi_match(...)`,
`query().function_score(...)` and `query().all()` build the other query kinds.

## Filters

```python
from esquery.filters import filter_, range_, has_child, bool_filter

request = search("github").filter(
    "or",
    filter_().terms("actor_attributes.location", "portland"),
    filter_().terms("repository.has_wiki", True),
)

in_range = range_().field("created_at").from_("2012-12-10T15:00:00-08:00").to(
    "2012-12-10T15:10:00-08:00"
)
scoped = query().filter(in_range).search("add")
```

Several filters are joined with `"and"` unless the first argument is a string
naming another boolean clause. A single filter is written on its own. Range
bounds (`from_`, `to`, `gt`, `lt`, `gte`, `lte`) raise `ValueError` when no
field was chosen with `field()` first.

## Aggregations

```python
from esquery.aggregate import aggregate

over_time = aggregate("articles_over_time").date_histogram("date", "month")
over_time.aggregates(
    aggregate("min_price").min("price"),
    aggregate("cardinality_price").cardinality("price", True, 50),
)

in_stock = aggregate("in_stock_products").filter(range_().field("stock").gt(0))
in_stock.aggregates(aggregate("avg_price").avg("price"))

body = search("github").aggregates(over_time, in_stock).to_json_value()
```

## Facets

```python
from esquery.facet import facet, facet_range

request = search("github").size("0").facet(
    facet().regex("repository.name", "no.*").size("8")
)

ranges = facet().range(facet_range("price").range("0", "10").range("10", "20"))
```

## URL arguments

```python
from esquery.request import escape

escape({"foo": "bar", "test": ["a", "b"]})   # 'foo=bar&test=a%2Cb'
escape({"baz": 3.141592, "bar": 1})          # 'bar=1&baz=3.141592'
```

Arguments are sorted by name. Strings, booleans, integers, floats and lists
of strings are accepted; anything else raises `ValueError`.

## Connections

The administration functions and `SearchDsl.bytes` / `SearchDsl.result` take
a connection as their first argument: any object with a method
`do_command(method, path, args, body)` that sends the request and returns
the response body as bytes, raising `esquery.request.NotFoundError` when the
server answers 404. The package does not ship such a class, and has no host
pool, no retrying and no document indexing or bulk loading. A minimal one
can be built on `esquery.request.Request`:

```python
from esquery.request import Request, escape


class Connection:
    def __init__(self, base_url="http://localhost:9200"):
        self.base_url = base_url

    def do_command(self, method, path, args, body):
        query_string = escape(args)
        url = self.base_url + path + (f"?{query_string}" if query_string else "")
        req = Request(method, url)
        if isinstance(body, (str, bytes)):
            req.set_body(body)
        elif body is not None:
            req.set_body_json(body)
        _status, data = req.do()
        return data


conn = Connection()
hits = search("github").search("add").result(conn)   # decoded JSON dict
```

`Request.set_body_json` logs the body of `_search` requests at INFO level
through the `esquery.request` logger.

## Index and snapshot administration

The functions in `esquery.indices` and `esquery.snapshot` return the decoded
JSON response; `analyze_indices` returns an `AnalyzeResponse` of `Token`s
and `get_snapshots` / `get_snapshot_by_name` return a `GetSnapshotsResponse`
of `SnapshotInfo`s. Missing index names, blank text to analyze and settings
of the wrong kind raise `ValueError` or `TypeError` before anything is sent.
`indices_exists` turns `NotFoundError` into `False`.

```python
from esquery.indices import create_index, delete_mapping, indices_exists, refresh
from esquery.snapshot import get_snapshots

create_index(conn, "github")
refresh(conn, "github")
indices_exists(conn, "github")
delete_mapping(conn, "github", "PushEvent")
get_snapshots(conn, "backups", {})
```

## Mappings

Mapping properties can be derived from dataclasses whose fields are declared
with `esquery.mapping.elastic_field` and sent with `put_mapping`; a
ready-made JSON mapping goes through `put_mapping_from_json`.

```python
from dataclasses import dataclass

from esquery.mapping import MappingOptions, TimestampOptions, elastic_field, put_mapping


@dataclass
class User:
    id: str = elastic_field(json_name="id", elastic="index:not_analyzed", default="")
    age: int = elastic_field(json_name="age", elastic="type:integer", default=0)


put_mapping(conn, "users", "user", User, MappingOptions(timestamp=TimestampOptions(enabled=True)))
```

A field whose `json_name` is `"-"` is left out; a dataclass-typed field
without attributes (or with `type:nested`) gets the properties of its type,
and `embedded=True` merges them into the parent instead.