[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "esquery"
version = "0.1.0"
description = "Chainable builders for Elasticsearch search, filter, aggregation and facet request bodies, plus index, mapping and snapshot administration helpers"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "elasticsearch",
    "search",
    "query",
    "dsl",
    "aggregations",
    "filters",
    "facets",
    "mapping",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Front-Ends",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["esquery*"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
