# elastic_ransack/cli.py
import json
import logging
import sys
from typing import Annotated

import cyclopts
import httpx

from elastic_ransack.backends import Elasticsearch
from elastic_ransack.compiler import QueryCompiler
from elastic_ransack.models import IndexModel
from elastic_ransack.params import parse_query_string
from elastic_ransack.query.values import ValueCoercionError, to_json_value
from elastic_ransack.search import Search

app = cyclopts.App(
    name="elastic-ransack",
    help="Compile filter parameters into Elasticsearch queries.",
)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _parse_types(types: list[str]) -> dict[str, str]:
    """Parse ["name=text", "age=integer"] into a field type dict."""
    parsed = {}
    for item in types:
        name, sep, field_type = item.partition("=")
        if not sep or not name or not field_type:
            print(f"Error: Invalid field type {item!r}, expected name=type", file=sys.stderr)
            sys.exit(1)
        parsed[name] = field_type
    return parsed


@app.command(name="compile")
def compile_(
    query: Annotated[str, cyclopts.Parameter(help="Query string, e.g. 'title_cont=foo&s=id+desc'")],
    types: Annotated[
        list[str],
        cyclopts.Parameter(name=["--type", "-t"], help="Declared field type as name=type"),
    ] = [],
    fields: Annotated[
        list[str],
        cyclopts.Parameter(name=["--field", "-f"], help="Restrict returned source fields"),
    ] = [],
    locale: Annotated[
        str | None,
        cyclopts.Parameter(name="--locale", help="Locale for translated fields"),
    ] = None,
    no_globalize: Annotated[
        bool,
        cyclopts.Parameter(name="--no-globalize", help="Do not rewrite translations_ fields"),
    ] = False,
    verbose: Annotated[
        bool,
        cyclopts.Parameter(name=["--verbose", "-v"], help="Enable debug logging"),
    ] = False,
) -> None:
    """Print the Elasticsearch request body for a query string."""
    _setup_logging(verbose)
    model = IndexModel("_cli", _parse_types(types)) if types else None
    compiler = QueryCompiler(model, globalize=not no_globalize, locale=locale, fields=fields)

    try:
        compiled = compiler.compile(parse_query_string(query))
    except ValueCoercionError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(compiled.to_json(indent=2))


@app.command(name="search")
def search(
    query: Annotated[str, cyclopts.Parameter(help="Query string, e.g. 'title_cont=foo&s=id+desc'")],
    index: Annotated[str, cyclopts.Parameter(name=["--index", "-i"], help="Index to search")],
    url: Annotated[
        str | None,
        cyclopts.Parameter(name="--url", help="Elasticsearch URL (default: $ELASTICSEARCH_URL)"),
    ] = None,
    page: Annotated[int, cyclopts.Parameter(name=["--page", "-p"], help="Page number")] = 1,
    per_page: Annotated[
        int | None,
        cyclopts.Parameter(name=["--per-page", "-n"], help="Results per page"),
    ] = None,
    fields: Annotated[
        list[str],
        cyclopts.Parameter(name=["--field", "-f"], help="Restrict returned source fields"),
    ] = [],
    locale: Annotated[
        str | None,
        cyclopts.Parameter(name="--locale", help="Locale for translated fields"),
    ] = None,
    verbose: Annotated[
        bool,
        cyclopts.Parameter(name=["--verbose", "-v"], help="Enable debug logging"),
    ] = False,
) -> None:
    """Search an index and print the matching records as JSON."""
    _setup_logging(verbose)

    try:
        with Elasticsearch(url) as backend:
            model = IndexModel.from_mapping(index, backend.get_mapping(index))
            result = Search(
                model,
                parse_query_string(query),
                backend,
                page=page,
                per_page=per_page,
                fields=fields,
                locale=locale,
            )
            data = {
                "records": result.records,
                "total": result.total_entries,
                "page": result.current_page,
                "total_pages": result.total_pages,
            }
    except (httpx.HTTPError, ValueCoercionError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(data, indent=2, ensure_ascii=False, default=to_json_value))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
