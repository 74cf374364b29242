# Copyright 2019-2025 SURF, GÉANT.
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import json
from dataclasses import asdict
from pathlib import Path

import structlog
import typer
from nwastdlib.logging import initialise_logging
from pydantic import ValidationError

from facetsearch.core.config import SerializerConfig
from facetsearch.core.exceptions import ConfigurationError
from facetsearch.log_config import LOGGER_OVERRIDES
from facetsearch.query import FilterChain, SearchState, Tokenizer
from facetsearch.serializer import RequestSerializer
from facetsearch.settings import search_settings

logger = structlog.getLogger(__name__)

app = typer.Typer(help="Preview the search requests built from a search state.")

CHAIN_SEPARATOR = "/"
VALUE_SEPARATOR = "="


@app.callback()
def main() -> None:
    initialise_logging(additional_loggers=LOGGER_OVERRIDES)


def parse_filter_chain(option: str) -> FilterChain:
    """Parse `facet=value[/facet=value...]` into a filter chain.

    Example:
        kompasscomponent_agg.inner.kompasscomponent_token=BEW/targetaudience=Lehrer
    """
    try:
        pairs = [part.split(VALUE_SEPARATOR, 1) for part in option.split(CHAIN_SEPARATOR)]
        chain = None
        for facet, value in reversed(pairs):
            chain = FilterChain(facet=facet, value=value, child=chain)
    except ValueError as e:
        raise typer.BadParameter(f"Invalid filter '{option}', expected facet=value[/facet=value...]") from e
    if chain is None:
        raise typer.BadParameter(f"Invalid filter '{option}'")
    return chain


@app.command()
def serialize(
    query: str = typer.Option("", "--query", "-q", help="Free text query."),
    sort_by: str = typer.Option("bestmatch", help="Field to sort on, 'bestmatch' sorts by relevance."),
    sort_order: str = typer.Option("asc", help="Sort direction, asc or desc."),
    page: int = typer.Option(1, help="Page number, starting at 1."),
    size: int = typer.Option(10, help="Results per page."),
    filters: list[str] = typer.Option([], "--filter", "-f", help="Selected filter as facet=value[/facet=value...]."),
    facets_file: Path | None = typer.Option(None, help="YAML file with the facet configuration."),
    indent: int = typer.Option(2, help="Indentation of the printed JSON."),
) -> None:
    """Print the request body for a search state.

    Example:
        python -m facetsearch.cli.main serialize -q '+foo -bar "baz"' -f informationtype=FAQ --size 20
    """
    try:
        settings = search_settings
        if facets_file:
            settings = settings.model_copy(update={"FACET_CONFIG_FILE": facets_file})
        config = SerializerConfig.from_settings(settings)
    except (ConfigurationError, ValidationError) as e:
        raise typer.BadParameter(f"Invalid facet configuration: {e}")

    state = SearchState(
        query_string=query,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        size=size,
        filters=tuple(parse_filter_chain(option) for option in filters),
    )
    logger.info("Serializing search state", query=query, filters=len(state.filters))
    typer.echo(RequestSerializer(config).to_json(state, indent=indent))


@app.command()
def tokenize(
    query: str,
    fuzzy: bool = typer.Option(search_settings.FORCE_FUZZY, help="Add a fuzzy variant of every should-word."),
) -> None:
    """Print the buckets the words of a query are classified into.

    Example:
        python -m facetsearch.cli.main tokenize 'sun-shine +must -not "exact"'
    """
    buckets = Tokenizer(force_fuzzy=fuzzy).tokenize(query)
    typer.echo(json.dumps({name: list(fragments) for name, fragments in asdict(buckets).items()}, indent=2))


if __name__ == "__main__":
    app()
