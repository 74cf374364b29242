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

from collections import defaultdict
from collections.abc import Iterable, Mapping

import structlog

from facetsearch.core.config import SerializerConfig
from facetsearch.core.types import FilterValue
from facetsearch.query.state import FilterChain

logger = structlog.get_logger(__name__)


def flatten_filters(chains: Iterable[FilterChain]) -> dict[str, list[FilterValue]]:
    """Convert drill-down filter chains to the selected values per facet.

    Values keep their order of appearance, duplicates included.

    Examples:
        >>> flatten_filters([
        ...     FilterChain.model_validate(["type_agg", "value1"]),
        ...     FilterChain.model_validate(["type_agg", "value2", ["subtype_agg", "a value"]]),
        ... ])
        {'type_agg': ['value1', 'value2'], 'subtype_agg': ['a value']}
    """
    selected: dict[str, list[FilterValue]] = defaultdict(list)

    def visit(chain: FilterChain) -> None:
        selected[chain.facet].append(chain.value)
        if chain.child is not None:
            visit(chain.child)

    for chain in chains:
        visit(chain)
    return dict(selected)


def resolve_selection(
    selected: Mapping[str, list[FilterValue]], config: SerializerConfig
) -> dict[str, list[FilterValue]]:
    """Key the selected values by configured facet name.

    Selection keys may be facet names or aggregation paths; keys resolving to
    the same facet are merged. Selections on unknown facets are dropped.
    """
    resolved: dict[str, list[FilterValue]] = {}
    for key, values in selected.items():
        facet = config.get_facet(key)
        if facet is None:
            logger.debug("Ignoring filter on unknown facet", facet=key, values=values)
            continue
        resolved.setdefault(facet.name, []).extend(values)
    return resolved
