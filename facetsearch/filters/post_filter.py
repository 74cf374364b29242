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

from collections.abc import Mapping

from facetsearch.core.config import AccessConfig, FacetConfig, SerializerConfig
from facetsearch.core.types import CONTENT_TYPE_FIELD, REVIEW_STATE_FIELD, Clause, FilterValue


def build_facet_clause(facet: FacetConfig, values: list[FilterValue]) -> Clause:
    """Build the clause restricting results to the selected values of one facet."""
    if facet.is_list_filter:
        return {"terms": {facet.field_path: list(values)}}
    return {
        "nested": {
            "path": facet.field_path,
            "query": {"bool": {"must": [{"terms": {facet.token_field: list(values)}}]}},
        }
    }


def build_selected_clauses(selection: Mapping[str, list[FilterValue]], config: SerializerConfig) -> dict[str, Clause]:
    """Build one clause per selected facet, keyed by facet name.

    `selection` must already be resolved to configured facet names.
    """
    clauses: dict[str, Clause] = {}
    for name, values in selection.items():
        if facet := config.get_facet(name):
            clauses[facet.name] = build_facet_clause(facet, values)
    return clauses


def build_access_clauses(access: AccessConfig) -> list[Clause]:
    return [
        {"terms": {CONTENT_TYPE_FIELD: sorted(access.allowed_content_types)}},
        {"terms": {REVIEW_STATE_FIELD: sorted(access.allowed_review_states)}},
    ]


def build_post_filter(access: AccessConfig, config: SerializerConfig, clauses: Mapping[str, Clause]) -> Clause:
    """Build the filter applied to the hits after the aggregations are counted.

    List facets join the access constraints under `must`, nested facets go
    under `filter`, which is left out when no nested facet is selected.
    """
    must = build_access_clauses(access)
    nested = []
    for name, clause in clauses.items():
        facet = config.get_facet(name)
        if facet is None:
            continue
        if facet.is_list_filter:
            must.append(clause)
        else:
            nested.append(clause)

    post_filter: Clause = {"bool": {"must": must}}
    if nested:
        post_filter["bool"]["filter"] = nested
    return post_filter
