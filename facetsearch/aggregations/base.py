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
from copy import deepcopy
from functools import reduce

from facetsearch.core.config import FacetConfig, SerializerConfig
from facetsearch.core.types import NESTED_AGG_NAME, TOP_HITS_AGG_NAME, Clause

KEY_ORDER_ASC = {"_key": "asc"}


def build_exclusion_filter(facet: FacetConfig, clauses: Mapping[str, Clause]) -> Clause:
    """Build the filter narrowing a facet's counts by every other selected facet.

    The facet's own selection is left out, so all its options keep showing
    after one is picked. Without other selections everything matches.
    """
    others = [deepcopy(clause) for name, clause in clauses.items() if name != facet.name]
    if not others:
        return {"match_all": {}}
    return {"bool": {"filter": others}}


def build_terms_aggregation(facet: FacetConfig, top_hits_size: int = 1) -> Clause:
    """Build the bucket aggregation of a facet.

    A top hit is fetched per bucket to recover the label of the bucket key.
    """
    return {
        "terms": {
            "field": facet.bucket_field,
            "order": dict(KEY_ORDER_ASC),
            "size": facet.bucket_size,
        },
        "aggs": {
            TOP_HITS_AGG_NAME: {
                "top_hits": {
                    "size": top_hits_size,
                    "_source": {"includes": [facet.field_path]},
                }
            }
        },
    }


def build_facet_aggregation(facet: FacetConfig, clauses: Mapping[str, Clause], top_hits_size: int = 1) -> Clause:
    buckets = {facet.bucket_name: build_terms_aggregation(facet, top_hits_size)}
    if facet.is_nested:
        buckets = {NESTED_AGG_NAME: {"nested": {"path": facet.field_path}, "aggs": buckets}}
    return {
        facet.agg_name: {
            "filter": build_exclusion_filter(facet, clauses),
            "aggs": buckets,
        }
    }


def build_aggregations(config: SerializerConfig, clauses: Mapping[str, Clause]) -> dict[str, Clause]:
    """Build the aggregations of all configured facets, in configuration order."""
    return reduce(
        lambda aggs, facet: aggs | build_facet_aggregation(facet, clauses, config.top_hits_size),
        config.facets,
        {},
    )
