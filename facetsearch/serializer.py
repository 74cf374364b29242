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
from collections.abc import Mapping
from typing import Any

import structlog

from facetsearch.aggregations import build_aggregations
from facetsearch.core.config import SerializerConfig
from facetsearch.core.types import RequestBody
from facetsearch.filters import build_post_filter, build_selected_clauses, flatten_filters, resolve_selection
from facetsearch.query import SearchState, Tokenizer, build_bool_query, build_highlight, build_paging, build_sort
from facetsearch.settings import SearchSettings, search_settings

logger = structlog.get_logger(__name__)


class RequestSerializer:
    """Serialize a UI search state to a search engine request body.

    The serializer holds nothing but its configuration, so one instance can
    serve concurrent requests. `serialize` has no side effects and never
    raises for a valid search state: parts that do not apply are left out
    of the request body.
    """

    def __init__(self, config: SerializerConfig):
        self.config = config
        self.tokenizer = Tokenizer(force_fuzzy=config.force_fuzzy)

    @classmethod
    def from_settings(cls, settings: SearchSettings = search_settings) -> "RequestSerializer":
        return cls(SerializerConfig.from_settings(settings))

    def serialize(self, state: SearchState | Mapping[str, Any]) -> RequestBody:
        """Build the request body for a search state.

        Args:
            state: The search state, or a mapping in the UI's camelCase shape.

        Returns:
            The request body with the keys `query`, `highlight`, `sort`,
            `size`, `from`, `post_filter` and `aggs`, each only when it applies.
        """
        if not isinstance(state, SearchState):
            state = SearchState.model_validate(state)

        body: RequestBody = {}

        if state.has_query:
            query = build_bool_query(
                self.tokenizer.tokenize(state.query_string.strip()),
                self.config.searched_fields,
                analyzer=self.config.analyzer,
            )
            if query is not None:
                body["query"] = query
                if self.config.highlight_fields:
                    body["highlight"] = build_highlight(self.config.highlight_fields, self.config.highlight_type)

        if sort := build_sort(state.sort_by, state.sort_order):
            body["sort"] = sort

        body |= build_paging(state.page, state.size)

        selection = resolve_selection(flatten_filters(state.filters), self.config)
        clauses = build_selected_clauses(selection, self.config)
        body["post_filter"] = build_post_filter(self.config.access, self.config, clauses)
        body["aggs"] = build_aggregations(self.config, clauses)

        logger.debug(
            "Serialized search state",
            has_query="query" in body,
            sort_by=state.sort_by,
            page=state.page,
            size=state.size,
            selected_facets=list(selection),
        )
        return body

    def to_json(self, state: SearchState | Mapping[str, Any], indent: int | None = None) -> str:
        return json.dumps(self.serialize(state), indent=indent, ensure_ascii=False)
