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

from collections.abc import Sequence

from facetsearch.core.config import exact_field
from facetsearch.core.types import BESTMATCH, EXACT_SUFFIX, Clause, SortOrder
from facetsearch.query.tokenizer import QueryBuckets


def build_query_string_clause(fragments: Sequence[str], fields: Sequence[str], analyzer: str | None = None) -> Clause:
    query_string: Clause = {"query": " ".join(fragments), "fields": list(fields)}
    if analyzer:
        query_string["analyzer"] = analyzer
    return {"query_string": query_string}


def build_bool_query(buckets: QueryBuckets, fields: Sequence[str], *, analyzer: str | None = None) -> Clause | None:
    """Build the boolean query from the tokenized query buckets.

    Fuzzy buckets search `fields`, exact buckets the exact sub-fields of
    `fields`. Every non-empty bucket gives exactly one clause and occurrences
    without clauses are left out.

    Args:
        buckets: The classified query fragments.
        fields: Weighted fields to search, e.g. ``["title^1.4", "description"]``.
        analyzer: Optional search analyzer for all clauses.

    Returns:
        The ``{"bool": {...}}`` query, or None when there is nothing to search for.
    """
    exact_fields = [exact_field(field) for field in fields]
    occurrences: dict[str, list[tuple[tuple[str, ...], Sequence[str]]]] = {
        "should": [(buckets.should_fuzzy, fields), (buckets.should_exact, exact_fields)],
        "must": [(buckets.must_fuzzy, fields), (buckets.must_exact, exact_fields)],
        "must_not": [(buckets.must_not_exact, exact_fields)],
    }

    bool_query: Clause = {}
    for occurrence, sources in occurrences.items():
        clauses = [
            build_query_string_clause(fragments, target_fields, analyzer)
            for fragments, target_fields in sources
            if fragments
        ]
        if clauses:
            bool_query[occurrence] = clauses

    return {"bool": bool_query} if bool_query else None


def build_highlight(fields: Sequence[str], highlight_type: str = "fvh") -> Clause:
    """Highlight matches in both the analyzed and the exact variant of each field."""
    return {
        "fields": [
            {field: {"matched_fields": [field, f"{field}{EXACT_SUFFIX}"], "type": highlight_type}} for field in fields
        ]
    }


def build_sort(sort_by: str, sort_order: SortOrder) -> list[Clause] | None:
    if sort_by == BESTMATCH:
        return None
    return [{sort_by: SortOrder.parse(sort_order).value}]


def build_paging(page: int, size: int) -> Clause:
    paging: Clause = {}
    if size > 0:
        paging["size"] = size
    if page > 0:
        paging["from"] = (page - 1) * max(size, 0)
    return paging
