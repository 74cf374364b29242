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

import pytest

from facetsearch.core.types import SortOrder
from facetsearch.query import QueryBuckets, build_bool_query, build_highlight, build_paging, build_sort

pytestmark = pytest.mark.search

FIELDS = ["title^1.4", "description"]
EXACT_FIELDS = ["title.exact^1.4", "description.exact"]


def test_build_bool_query_all_buckets():
    buckets = QueryBuckets(
        must_not_exact=("bar", "qux"),
        must_exact=('"quoted"',),
        must_fuzzy=("foo",),
        should_exact=("wil*",),
        should_fuzzy=("sun sun~",),
    )

    assert build_bool_query(buckets, FIELDS) == {
        "bool": {
            "should": [
                {"query_string": {"query": "sun sun~", "fields": FIELDS}},
                {"query_string": {"query": "wil*", "fields": EXACT_FIELDS}},
            ],
            "must": [
                {"query_string": {"query": "foo", "fields": FIELDS}},
                {"query_string": {"query": '"quoted"', "fields": EXACT_FIELDS}},
            ],
            "must_not": [
                {"query_string": {"query": "bar qux", "fields": EXACT_FIELDS}},
            ],
        }
    }


def test_build_bool_query_omits_empty_occurrences():
    query = build_bool_query(QueryBuckets(must_fuzzy=("foo",)), FIELDS)

    assert query == {"bool": {"must": [{"query_string": {"query": "foo", "fields": FIELDS}}]}}
    assert "should" not in query["bool"]
    assert "must_not" not in query["bool"]


def test_build_bool_query_nothing_to_search():
    assert build_bool_query(QueryBuckets(), FIELDS) is None


def test_build_bool_query_with_analyzer():
    query = build_bool_query(QueryBuckets(should_fuzzy=("a a~",)), FIELDS, analyzer="german_analyzer")

    assert query["bool"]["should"][0]["query_string"]["analyzer"] == "german_analyzer"


def test_build_highlight():
    assert build_highlight(["title", "subjects"]) == {
        "fields": [
            {"title": {"matched_fields": ["title", "title.exact"], "type": "fvh"}},
            {"subjects": {"matched_fields": ["subjects", "subjects.exact"], "type": "fvh"}},
        ]
    }


@pytest.mark.parametrize(
    "sort_by,sort_order,expected",
    [
        ("bestmatch", SortOrder.DESC, None),
        ("modified", SortOrder.DESC, [{"modified": "desc"}]),
        ("title", SortOrder.ASC, [{"title": "asc"}]),
        ("title", "sideways", [{"title": "asc"}]),
    ],
)
def test_build_sort(sort_by, sort_order, expected):
    assert build_sort(sort_by, sort_order) == expected


@pytest.mark.parametrize(
    "page,size,expected",
    [
        (3, 10, {"size": 10, "from": 20}),
        (1, 10, {"size": 10, "from": 0}),
        (0, 10, {"size": 10}),
        (3, 0, {"from": 0}),
        (2, -5, {"from": 0}),
        (0, 0, {}),
    ],
)
def test_build_paging(page, size, expected):
    assert build_paging(page, size) == expected
