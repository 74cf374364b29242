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
from pydantic import ValidationError

from facetsearch.filters import flatten_filters, resolve_selection
from facetsearch.query import FilterChain, SearchState

pytestmark = pytest.mark.search


def chains(*raw) -> list[FilterChain]:
    return [FilterChain.model_validate(chain) for chain in raw]


def test_flatten_filters():
    assert flatten_filters(chains(["type", "A"], ["type", "B", ["sub", "X"]])) == {"type": ["A", "B"], "sub": ["X"]}


def test_flatten_filters_keeps_duplicates_and_order():
    flattened = flatten_filters(chains(["b", "2"], ["a", "1"], ["b", "2"], ["a", "0"]))

    assert flattened == {"b": ["2", "2"], "a": ["1", "0"]}
    assert list(flattened) == ["b", "a"]


def test_flatten_filters_arbitrary_depth():
    flattened = flatten_filters(chains(["a", "1", ["b", "2", ["c", "3", ["a", "4"]]]]))

    assert flattened == {"a": ["1", "4"], "b": ["2"], "c": ["3"]}


def test_flatten_no_filters():
    assert flatten_filters([]) == {}


def test_filter_chain_from_array():
    chain = FilterChain.model_validate(["type", "B", ["sub", "X"]])

    assert chain == FilterChain(facet="type", value="B", child=FilterChain(facet="sub", value="X"))
    assert list(chain.pairs()) == [("type", "B"), ("sub", "X")]
    assert chain.depth == 2


@pytest.mark.parametrize("raw", [["type"], [], ["type", "A", ["sub", "X"], "extra"]])
def test_filter_chain_invalid_length(raw):
    with pytest.raises(ValidationError, match="2 or 3 elements"):
        FilterChain.model_validate(raw)


@pytest.mark.parametrize("value", [2020, 0.5, True])
def test_filter_chain_keeps_value_type(value):
    chain = FilterChain.model_validate(["freemanualtags", value])

    assert type(chain.value) is type(value)
    assert flatten_filters([chain]) == {"freemanualtags": [value]}


@pytest.mark.parametrize("value", [None, ["a"], {"a": 1}])
def test_filter_chain_rejects_non_scalar_value(value):
    with pytest.raises(ValidationError):
        FilterChain(facet="freemanualtags", value=value)


def test_search_state_rejects_malformed_chain():
    with pytest.raises(ValidationError):
        SearchState.model_validate({"filters": [["type"]]})


def test_resolve_selection(serializer_config):
    selected = {
        "informationtype_agg.inner.informationtype_token": ["FAQ"],
        "informationtype": ["Anleitung"],
        "freemanualtags": ["tag"],
        "unknown_agg": ["whatever"],
    }

    assert resolve_selection(selected, serializer_config) == {
        "informationtype": ["FAQ", "Anleitung"],
        "freemanualtags": ["tag"],
    }


def test_resolve_selection_does_not_mutate_input(serializer_config):
    values = ["FAQ"]
    selected = {"informationtype": values, "informationtype_agg.inner.informationtype_token": ["X"]}

    resolve_selection(selected, serializer_config)

    assert values == ["FAQ"]
