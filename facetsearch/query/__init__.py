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

"""Free-text query handling: search state, tokenizer and boolean query builder."""

from .builder import build_bool_query, build_highlight, build_paging, build_query_string_clause, build_sort
from .state import FilterChain, SearchState
from .tokenizer import QueryBuckets, Tokenizer

__all__ = [
    # Builder functions
    "build_bool_query",
    "build_highlight",
    "build_paging",
    "build_query_string_clause",
    "build_sort",
    # State
    "FilterChain",
    "SearchState",
    # Tokenizer
    "QueryBuckets",
    "Tokenizer",
]
