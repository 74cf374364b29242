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

from .chain import flatten_filters, resolve_selection
from .post_filter import build_access_clauses, build_facet_clause, build_post_filter, build_selected_clauses

__all__ = [
    # Filter chains
    "flatten_filters",
    "resolve_selection",
    # Post filter
    "build_access_clauses",
    "build_facet_clause",
    "build_post_filter",
    "build_selected_clauses",
]
