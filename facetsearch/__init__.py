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

"""Serialize faceted search UI state to Elasticsearch-compatible request bodies."""

__version__ = "1.0.0"

from facetsearch.core.config import AccessConfig, FacetConfig, SerializerConfig
from facetsearch.query import FilterChain, SearchState
from facetsearch.serializer import RequestSerializer
from facetsearch.settings import search_settings

__all__ = [
    "AccessConfig",
    "FacetConfig",
    "FilterChain",
    "RequestSerializer",
    "SearchState",
    "SerializerConfig",
    "search_settings",
]
