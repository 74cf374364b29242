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
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

from facetsearch.core.config import DEFAULT_BUCKET_SIZE, FacetConfig


class SearchSettings(BaseSettings):
    # Fields searched by free text, with optional boosts
    SEARCHED_FIELDS: list[str] = [
        "title^1.4",
        "description^1.2",
        "freemanualtags_searchable^1.2",
        "blocks_plaintext",
        "subjects^1.4",
        "manualfilecontent",
    ]
    HIGHLIGHT_FIELDS: list[str] = [
        "title",
        "description",
        "freemanualtags_searchable",
        "blocks_plaintext",
        "subjects",
        "manualfilecontent",
    ]
    HIGHLIGHT_TYPE: str = "fvh"

    # Access allow-lists
    ALLOWED_CONTENT_TYPES: list[str] = ["Manual"]
    REVIEW_STATE_MAPPING: dict[str, list[str]] = {"Manual": ["published"]}

    # Facets, a YAML file takes precedence over FACETS when set
    FACETS: list[FacetConfig] = [
        FacetConfig(name="kompasscomponent", field_path="kompasscomponent", is_nested=True),
        FacetConfig(name="targetaudience", field_path="targetaudience", is_nested=True),
        FacetConfig(name="organisationunit", field_path="organisationunit", is_nested=True),
        FacetConfig(name="informationtype", field_path="informationtype", is_nested=True),
    ]
    FACET_CONFIG_FILE: Path | None = None
    FACET_BUCKET_SIZE: int = Field(default=DEFAULT_BUCKET_SIZE, ge=1)

    FORCE_FUZZY: bool = True  # search for `word` and `word~`
    QUERY_ANALYZER: str | None = None
    TOP_HITS_SIZE: int = 1

    LOG_LEVEL: str = "INFO"


search_settings = SearchSettings()
