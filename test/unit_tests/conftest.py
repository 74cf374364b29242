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

from facetsearch.core.config import AccessConfig, FacetConfig, SerializerConfig
from facetsearch.serializer import RequestSerializer


@pytest.fixture
def nested_facet() -> FacetConfig:
    return FacetConfig(name="informationtype", field_path="informationtype", is_nested=True, bucket_size=30)


@pytest.fixture
def other_nested_facet() -> FacetConfig:
    return FacetConfig(name="targetaudience", field_path="targetaudience", is_nested=True, bucket_size=20)


@pytest.fixture
def list_facet() -> FacetConfig:
    return FacetConfig(name="freemanualtags", field_path="freemanualtags", bucket_size=50)


@pytest.fixture
def access() -> AccessConfig:
    return AccessConfig(
        allowed_content_types=frozenset({"Manual"}),
        allowed_review_states=frozenset({"published", "internally_published"}),
    )


@pytest.fixture
def serializer_config(nested_facet, other_nested_facet, list_facet, access) -> SerializerConfig:
    return SerializerConfig(
        facets=(nested_facet, other_nested_facet, list_facet),
        access=access,
        searched_fields=("title^1.4", "description"),
        highlight_fields=("title", "description"),
    )


@pytest.fixture
def serializer(serializer_config) -> RequestSerializer:
    return RequestSerializer(serializer_config)
