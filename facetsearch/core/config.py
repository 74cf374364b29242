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

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from facetsearch.core.exceptions import DuplicateFacetError, FacetConfigError, FacetConfigFileError
from facetsearch.core.types import BOOST_SEPARATOR, EXACT_SUFFIX, NESTED_AGG_NAME, TOKEN_SUFFIX

if TYPE_CHECKING:
    from facetsearch.settings import SearchSettings

logger = structlog.get_logger(__name__)

DEFAULT_BUCKET_SIZE = 30


class FacetConfig(BaseModel):
    """A categorical filter dimension and the index field backing it."""

    name: str = Field(min_length=1, description="Facet name, also the prefix of its aggregation name.")
    field_path: str = Field(min_length=1, description="Index field (or nested path) the facet filters on.")
    is_nested: bool = Field(default=False, description="Values live in a nested sub-document.")
    is_list_filter: bool | None = Field(
        default=None, description="Values are filtered with a flat terms clause. Defaults to `not is_nested`."
    )
    bucket_size: int = Field(default=DEFAULT_BUCKET_SIZE, ge=1, description="Maximum number of buckets returned.")

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        json_schema_extra={
            "examples": [
                {"name": "informationtype", "field_path": "informationtype", "is_nested": True},
                {"name": "freemanualtags", "field_path": "freemanualtags", "is_list_filter": True, "bucket_size": 50},
            ]
        },
    )

    @model_validator(mode="before")
    @classmethod
    def _derive_list_filter(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("is_list_filter") is None:
            data = {**data, "is_list_filter": not data.get("is_nested", False)}
        return data

    @model_validator(mode="after")
    def _validate_kind(self) -> FacetConfig:
        if self.is_nested and self.is_list_filter:
            raise FacetConfigError(self.name, "a facet can not be both nested and a list filter")
        if not self.is_nested and not self.is_list_filter:
            raise FacetConfigError(self.name, "a facet must be either nested or a list filter")
        return self

    @property
    def agg_name(self) -> str:
        return f"{self.name}_agg"

    @property
    def bucket_name(self) -> str:
        return f"{self.name}_token" if self.is_nested else self.name

    @property
    def agg_path(self) -> str:
        """Dotted path of the bucket aggregation, as emitted by searchkit style UIs.

        Examples:
            >>> FacetConfig(name="informationtype", field_path="informationtype", is_nested=True).agg_path
            'informationtype_agg.inner.informationtype_token'
            >>> FacetConfig(name="freemanualtags", field_path="freemanualtags").agg_path
            'freemanualtags_agg.freemanualtags'
        """
        if self.is_nested:
            return f"{self.agg_name}.{NESTED_AGG_NAME}.{self.bucket_name}"
        return f"{self.agg_name}.{self.bucket_name}"

    @property
    def token_field(self) -> str:
        return f"{self.field_path}{TOKEN_SUFFIX}"

    @property
    def bucket_field(self) -> str:
        """Field the terms aggregation counts on."""
        return self.token_field if self.is_nested else self.field_path


class AccessConfig(BaseModel):
    """Allow-lists derived from the caller's permission context."""

    allowed_content_types: frozenset[str]
    allowed_review_states: frozenset[str]

    model_config = ConfigDict(frozen=True, extra="forbid")

    @classmethod
    def from_review_state_mapping(
        cls, content_types: Iterable[str], mapping: Mapping[str, Iterable[str]]
    ) -> AccessConfig:
        """Allow every review state any of the allowed content types maps to."""
        content_types = list(content_types)
        review_states = {state for content_type in content_types for state in mapping.get(content_type, ())}
        if not review_states:
            logger.warning("No review states allowed for content types", content_types=content_types)
        return cls(allowed_content_types=frozenset(content_types), allowed_review_states=frozenset(review_states))


class SerializerConfig(BaseModel):
    """Everything the request serializer needs besides the search state.

    Built once and shared; the serializer never mutates it.
    """

    facets: tuple[FacetConfig, ...] = ()
    access: AccessConfig
    searched_fields: tuple[str, ...] = Field(min_length=1, description="Weighted fields, e.g. 'title^1.4'.")
    highlight_fields: tuple[str, ...] = ()
    highlight_type: str = "fvh"
    force_fuzzy: bool = True
    analyzer: str | None = None
    top_hits_size: int = Field(default=1, ge=1)

    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="after")
    def _validate_unique_facets(self) -> SerializerConfig:
        seen: set[str] = set()
        for facet in self.facets:
            for key in dict.fromkeys((facet.name, facet.agg_path)):
                if key in seen:
                    raise DuplicateFacetError(key)
                seen.add(key)
        return self

    @classmethod
    def from_settings(cls, settings: SearchSettings) -> SerializerConfig:
        facets = load_facets(settings.FACET_CONFIG_FILE) if settings.FACET_CONFIG_FILE else tuple(settings.FACETS)
        # Facets without an explicit bucket size get the global one
        facets = tuple(
            (
                facet
                if "bucket_size" in facet.model_fields_set
                else FacetConfig.model_validate({**facet.model_dump(), "bucket_size": settings.FACET_BUCKET_SIZE})
            )
            for facet in facets
        )
        return cls(
            facets=facets,
            access=AccessConfig.from_review_state_mapping(settings.ALLOWED_CONTENT_TYPES, settings.REVIEW_STATE_MAPPING),
            searched_fields=tuple(settings.SEARCHED_FIELDS),
            highlight_fields=tuple(settings.HIGHLIGHT_FIELDS),
            highlight_type=settings.HIGHLIGHT_TYPE,
            force_fuzzy=settings.FORCE_FUZZY,
            analyzer=settings.QUERY_ANALYZER,
            top_hits_size=settings.TOP_HITS_SIZE,
        )

    @property
    def exact_fields(self) -> tuple[str, ...]:
        return tuple(exact_field(field) for field in self.searched_fields)

    def get_facet(self, key: str) -> FacetConfig | None:
        """Find a facet by its name or by its aggregation path."""
        for facet in self.facets:
            if key in (facet.name, facet.agg_path):
                return facet
        return None


def exact_field(field: str) -> str:
    """Point a (possibly boosted) field at its exact sub-field.

    Examples:
        >>> exact_field("title^1.4")
        'title.exact^1.4'
        >>> exact_field("blocks_plaintext")
        'blocks_plaintext.exact'
    """
    name, separator, boost = field.partition(BOOST_SEPARATOR)
    return f"{name}{EXACT_SUFFIX}{separator}{boost}"


def read_config(config_file: Path) -> Any:
    try:
        with open(config_file) as stream:
            try:
                return yaml.safe_load(stream)
            except yaml.YAMLError as exception:
                logger.error("failed to parse configuration file", config_file=str(config_file))
                raise FacetConfigFileError(str(config_file), str(exception)) from exception
    except FileNotFoundError as exception:
        logger.error("configuration file not found", config_file=str(config_file))
        raise FacetConfigFileError(str(config_file), "file not found") from exception


def load_facets(config_file: Path) -> tuple[FacetConfig, ...]:
    """Load the facet table from a YAML file.

    The file holds either a list of facets or a mapping with a `facets` list::

        facets:
          - name: informationtype
            field_path: informationtype
            is_nested: true
          - name: freemanualtags
            field_path: freemanualtags
    """
    data = read_config(config_file)
    if isinstance(data, dict):
        data = data.get("facets")
    if not isinstance(data, list):
        raise FacetConfigFileError(str(config_file), "expected a list of facets")
    try:
        facets = tuple(FacetConfig.model_validate(item) for item in data)
    except ValidationError as exception:
        raise FacetConfigFileError(str(config_file), str(exception)) from exception
    logger.debug("Loaded facet configuration", config_file=str(config_file), facets=[f.name for f in facets])
    return facets
