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

from collections.abc import Iterator
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from facetsearch.core.types import BESTMATCH, FilterValue, SortOrder


class FilterChain(BaseModel):
    """A drill-down filter selection: a facet value, optionally narrowed by a child selection.

    Validates from the array encoding used by searchkit style UIs, where a
    chain is `[facet, value]` or `[facet, value, child]`. A chain with fewer
    than two elements is rejected here; the serializer relies on it.
    """

    facet: str
    value: FilterValue
    child: FilterChain | None = None

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        json_schema_extra={
            "examples": [
                ["informationtype_agg.inner.informationtype_token", "FAQ"],
                {"facet": "kompasscomponent", "value": "BEW", "child": {"facet": "targetaudience", "value": "Lehrer"}},
            ]
        },
    )

    @model_validator(mode="before")
    @classmethod
    def _from_array(cls, data: Any) -> Any:
        if isinstance(data, (list, tuple)):
            if len(data) not in (2, 3):
                raise ValueError(f"A filter chain has 2 or 3 elements, got {len(data)}")
            facet, value, *child = data
            return {"facet": facet, "value": value, "child": child[0] if child else None}
        return data

    def pairs(self) -> Iterator[tuple[str, FilterValue]]:
        """Yield every (facet, value) selection of the chain, outermost first."""
        yield self.facet, self.value
        if self.child is not None:
            yield from self.child.pairs()

    @property
    def depth(self) -> int:
        return 1 + (self.child.depth if self.child is not None else 0)


class SearchState(BaseModel):
    """The UI search state the request serializer consumes.

    Defaults match the state a search bar resets to.
    """

    query_string: str = Field(default="", alias="queryString")
    sort_by: str = Field(default=BESTMATCH, alias="sortBy")
    sort_order: SortOrder = Field(default=SortOrder.ASC, alias="sortOrder")
    page: int = 1
    size: int = 10
    layout: str = "list"
    filters: tuple[FilterChain, ...] = ()

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @field_validator("sort_order", mode="before")
    @classmethod
    def _parse_sort_order(cls, value: Any) -> SortOrder:
        return SortOrder.parse(value)

    @field_validator("query_string", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def has_query(self) -> bool:
        return bool(self.query_string.strip())
