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

from enum import Enum
from typing import Any, TypeAlias

from pydantic import StrictBool, StrictFloat, StrictInt, StrictStr

Clause: TypeAlias = dict[str, Any]
RequestBody: TypeAlias = dict[str, Any]

# Selected bucket keys keep their JSON type; numeric and boolean fields do not bucket on strings
FilterValue: TypeAlias = StrictStr | StrictInt | StrictFloat | StrictBool

BESTMATCH = "bestmatch"

EXACT_SUFFIX = ".exact"
TOKEN_SUFFIX = ".token"
FUZZY_SUFFIX = "~"
BOOST_SEPARATOR = "^"

CONTENT_TYPE_FIELD = "portal_type"
REVIEW_STATE_FIELD = "review_state"

NESTED_AGG_NAME = "inner"
TOP_HITS_AGG_NAME = "top_hit"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: Any) -> "SortOrder":
        """Anything that is not explicitly descending sorts ascending."""
        if isinstance(value, str) and value.lower() == cls.DESC.value:
            return cls.DESC
        return cls.ASC
