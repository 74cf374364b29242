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


class FacetSearchError(Exception):
    """Base exception for this package."""

    pass


class ConfigurationError(FacetSearchError, ValueError):
    """Raised when the serializer configuration can not be built.

    Subclasses ValueError so model validators surface it as a ValidationError.
    """

    pass


class FacetConfigError(ConfigurationError):
    """Raised when a facet definition is inconsistent.

    Examples:
        >>> print(FacetConfigError('informationtype', 'a facet can not be both nested and a list filter'))
        Facet 'informationtype' is invalid: a facet can not be both nested and a list filter
    """

    def __init__(self, name: str, reason: str) -> None:
        message = f"Facet '{name}' is invalid: {reason}"
        super().__init__(message)


class DuplicateFacetError(ConfigurationError):
    """Raised when two facets share a name or an aggregation path.

    Examples:
        >>> print(DuplicateFacetError('targetaudience'))
        Facet 'targetaudience' is configured more than once.
    """

    def __init__(self, name: str) -> None:
        message = f"Facet '{name}' is configured more than once."
        super().__init__(message)


class FacetConfigFileError(ConfigurationError):
    """Raised when a facet configuration file is missing or can not be parsed."""

    def __init__(self, path: str, reason: str) -> None:
        message = f"Facet configuration file '{path}' could not be loaded: {reason}"
        super().__init__(message)
