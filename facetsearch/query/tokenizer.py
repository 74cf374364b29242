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

"""Classify free-text query words into the buckets the boolean query is built from.

Query syntax understood by the tokenizer:

    +word      the word must match (fuzzy fields)
    +"phrase   the word must match exactly (exact fields), also for wildcards
    -word      the word must not match (exact fields)
    wo*d wo?d  wildcard, should match exactly
    "word"     should match exactly
    word       should match, fuzzy; hyphenated words also match their parts
"""

from collections.abc import Iterable
from dataclasses import dataclass

import structlog

from facetsearch.core.types import FUZZY_SUFFIX

logger = structlog.get_logger(__name__)

QUOTE = '"'
MUST = "+"
MUST_NOT = "-"
HYPHEN = "-"
WILDCARDS = frozenset("*?")


@dataclass(frozen=True)
class QueryBuckets:
    """Query fragments per boolean occurrence and field flavour, in order of appearance."""

    must_not_exact: tuple[str, ...] = ()
    must_exact: tuple[str, ...] = ()
    must_fuzzy: tuple[str, ...] = ()
    should_exact: tuple[str, ...] = ()
    should_fuzzy: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.must_not_exact or self.must_exact or self.must_fuzzy or self.should_exact or self.should_fuzzy)


def split_words(query_string: str) -> list[str]:
    """Split on whitespace, dropping lone quote characters."""
    return [word for word in query_string.split() if word != QUOTE]


def remove_orphan_quote(word: str) -> str:
    """Drop the first quote of a word that is quoted on one end only.

    Leading and trailing signs are ignored when looking at the ends.

    Examples:
        >>> remove_orphan_quote('"foo')
        'foo'
        >>> remove_orphan_quote('+foo"')
        '+foo'
        >>> remove_orphan_quote('"foo"')
        '"foo"'
        >>> remove_orphan_quote('fo"o')
        'fo"o'
    """
    bare = word.strip(MUST).strip(MUST_NOT)
    if bare.startswith(QUOTE) != bare.endswith(QUOTE):
        return word.replace(QUOTE, "", 1)
    return word


def remove_quotes(word: str) -> str:
    return word.replace(QUOTE, "")


def has_wildcard(word: str) -> bool:
    return any(char in WILDCARDS for char in word)


class Tokenizer:
    def __init__(self, force_fuzzy: bool = True):
        self.force_fuzzy = force_fuzzy

    def maybe_fuzzy(self, word: str) -> str:
        return f"{word} {word}{FUZZY_SUFFIX}" if self.force_fuzzy else word

    def enrich_with_word_parts(self, word: str) -> str:
        """Search a hyphenated word also by its parts.

        Examples:
            >>> Tokenizer().enrich_with_word_parts("LSR-Lehrbetrieb")
            'LSR LSR~ Lehrbetrieb Lehrbetrieb~ LSR-Lehrbetrieb LSR-Lehrbetrieb~'
        """
        parts = [part for part in word.split(HYPHEN) if part]
        if HYPHEN not in word or not parts:
            return self.maybe_fuzzy(word)
        return " ".join(self.maybe_fuzzy(part) for part in [*parts, word])

    def tokenize(self, query_string: str) -> QueryBuckets:
        must_not_exact: list[str] = []
        must_exact: list[str] = []
        must_fuzzy: list[str] = []
        should_exact: list[str] = []
        should_fuzzy: list[str] = []

        def append(bucket: list[str], fragment: str) -> None:
            if fragment:
                bucket.append(fragment)

        for word in self._words(query_string):
            if word.startswith(MUST_NOT):
                append(must_not_exact, remove_quotes(word[1:]))
            elif word.startswith(MUST):
                rest = word[1:]
                append(must_exact if QUOTE in rest or has_wildcard(rest) else must_fuzzy, rest)
            elif has_wildcard(word):
                append(should_exact, remove_quotes(word))
            elif QUOTE in word:
                append(should_exact, word)
            else:
                append(should_fuzzy, self.enrich_with_word_parts(word))

        buckets = QueryBuckets(
            must_not_exact=tuple(must_not_exact),
            must_exact=tuple(must_exact),
            must_fuzzy=tuple(must_fuzzy),
            should_exact=tuple(should_exact),
            should_fuzzy=tuple(should_fuzzy),
        )
        logger.debug("Tokenized query", query_string=query_string, buckets=buckets)
        return buckets

    @staticmethod
    def _words(query_string: str) -> Iterable[str]:
        return (remove_orphan_quote(word) for word in split_words(query_string))
