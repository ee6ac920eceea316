#
#  Licensed to the Apache Software Foundation (ASF) under one
#  or more contributor license agreements.  See the NOTICE file
#  distributed with this work for additional information
#  regarding copyright ownership.  The ASF licenses this file
#  to you under the Apache License, Version 2.0 (the
#  "License"); you may not use this file except in compliance
#  with the License.  You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
#  limitations under the License.
"""Fuzzy "did you mean" lookups for schema keys, element types and fields."""

from __future__ import annotations

from typing import Iterable

from rapidfuzz import fuzz, process

from yamlscribe.schema import Schema
from yamlscribe.types import ElementType


class SuggestionEngine:
    """
    Ranks candidate names by `fuzz.ratio` against a misspelled one.

    Matching ignores case, since a key typed with the wrong case is still a
    likely slip, but suggestions keep the candidate's own spelling.
    """

    def __init__(self, threshold: float = 70.0, limit: int = 2) -> None:
        self.threshold = threshold
        self.limit = limit

    def ranked(self, symbol: str, candidates: Iterable[str]) -> list[tuple[str, float]]:
        """Best matches first, as (candidate, score) pairs scoring at least `threshold`."""
        choices = list(dict.fromkeys(candidates))
        if not symbol or not choices:
            return []
        return [(choice, score) for choice, score, _ in process.extract(
            symbol, choices, scorer=fuzz.ratio, processor=str.lower, limit=self.limit, score_cutoff=self.threshold)]

    def get_suggestions(self, symbol: str, candidates: Iterable[str]) -> list[str]:
        return [choice for choice, _ in self.ranked(symbol, candidates)]

    def suggest_schema_keys(self, key: str, schema: Schema) -> list[str]:
        """Closest named or array keys of `schema` to a key that failed to match."""
        candidates = list(schema.named)
        if schema.array_key is not None:
            candidates += schema.array_key.possible_key_values()
        return self.get_suggestions(key, candidates)

    def suggest_element_types(self, type_tag: str) -> list[str]:
        return self.get_suggestions(type_tag, (element_type.value for element_type in ElementType))
