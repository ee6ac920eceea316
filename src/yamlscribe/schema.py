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
"""
The schema model: a recursive, declarative description of valid document structure.

A `Schema` holds three kinds of keys: verbatim named keys, at most one
wildcard key standing in for any user-chosen name, and at most one array key
standing in for a dynamically computed family of literal keys. Everything here
is immutable; helpers that "modify" a schema return a new one.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Callable, Iterator, Mapping, Sequence, Union

from yamlscribe.config import PluginConfig
from yamlscribe.datasets import EnumValue
from yamlscribe.types import ElementType

KeysSource = Union['Schema', Callable[[], 'Schema']]


@dataclass(slots=True, frozen=True)
class SchemaElement:
    """One typed node of the schema tree. Only the fields relevant to `type` are used."""
    type: ElementType | str | None = None
    description: str | None = None
    values: tuple[str, ...] | None = None
    dataset: str | None = None
    keys: KeysSource | None = None
    entries: tuple[SchemaElement, ...] | None = None
    max_depth: bool = False
    plugin: str | None = None
    display: str | None = None
    link: str | None = None

    def __post_init__(self) -> None:
        if self.values is not None and not isinstance(self.values, tuple):
            object.__setattr__(self, "values", tuple(self.values))
        if self.entries is not None and not isinstance(self.entries, tuple):
            object.__setattr__(self, "entries", tuple(self.entries))

    @property
    def detail(self) -> str | None:
        return self.description or self.link


@dataclass(slots=True, frozen=True)
class WildcardKey:
    """A single node that stands in for any key name the user types."""
    element: SchemaElement

    @property
    def display(self) -> str:
        return self.element.display or "New Key"


@dataclass(slots=True, frozen=True)
class ArrayKey:
    """A node representing a closed, dynamically computed family of literal keys."""
    element: SchemaElement
    possible_key_values: Callable[[], Mapping[str, EnumValue]]

    def override(self, key: str) -> SchemaElement | None:
        """Return a fresh element for an admissible key, or None if the key is not admissible."""
        value = self.possible_key_values().get(key)
        if value is None:
            return None
        return self._with_description(value)

    def expand(self) -> list[tuple[str, SchemaElement]]:
        return [(key, self._with_description(value)) for key, value in self.possible_key_values().items()]

    def _with_description(self, value: EnumValue) -> SchemaElement:
        if value.description is None:
            return self.element
        return replace(self.element, description=value.description)


@dataclass(slots=True, frozen=True)
class Schema:
    """Mapping from key name to element, plus the optional wildcard and array-key variants."""
    named: Mapping[str, SchemaElement] = field(default_factory=dict)
    wildcard: WildcardKey | None = None
    array_key: ArrayKey | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "named", MappingProxyType(dict(self.named)))

    def __contains__(self, key: object) -> bool:
        return key in self.named

    def __len__(self) -> int:
        return len(self.named)

    def __iter__(self) -> Iterator[str]:
        return iter(self.named)

    def get(self, key: str) -> SchemaElement | None:
        return self.named.get(key)

    def items(self) -> Iterator[tuple[str, SchemaElement]]:
        return iter(self.named.items())

    def is_empty(self) -> bool:
        return not self.named and self.wildcard is None and self.array_key is None


EMPTY_SCHEMA: Schema = Schema()


def get_key_schema(keys: KeysSource | None) -> Schema:
    """Normalise a `keys` field, which may be a Schema or a callable producing one."""
    if keys is None:
        return EMPTY_SCHEMA
    if isinstance(keys, Schema):
        return keys
    return keys()


def filter_schema_with_enabled_plugins(schema: Schema, plugins: PluginConfig) -> Schema:
    """Return a copy of `schema` without the branches whose plugin is disabled.

    Callable `keys` are left untouched since they are only materialised on demand.
    """

    def _filter_element(element: SchemaElement) -> SchemaElement:
        if isinstance(element.keys, Schema):
            return replace(element, keys=filter_schema_with_enabled_plugins(element.keys, plugins))
        return element

    named = {key: _filter_element(element) for key, element in schema.items() if plugins.is_enabled(element.plugin)}

    wildcard = schema.wildcard
    if wildcard is not None:
        wildcard = WildcardKey(_filter_element(wildcard.element)) if plugins.is_enabled(wildcard.element.plugin) else None

    array_key = schema.array_key
    if array_key is not None and not plugins.is_enabled(array_key.element.plugin):
        array_key = None

    return Schema(named, wildcard, array_key)


def get_schema_element(keys: Sequence[str], schema: Schema) -> SchemaElement | None:
    """Exact-path lookup of the element a key path ends on.

    Wildcard and array keys are expanded, `max_depth` is ignored. Returns None
    when the path leaves the schema.
    """
    if not keys:
        return None

    head, rest = keys[0], keys[1:]
    element = schema.get(head)

    if element is None:
        if schema.wildcard is not None:
            wildcard = schema.wildcard.element
            if not rest:
                return wildcard
            if wildcard.keys is not None:
                return get_schema_element(rest, get_key_schema(wildcard.keys))
            return None
        if schema.array_key is not None:
            element = schema.array_key.override(head)
        if element is None:
            return None

    if not rest:
        return element
    if element.type == ElementType.KEY and element.keys is not None:
        return get_schema_element(rest, get_key_schema(element.keys))
    return None


def expand_schema(schema: Schema, insert: Schema) -> Schema:
    """Merge `insert` into a copy of `schema`; keys of `insert` win."""
    named = dict(schema.named)
    named.update(insert.named)
    return Schema(named, insert.wildcard or schema.wildcard, insert.array_key or schema.array_key)


def add_schema_aliases(schema: Schema, alias_map: Mapping[str, Sequence[str]]) -> Schema:
    """Return a copy of `schema` where each alias shares the element of its source key."""
    named = dict(schema.named)
    for key, aliases in alias_map.items():
        element = schema.get(key)
        if element is None:
            continue
        for alias in aliases:
            named[alias] = element
    return Schema(named, schema.wildcard, schema.array_key)


def inherit_schema_options(schema: Schema, link: str | None = None, plugin: str | None = None) -> Schema:
    """Propagate `link` and `plugin` down to every descendant that does not set its own."""

    def _inherit(element: SchemaElement) -> SchemaElement:
        element = replace(element, link=element.link or link, plugin=element.plugin or plugin)
        if isinstance(element.keys, Schema):
            element = replace(element, keys=inherit_schema_options(element.keys, element.link, element.plugin))
        return element

    named = {key: _inherit(element) for key, element in schema.items()}
    wildcard = WildcardKey(_inherit(schema.wildcard.element)) if schema.wildcard else None
    array_key = replace(schema.array_key, element=_inherit(schema.array_key.element)) if schema.array_key else None
    return Schema(named, wildcard, array_key)


def generate_numbers_in_range(min_value: float, max_value: float, step: float, is_float: bool = False,
                              start: float | None = None) -> list[str]:
    """Numbers from `min_value` to `max_value` inclusive, optionally led by `start`."""
    if step <= 0:
        raise ValueError(f"step must be positive, got {step}")

    result = []
    if start is not None:
        result.append(f"{start:.2f}" if is_float else str(start))
        min_value += step

    # Each value is min_value + i * step, never a running sum
    count = int((max_value - min_value) / step + 1e-9) + 1
    for i in range(max(count, 0)):
        value = min_value + i * step
        result.append(f"{value:.2f}" if is_float else str(int(value)))
    return result


def generate_vectors_in_range(min_value: float, max_value: float, step: float, is_float: bool = False) -> list[str]:
    """Every `x,y,z` combination of the numbers in range."""
    axis = generate_numbers_in_range(min_value, max_value, step, is_float)
    return [",".join(combo) for combo in itertools.product(axis, repeat=3)]
