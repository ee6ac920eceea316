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
Build a `Schema` from JSON-compatible data.

A schema document is an object of key name to element object:

    {
      "Type":    {"type": "enum", "dataset": "MobType"},
      "Options": {"type": "key", "max_depth": true, "keys": {...}},
      "Drops":   {"type": "list", "entries": [{"type": "enum", "dataset": "Item"}, {"type": "integer"}]},
      "*KEY":    {"type": "key", "display": "New Skill", "keys": {...}},
      "*ARRAYKEY": {"type": "key", "possible_key_values": "Slot", "keys": {...}}
    }

`*KEY` and `*ARRAYKEY` become the wildcard and array-key variants. An array
key takes its admissible keys from a static list or object, or from the name
of a registered dataset, looked up each time the keys are needed.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Final, Mapping

from yamlscribe.datasets import EnumRegistry, EnumValue, parse_enum_entries
from yamlscribe.errors import ErrorCollector, SchemaDefinitionError, UnknownElementTypeError
from yamlscribe.interning import intern_element_type, intern_schema_key
from yamlscribe.schema import (EMPTY_SCHEMA, ArrayKey, Schema, SchemaElement, WildcardKey, add_schema_aliases,
                               generate_numbers_in_range, generate_vectors_in_range, inherit_schema_options)
from yamlscribe.suggestions import SuggestionEngine
from yamlscribe.types import ElementType, SpecialKey

ELEMENT_FIELDS: Final[frozenset[str]] = frozenset(
    {
        "type", "description", "values", "dataset", "keys", "entries", "max_depth", "plugin", "display", "link",
        "possible_key_values", "aliases", "range"
    })

_STRING_FIELDS: Final = ("description", "dataset", "plugin", "display", "link")


class SchemaLoader:
    """
    Converts nested dicts into schema values.

    Without an error collector the first problem raises. With one, problems
    are collected and loading continues with the offending field dropped.
    `strict` controls whether unrecognized type tags are problems at all;
    when they are not, they are kept verbatim and use the default handler.
    """

    def __init__(
            self,
            source: str = "<schema>",
            datasets: EnumRegistry | None = None,
            error_collector: ErrorCollector | None = None,
            strict: bool = True) -> None:
        self.source = source
        self.datasets = datasets or EnumRegistry()
        self.error_collector = error_collector
        self.strict = strict
        self.suggestions = SuggestionEngine()

    def load(self, data: Any) -> Schema:
        if not isinstance(data, Mapping):
            error = SchemaDefinitionError(self.source, (), f"schema must be an object of keys, got {type(data).__name__}")
            self._report(error)
            return EMPTY_SCHEMA
        return self._build_schema(data, ())

    def _report(self, error: SchemaDefinitionError) -> None:
        if self.error_collector is None:
            raise error
        self.error_collector.add_error(error)

    def _build_schema(self, data: Mapping[str, Any], path: tuple[str, ...]) -> Schema:
        named: dict[str, SchemaElement] = {}
        aliases: dict[str, list[str]] = {}
        wildcard: WildcardKey | None = None
        array_key: ArrayKey | None = None

        for raw_key, raw_element in data.items():
            key = intern_schema_key(str(raw_key))
            key_path = path + (key,)
            element = self._build_element(raw_element, key_path)
            if element is None:
                continue

            if key == SpecialKey.WILDKEY.value:
                wildcard = WildcardKey(element)
            elif key == SpecialKey.ARRAYKEY.value:
                possible = self._possible_key_values(raw_element.get("possible_key_values"), key_path)
                if possible is not None:
                    array_key = ArrayKey(element, possible)
            else:
                named[key] = element
                key_aliases = self._string_list(raw_element, "aliases", key_path)
                if key_aliases:
                    aliases[key] = [intern_schema_key(alias) for alias in key_aliases]

        schema = Schema(named, wildcard, array_key)
        return add_schema_aliases(schema, aliases) if aliases else schema

    def _build_element(self, raw: Any, path: tuple[str, ...]) -> SchemaElement | None:
        if not isinstance(raw, Mapping):
            self._report(SchemaDefinitionError(self.source, path, f"expected an element object, got {type(raw).__name__}"))
            return None

        for field_name in raw:
            if field_name not in ELEMENT_FIELDS:
                error = SchemaDefinitionError(self.source, path, f"unknown element field '{field_name}'")
                suggestions = self.suggestions.get_suggestions(str(field_name), ELEMENT_FIELDS)
                if suggestions:
                    error.add_resolution_hint(f"did you mean '{suggestions[0]}'?")
                self._report(error)

        element_type = self._element_type(raw.get("type"), path)
        strings = {name: self._optional_str(raw, name, path) for name in _STRING_FIELDS}

        values = self._string_list(raw, "values", path)
        if values is None and "range" in raw:
            values = self._range_values(raw["range"], element_type, path)

        keys: Schema | None = None
        if "keys" in raw:
            if isinstance(raw["keys"], Mapping):
                keys = self._build_schema(raw["keys"], path)
                if strings["link"] or strings["plugin"]:
                    keys = inherit_schema_options(keys, strings["link"], strings["plugin"])
            else:
                self._report(SchemaDefinitionError(self.source, path + ("keys",), "'keys' must be an object"))

        entries: tuple[SchemaElement, ...] | None = None
        if "entries" in raw:
            if isinstance(raw["entries"], list):
                # A broken slot keeps its position so later slots stay aligned
                entries = tuple(
                    self._build_element(entry, path + (str(index),)) or SchemaElement()
                    for index, entry in enumerate(raw["entries"]))
            else:
                self._report(SchemaDefinitionError(self.source, path + ("entries",), "'entries' must be a list of elements"))

        return SchemaElement(
            type=element_type,
            values=tuple(values) if values is not None else None,
            keys=keys,
            entries=entries,
            max_depth=bool(raw.get("max_depth", False)),
            **strings)

    def _element_type(self, tag: Any, path: tuple[str, ...]) -> ElementType | str | None:
        if tag is None:
            return None
        if not isinstance(tag, str):
            self._report(SchemaDefinitionError(self.source, path + ("type",), "'type' must be a string"))
            return None

        try:
            return ElementType.from_str(tag)
        except ValueError:
            if self.strict:
                error = UnknownElementTypeError(self.source, path, tag)
                error.add_symbol_suggestion(self.suggestions.suggest_element_types(tag))
                self._report(error)
            return intern_element_type(tag)

    def _optional_str(self, raw: Mapping[str, Any], name: str, path: tuple[str, ...]) -> str | None:
        value = raw.get(name)
        if value is not None and not isinstance(value, str):
            self._report(SchemaDefinitionError(self.source, path + (name,), f"'{name}' must be a string"))
            return None
        return value

    def _string_list(self, raw: Mapping[str, Any], name: str, path: tuple[str, ...]) -> list[str] | None:
        value = raw.get(name)
        if value is None:
            return None
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            self._report(SchemaDefinitionError(self.source, path + (name,), f"'{name}' must be a list of strings"))
            return None
        return value

    def _range_values(self, raw: Any, element_type: ElementType | str | None, path: tuple[str, ...]) -> list[str] | None:
        if not isinstance(raw, Mapping) or "min" not in raw or "max" not in raw:
            error = SchemaDefinitionError(self.source, path + ("range",), "'range' needs at least 'min' and 'max'")
            error.add_resolution_hint('use {"min": 0, "max": 10, "step": 1}')
            self._report(error)
            return None

        is_float = element_type in (ElementType.FLOAT, ElementType.VECTOR) or bool(raw.get("float", False))
        try:
            if element_type == ElementType.VECTOR:
                return generate_vectors_in_range(raw["min"], raw["max"], raw.get("step", 1), is_float)
            return generate_numbers_in_range(raw["min"], raw["max"], raw.get("step", 1), is_float, raw.get("start"))
        except (TypeError, ValueError) as e:
            self._report(SchemaDefinitionError(self.source, path + ("range",), str(e)))
            return None

    def _possible_key_values(self, raw: Any, path: tuple[str, ...]) -> Callable[[], Mapping[str, EnumValue]] | None:
        if isinstance(raw, str):
            registry, dataset_name = self.datasets, raw

            def from_dataset() -> Mapping[str, EnumValue]:
                dataset = registry.get_enum(dataset_name)
                return dataset.get_dataset() if dataset is not None else {}

            return from_dataset

        if isinstance(raw, (list, Mapping)):
            try:
                static = parse_enum_entries(raw, self.source, path + ("possible_key_values",))
            except SchemaDefinitionError as e:
                self._report(e)
                return None
            return lambda: static

        error = SchemaDefinitionError(self.source, path, "an array key needs 'possible_key_values'")
        error.add_context_note("either a dataset name, a list of keys or an object of key to description")
        self._report(error)
        return None


def load_schema(
        data: Any,
        source: str = "<schema>",
        datasets: EnumRegistry | None = None,
        error_collector: ErrorCollector | None = None,
        strict: bool = True) -> Schema:
    return SchemaLoader(source, datasets, error_collector, strict).load(data)


def load_schema_json(
        path: str | Path,
        datasets: EnumRegistry | None = None,
        error_collector: ErrorCollector | None = None,
        strict: bool = True) -> Schema:
    """Load a schema from a JSON file. I/O and JSON syntax errors propagate."""
    path = Path(path)
    with path.open(encoding="utf-8") as fh:
        data = json.load(fh)
    return load_schema(data, str(path), datasets, error_collector, strict)
