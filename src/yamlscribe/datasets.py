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
Named enumeration datasets.

An enum dataset maps a literal to its description. Element nodes refer to a
dataset by name and the resolver looks it up through an `EnumRegistry` it is
handed at construction time.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from yamlscribe.errors import ErrorCollector, SchemaDefinitionError


@dataclass(slots=True, frozen=True)
class EnumValue:
    """One literal of an enum dataset."""
    description: str | None = None
    names: tuple[str, ...] = ()


class EnumDataset:
    """An ordered literal -> EnumValue mapping, replaced wholesale on update."""

    def __init__(self, identifier: str, entries: Mapping[str, EnumValue] | None = None) -> None:
        self.identifier = identifier
        self._dataset: Mapping[str, EnumValue] = MappingProxyType({})
        self._comma_list = ""
        if entries is not None:
            self.update_dataset(entries)

    def update_dataset(self, entries: Mapping[str, EnumValue]) -> None:
        # Aliases point at the same value; the new mapping is published in one assignment
        dataset: dict[str, EnumValue] = {}
        for literal, value in entries.items():
            dataset[literal] = value
            for alias in value.names:
                dataset.setdefault(alias, value)
        self._dataset = MappingProxyType(dataset)
        self._comma_list = ",".join(dataset.keys())

    def get_dataset(self) -> Mapping[str, EnumValue]:
        return self._dataset

    def get_comma_list(self) -> str:
        return self._comma_list

    def __contains__(self, literal: object) -> bool:
        return literal in self._dataset

    def __len__(self) -> int:
        return len(self._dataset)

    def __repr__(self) -> str:
        return f"EnumDataset({self.identifier!r}, {len(self)} entries)"


class EnumRegistry:
    """Dataset provider: resolves dataset names (case-insensitively) to `EnumDataset`s."""

    def __init__(self, datasets: Iterable[EnumDataset] = ()) -> None:
        self._datasets: Mapping[str, EnumDataset] = MappingProxyType({ds.identifier.lower(): ds for ds in datasets})

    def register(self, dataset: EnumDataset) -> None:
        updated = dict(self._datasets)
        updated[dataset.identifier.lower()] = dataset
        self._datasets = MappingProxyType(updated)

    def get_enum(self, name: str) -> EnumDataset | None:
        return self._datasets.get(name.lower())

    def names(self) -> list[str]:
        return [ds.identifier for ds in self._datasets.values()]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], source: str = "<datasets>",
                  error_collector: ErrorCollector | None = None) -> 'EnumRegistry':
        registry = cls()
        registry.update_from_dict(data, source, error_collector)
        return registry

    def update_from_dict(self, data: Mapping[str, Any], source: str = "<datasets>",
                         error_collector: ErrorCollector | None = None) -> None:
        """Register every dataset in a `{name: entries}` mapping."""
        if not isinstance(data, Mapping):
            error = SchemaDefinitionError(source, (), "dataset file must contain an object of named datasets")
            if error_collector is None:
                raise error
            error_collector.add_error(error)
            return

        for name, raw_entries in data.items():
            try:
                self.register(EnumDataset(name, parse_enum_entries(raw_entries, source, (name,))))
            except SchemaDefinitionError as e:
                if error_collector is None:
                    raise
                error_collector.add_error(e)

    def load_json(self, path: str | Path, error_collector: ErrorCollector | None = None) -> None:
        path = Path(path)
        with path.open(encoding="utf-8") as fh:
            data = json.load(fh)
        self.update_from_dict(data, str(path), error_collector)


def parse_enum_entries(raw: Any, source: str, path: tuple[str, ...]) -> dict[str, EnumValue]:
    """
    Accepts a list of literals, or a mapping of literal to a description string,
    to None, or to an object with optional `description` and `name` (aliases).
    """
    if isinstance(raw, list):
        if not all(isinstance(item, str) for item in raw):
            raise SchemaDefinitionError(source, path, "dataset lists may only contain strings")
        return {item: EnumValue() for item in raw}

    if not isinstance(raw, Mapping):
        error = SchemaDefinitionError(source, path, f"expected a list or an object, got {type(raw).__name__}")
        error.add_resolution_hint("use [\"LITERAL\", ...] or {\"LITERAL\": {\"description\": \"...\"}}")
        raise error

    entries: dict[str, EnumValue] = {}
    for literal, value in raw.items():
        if value is None:
            entries[literal] = EnumValue()
        elif isinstance(value, str):
            entries[literal] = EnumValue(description=value)
        elif isinstance(value, Mapping):
            names = value.get("name", ())
            if isinstance(names, str):
                names = (names,)
            entries[literal] = EnumValue(description=value.get("description"), names=tuple(names))
        else:
            raise SchemaDefinitionError(source, path + (literal,), f"unsupported enum value of type {type(value).__name__}")
    return entries
