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
"""Shared fixtures and helpers for the completion tests."""

from __future__ import annotations

from typing import Final

from yamlscribe.config import PluginConfig, ScribeConfig
from yamlscribe.datasets import EnumDataset, EnumRegistry, EnumValue
from yamlscribe.document import CompletionTrigger, Position, TextDocument
from yamlscribe.lsp.completions import CompletionSuggestion
from yamlscribe.resolution.engine import SchemaCompletionResolver
from yamlscribe.schema import ArrayKey, Schema, SchemaElement, WildcardKey
from yamlscribe.types import ElementType

__all__: Final[list[str]] = [
    "CURSOR",
    "document_at_cursor",
    "labels",
    "inserts",
    "resolve",
    "mob_schema",
    "skill_schema",
    "slot_schema",
    "sample_datasets",
]

CURSOR: Final = "|"


def document_at_cursor(text: str) -> tuple[TextDocument, Position]:
    """Build a document from text holding a single `|` cursor marker."""
    lines = text.split("\n")
    for index, line in enumerate(lines):
        column = line.find(CURSOR)
        if column >= 0:
            lines[index] = line[:column] + line[column + 1:]
            return TextDocument.from_lines(lines), Position(index, column)
    raise ValueError(f"no cursor marker in {text!r}")


def labels(items: list[CompletionSuggestion] | None) -> list[str]:
    return [item.label for item in items or []]


def inserts(items: list[CompletionSuggestion] | None) -> list[str | None]:
    return [item.insert_text for item in items or []]


def resolve(
        text: str,
        schema: Schema,
        trigger: CompletionTrigger | None = None,
        datasets: EnumRegistry | None = None,
        plugins: PluginConfig | None = None,
        config: ScribeConfig | None = None) -> list[CompletionSuggestion] | None:
    document, position = document_at_cursor(text)
    resolver = SchemaCompletionResolver(datasets or sample_datasets(), plugins, config)
    return resolver.resolve(document, position, trigger or CompletionTrigger(), schema)


def sample_datasets() -> EnumRegistry:
    return EnumRegistry(
        [
            EnumDataset("EntityType", {
                "ZOMBIE": EnumValue("Undead walker"),
                "SKELETON": EnumValue("Bony archer")
            }),
            EnumDataset("Item", {
                "DIAMOND": EnumValue(),
                "STICK": EnumValue("A stick")
            }),
            EnumDataset("Slot", {
                "Slot1": EnumValue("First slot"),
                "Slot2": EnumValue()
            }),
        ])


def mob_schema() -> Schema:
    """A mob definition file: the top-level key is the mob's own name."""
    return Schema(
        {
            "Type": SchemaElement(ElementType.ENUM, "The entity type", dataset="EntityType"),
            "Display": SchemaElement(ElementType.STRING, "Display name"),
            "Health": SchemaElement(ElementType.FLOAT, "Maximum health", values=("10", "20", "40")),
            "Despawn": SchemaElement(ElementType.BOOLEAN, "Whether the mob despawns"),
            "Options": SchemaElement(
                ElementType.KEY,
                "Mob options",
                keys=Schema(
                    {
                        "MovementSpeed": SchemaElement(ElementType.FLOAT, "Movement speed"),
                        "Silent": SchemaElement(ElementType.BOOLEAN, "Mute the mob"),
                    })),
            "Skills": SchemaElement(ElementType.LIST, "Skill lines"),
            "Drops": SchemaElement(
                ElementType.LIST,
                "Drop table",
                entries=(
                    SchemaElement(ElementType.ENUM, dataset="Item"),
                    SchemaElement(ElementType.INTEGER, values=("1", "2")),
                    SchemaElement(ElementType.FLOAT, values=("0.5", "1.0")),
                )),
            "Equipment": SchemaElement(ElementType.LIST, "Worn items", dataset="Item", values=("HEAD", "CHEST")),
            "Variables": SchemaElement(ElementType.KEY_LIST, "Mob variables"),
            "Disguise": SchemaElement(
                ElementType.KEY,
                "Disguise settings",
                plugin="LibsDisguises",
                keys=Schema({"Baby": SchemaElement(ElementType.BOOLEAN, "Baby disguise")})),
            "Nested": SchemaElement(
                ElementType.KEY,
                max_depth=True,
                keys=Schema(
                    {"Inner": SchemaElement(ElementType.KEY, keys=Schema({"Deep": SchemaElement(ElementType.STRING)}))})),
        })


def skill_schema() -> Schema:
    """A schema with both dynamic key variants, used without a named root."""
    mechanic = SchemaElement(
        ElementType.KEY,
        "A skill",
        display="New Skill",
        keys=Schema({"Cooldown": SchemaElement(ElementType.INTEGER, values=("1", "5"))}))
    slot = SchemaElement(
        ElementType.KEY, "An equipment slot", keys=Schema({"Item": SchemaElement(ElementType.ENUM, dataset="Item")}))
    slots = {"Slot1": EnumValue("First slot"), "Slot2": EnumValue()}

    return Schema(
        {"Version": SchemaElement(ElementType.INTEGER, values=("1", "2"))},
        array_key=ArrayKey(slot, lambda: slots),
        wildcard=WildcardKey(mechanic),
    )


def slot_schema() -> Schema:
    """Array-key only: the admissible keys come from the `Slot` dataset."""
    datasets = sample_datasets()
    slot = SchemaElement(
        ElementType.KEY, "An equipment slot", keys=Schema({"Item": SchemaElement(ElementType.ENUM, dataset="Item")}))
    return Schema(array_key=ArrayKey(slot, lambda: datasets.get_enum("Slot").get_dataset()))
