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
Resolution entry point.

On an empty line the resolver offers structure: the keys (or list dash, or
dynamic key template) allowed at the cursor's nesting level. On a key or
list-item line, when completion was explicitly invoked, it offers values for
the element that line belongs to. Every failure yields no suggestions.
"""

from __future__ import annotations

from typing import Sequence

from yamlscribe.config import PluginConfig, ScribeConfig
from yamlscribe.datasets import EnumRegistry
from yamlscribe.debugging import Dbg
from yamlscribe.document import (CompletionTrigger, Position, TextDocument, get_indentation, get_key_chain,
                                 get_used_indentation, is_empty_line, is_key, is_list, text_after_key,
                                 text_after_list_dash)
from yamlscribe.lsp.completions import CompletionSuggestion, LSPCompletionItemKind
from yamlscribe.schema import Schema, filter_schema_with_enabled_plugins
from yamlscribe.types import ElementType, TriggerKind
from .context import CompletionSchemaContext
from .handlers import provide_structure_completion, provide_value_completion
from .navigator import find_element, locate


class SchemaCompletionResolver:
    """Resolves completions against a schema. Holds collaborators only, no per-request state."""

    def __init__(
            self,
            datasets: EnumRegistry | None = None,
            plugins: PluginConfig | None = None,
            config: ScribeConfig | None = None,
            dbg: Dbg | None = None) -> None:
        self.datasets = datasets or EnumRegistry()
        self.plugins = plugins or PluginConfig()
        self.config = config or ScribeConfig()
        self.dbg = dbg or Dbg(self.config.debug)

    def resolve(self, document: TextDocument, position: Position, trigger: CompletionTrigger,
                schema: Schema) -> list[CompletionSuggestion] | None:
        if not document.contains(position):
            self.dbg(f"position {position.line}:{position.character} is outside the document")
            return None

        schema = filter_schema_with_enabled_plugins(schema, self.plugins)

        if is_empty_line(document, position.line):
            with self.dbg.scope("structure"):
                items = self.resolve_structure_completion(document, position, schema)
                self.dbg.outcome(items)
                return items

        if trigger.kind == TriggerKind.INVOKE:
            with self.dbg.scope("value"):
                items = self.resolve_value_completion(document, position, trigger, schema)
                self.dbg.outcome(items)
                return items

        self.dbg(f"nothing to complete for trigger {trigger.kind.name} on a non-empty line")
        return None

    def indent_width(self, document: TextDocument) -> int:
        if self.config.indent_width is not None:
            return self.config.indent_width
        return get_used_indentation(document.text)

    def _navigation_keys(self, chain: Sequence[str]) -> tuple[Sequence[str], int]:
        if self.config.named_root:
            return chain[1:], 1
        return chain, 0

    def resolve_structure_completion(self, document: TextDocument, position: Position,
                                     schema: Schema) -> list[CompletionSuggestion] | None:
        chain = get_key_chain(document, position)
        self.dbg.keys("key chain", chain)
        if self.config.named_root and not chain:
            return None

        keys, start_level = self._navigation_keys(chain)
        location = locate(schema, keys, start_level, self.dbg)
        if location is None:
            return None

        unit = self.indent_width(document)
        current = get_indentation(document.line_at(position.line))
        # Compensates for a cursor line indented less or more than the resolved level expects
        indentation = " " * max(0, location.level * unit - current)

        node = location.node
        if location.is_branch:
            return self.generate_schema_keys_completion(node, indentation, " " * unit)

        if node.type == ElementType.LIST:
            return [CompletionSuggestion("-", LSPCompletionItemKind.SNIPPET, insert_text=f"{indentation}- $0", retrigger=True)]

        if node.type == ElementType.KEY_LIST:
            return [
                CompletionSuggestion("New Key", LSPCompletionItemKind.SNIPPET, insert_text=f"{indentation}$1: $2", retrigger=True)
            ]

        return None

    def generate_schema_keys_completion(self, schema: Schema, indentation: str, indent_unit: str) -> list[CompletionSuggestion]:
        """One structure suggestion per key: named keys, then array keys, then the wildcard."""
        items: list[CompletionSuggestion] = []

        for key, element in schema.items():
            items.extend(provide_structure_completion(key, element, indentation, indent_unit))

        if schema.array_key is not None:
            for key, element in schema.array_key.expand():
                items.extend(provide_structure_completion(key, element, indentation, indent_unit))

        if schema.wildcard is not None:
            items.append(
                CompletionSuggestion(
                    schema.wildcard.display,
                    LSPCompletionItemKind.FILE,
                    detail=schema.wildcard.element.detail,
                    insert_text=f"{indentation}$1:"))

        return items

    def resolve_value_completion(self, document: TextDocument, position: Position, trigger: CompletionTrigger,
                                 schema: Schema) -> list[CompletionSuggestion] | None:
        if is_key(document, position.line):
            extractor = text_after_key
        elif is_list(document, position.line):
            extractor = text_after_list_dash
        else:
            self.dbg("line is neither a key nor a list item")
            return None

        chain = get_key_chain(document, position, include_line_key=True)
        self.dbg.keys("key chain", chain)
        keys, _ = self._navigation_keys(chain)

        element = find_element(schema, keys, self.dbg)
        if element is None or not self.plugins.is_enabled(element.plugin):
            return None

        context = CompletionSchemaContext(
            document=document,
            position=position,
            trigger=trigger,
            datasets=self.datasets,
            text_extractor=extractor,
            dbg=self.dbg)
        return provide_value_completion(element, context)


def generate_file_completion(
        document: TextDocument,
        position: Position,
        trigger: CompletionTrigger,
        schema: Schema,
        *,
        datasets: EnumRegistry | None = None,
        plugins: PluginConfig | None = None,
        config: ScribeConfig | None = None) -> list[CompletionSuggestion] | None:
    """One-shot resolution with freshly constructed collaborators."""
    return SchemaCompletionResolver(datasets, plugins, config).resolve(document, position, trigger, schema)
