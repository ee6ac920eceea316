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
Element handler registry.

Each element type maps to a pair of functions: `structure` builds the
suggestions for starting a new line with a key of that type, `value` builds
the suggestions for what follows the colon or dash. Types without an entry,
and elements without a type, use the default pair.
"""

from __future__ import annotations

from dataclasses import replace
from types import MappingProxyType
from typing import Callable, Final, Mapping, NamedTuple

from yamlscribe.lsp.completions import CompletionSuggestion, LSPCompletionItemKind, SnippetBuilder
from yamlscribe.schema import SchemaElement
from yamlscribe.types import BooleanLiteral, ElementType
from .context import CompletionSchemaContext
from .entry_list import resolve_entry_list
from .helpers import generate_enum_completions, get_list_completion_needed_spaces

StructureCompletion = Callable[[str, SchemaElement, str, str], list[CompletionSuggestion]]
ValueCompletion = Callable[[SchemaElement, CompletionSchemaContext], 'list[CompletionSuggestion] | None']


class ElementHandler(NamedTuple):
    structure: StructureCompletion
    value: ValueCompletion


def _key_snippet(key: str, element: SchemaElement, kind: LSPCompletionItemKind, insert_text: str) -> list[CompletionSuggestion]:
    return [CompletionSuggestion(label=key, kind=kind, detail=element.detail, insert_text=insert_text, retrigger=True)]


# Default: untyped, string, numeric and any unrecognized tag


def default_value(element: SchemaElement, context: CompletionSchemaContext) -> list[CompletionSuggestion] | None:
    if not element.values:
        return None
    return [
        CompletionSuggestion(
            label=value,
            kind=LSPCompletionItemKind.ENUM_MEMBER,
            insert_text=SnippetBuilder.escape(value) + context.suffix,
            sort_text=SnippetBuilder.sort_rank(index),
            retrigger=context.retrigger) for index, value in enumerate(element.values)
    ]


def default_structure(key: str, element: SchemaElement, indentation: str, indent_unit: str) -> list[CompletionSuggestion]:
    return _key_snippet(key, element, LSPCompletionItemKind.FILE, f"{indentation}{SnippetBuilder.escape(key)}: $0")


# Boolean


def boolean_value(element: SchemaElement, context: CompletionSchemaContext) -> list[CompletionSuggestion] | None:
    kind = LSPCompletionItemKind.OPERATOR if context.retrigger else LSPCompletionItemKind.ENUM_MEMBER
    return [
        CompletionSuggestion(label=literal.value, kind=kind, insert_text=literal.value + context.suffix, retrigger=context.retrigger)
        for literal in BooleanLiteral
    ]


def boolean_structure(key: str, element: SchemaElement, indentation: str, indent_unit: str) -> list[CompletionSuggestion]:
    choice = SnippetBuilder.choice(1, [literal.value for literal in BooleanLiteral])
    return _key_snippet(key, element, LSPCompletionItemKind.PROPERTY, f"{indentation}{SnippetBuilder.escape(key)}: {choice}$0")


# Enum


def enum_value(element: SchemaElement, context: CompletionSchemaContext) -> list[CompletionSuggestion] | None:
    if not element.dataset:
        return None
    return generate_enum_completions(element.dataset, context)


def enum_structure(key: str, element: SchemaElement, indentation: str, indent_unit: str) -> list[CompletionSuggestion]:
    return _key_snippet(key, element, LSPCompletionItemKind.ENUM, f"{indentation}{SnippetBuilder.escape(key)}: $0")


# List


def list_value(element: SchemaElement, context: CompletionSchemaContext) -> list[CompletionSuggestion] | None:
    if context.document is None or context.position is None or context.trigger is None:
        return None

    if element.dataset:
        space = get_list_completion_needed_spaces(context.document, context.position, context.trigger)
        if space is None:
            context.dbg("list item already has its first token")
            return None

        items = generate_enum_completions(element.dataset, context, space)
        if items and element.values:
            choice = SnippetBuilder.choice(1, element.values)
            items = [replace(item, insert_text=f"{item.insert_text} {choice}") for item in items]
        return items

    if element.entries:
        return resolve_entry_list(element, context, provide_value_completion)

    return None


def list_structure(key: str, element: SchemaElement, indentation: str, indent_unit: str) -> list[CompletionSuggestion]:
    return _key_snippet(key, element, LSPCompletionItemKind.PROPERTY, f"{indentation}{SnippetBuilder.escape(key)}:\n{indentation}- $0")


# Entry list


def entry_list_value(element: SchemaElement, context: CompletionSchemaContext) -> list[CompletionSuggestion] | None:
    return resolve_entry_list(element, context, provide_value_completion)


def entry_list_structure(key: str, element: SchemaElement, indentation: str, indent_unit: str) -> list[CompletionSuggestion]:
    return _key_snippet(key, element, LSPCompletionItemKind.SNIPPET, f"{indentation}{SnippetBuilder.escape(key)}: $0")


# Key and key list


def key_value(element: SchemaElement, context: CompletionSchemaContext) -> list[CompletionSuggestion] | None:
    if element.values:
        return default_value(element, context)
    return None


def key_structure(key: str, element: SchemaElement, indentation: str, indent_unit: str) -> list[CompletionSuggestion]:
    return _key_snippet(
        key, element, LSPCompletionItemKind.PROPERTY, f"{indentation}{SnippetBuilder.escape(key)}:\n{indentation}{indent_unit}$0")


def key_list_structure(key: str, element: SchemaElement, indentation: str, indent_unit: str) -> list[CompletionSuggestion]:
    return _key_snippet(
        key, element, LSPCompletionItemKind.PROPERTY,
        f"{indentation}{SnippetBuilder.escape(key)}:\n{indentation}{indent_unit}$1: $2$0")


DEFAULT_HANDLER: Final = ElementHandler(default_structure, default_value)

HANDLERS: Final[Mapping[ElementType, ElementHandler]] = MappingProxyType(
    {
        ElementType.BOOLEAN: ElementHandler(boolean_structure, boolean_value),
        ElementType.ENUM: ElementHandler(enum_structure, enum_value),
        ElementType.LIST: ElementHandler(list_structure, list_value),
        ElementType.ENTRY_LIST: ElementHandler(entry_list_structure, entry_list_value),
        ElementType.KEY: ElementHandler(key_structure, key_value),
        ElementType.KEY_LIST: ElementHandler(key_list_structure, default_value),
    })


def get_handler(type_tag: ElementType | str | None) -> ElementHandler:
    """Handler pair for a type tag; never rejects a tag."""
    if not type_tag:
        return DEFAULT_HANDLER
    try:
        element_type = ElementType(type_tag)
    except ValueError:
        return DEFAULT_HANDLER
    return HANDLERS.get(element_type, DEFAULT_HANDLER)


def provide_value_completion(element: SchemaElement, context: CompletionSchemaContext) -> list[CompletionSuggestion] | None:
    context.dbg(f"value completion via {element.type or 'default'} handler")
    return get_handler(element.type).value(element, context)


def provide_structure_completion(key: str, element: SchemaElement, indentation: str,
                                 indent_unit: str) -> list[CompletionSuggestion]:
    return get_handler(element.type).structure(key, element, indentation, indent_unit)
