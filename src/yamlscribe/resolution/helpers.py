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

from __future__ import annotations

from yamlscribe.common import RegexPatterns
from yamlscribe.document import (CompletionTrigger, Position, PreviousSymbolRegexes, TextDocument, get_char_before,
                                 previous_symbol)
from yamlscribe.lsp.completions import CompletionSuggestion, LSPCompletionItemKind, SnippetBuilder
from yamlscribe.types import TriggerKind
from .context import CompletionSchemaContext


def generate_enum_completions(dataset_name: str, context: CompletionSchemaContext,
                              prefix: str = "") -> list[CompletionSuggestion] | None:
    """One suggestion per dataset literal, inserted as `prefix + literal + context.suffix`."""
    dataset = context.datasets.get_enum(dataset_name) if context.datasets is not None else None
    if dataset is None:
        context.dbg(f"dataset '{dataset_name}' is not available")
        return None

    kind = LSPCompletionItemKind.ENUM_MEMBER if context.retrigger else LSPCompletionItemKind.ENUM
    return [
        CompletionSuggestion(
            label=literal,
            kind=kind,
            detail=value.description,
            insert_text=prefix + SnippetBuilder.escape(literal) + context.suffix,
            retrigger=context.retrigger) for literal, value in dataset.get_dataset().items()
    ]


def get_list_completion_needed_spaces(document: TextDocument, position: Position, trigger: CompletionTrigger) -> str | None:
    """
    Spacing to insert before a dataset-driven list item value.

    Returns ' ' or '' when completing right after a list dash, and None when
    the line already holds a complete first token or the cursor is not in
    list-item value position.
    """
    line = document.line_at(position.line)
    if RegexPatterns.LIST_ITEM_FIRST_TOKEN.search(line):
        return None

    if trigger.character is None:
        if previous_symbol(PreviousSymbolRegexes.NONSPACE, document, position) != "-":
            return None
        return " " if get_char_before(document, position, 1) == "-" else ""

    if get_char_before(document, position, 2) != "- ":
        return None

    if trigger.kind == TriggerKind.TRIGGER_CHARACTER and trigger.character == " ":
        return ""

    return " "
