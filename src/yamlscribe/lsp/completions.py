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
Completion suggestion type and snippet helpers.

Suggestions are plain immutable values; `to_lsp_dict` renders one as an LSP
CompletionItem with snippet insert text.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable

from yamlscribe.common import SystemDefaults
from yamlscribe.interning import intern_lsp_string
from .types import LSPCommand, LSPCompletionItem


class LSPCompletionItemKind(IntEnum):
    """The CompletionItemKind values suggestions are tagged with."""
    TEXT = 1
    PROPERTY = 10
    ENUM = 13
    SNIPPET = 15
    FILE = 17
    ENUM_MEMBER = 20
    OPERATOR = 24


SNIPPET_FORMAT = 2

RETRIGGER_COMMAND: LSPCommand = {
    "title": SystemDefaults.RETRIGGER_TITLE,
    "command": SystemDefaults.RETRIGGER_COMMAND,
}


@dataclass(slots=True, frozen=True)
class CompletionSuggestion:
    """A candidate to insert. `insert_text` is a snippet; `retrigger` reopens completion after acceptance."""
    label: str
    kind: LSPCompletionItemKind
    insert_text: str | None = None
    detail: str | None = None
    sort_text: str | None = None
    retrigger: bool = False

    def to_lsp_dict(self) -> LSPCompletionItem:
        optional = (
            ("detail", self.detail or None),
            ("sortText", self.sort_text),
            ("insertText", self.insert_text),
            ("insertTextFormat", SNIPPET_FORMAT if self.insert_text is not None else None),
            ("command", dict(RETRIGGER_COMMAND) if self.retrigger else None),
        )
        item: LSPCompletionItem = {intern_lsp_string("label"): self.label, intern_lsp_string("kind"): int(self.kind)}
        item.update((intern_lsp_string(name), value) for name, value in optional if value is not None)
        return item


class SnippetBuilder:
    """Helpers for composing snippet insert text."""

    @staticmethod
    def escape(text: str) -> str:
        """Escape literal text so it is never read as a placeholder."""
        return text.replace("\\", "\\\\").replace("$", "\\$").replace("}", "\\}")

    @staticmethod
    def choice(index: int, options: Iterable[str]) -> str:
        """A `${index|a,b|}` choice placeholder."""
        options_text = ",".join(option.replace("\\", "\\\\").replace("|", "\\|").replace(",", "\\,") for option in options)
        return f"${{{index}|{options_text}|}}"

    @staticmethod
    def sort_rank(index: int) -> str:
        """Zero-padded rank keeping declaration order under lexical sorting."""
        return f"{index:0{SystemDefaults.SORT_TEXT_WIDTH}d}"
