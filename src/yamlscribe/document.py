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
Document primitives and purely textual cursor-context questions.

Nothing in here knows about schemas: these helpers answer whether a line is
empty, a key or a list item, which keys enclose a position by indentation,
and what text precedes the cursor.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

from yamlscribe.common import RegexPatterns, SystemDefaults
from yamlscribe.types import TriggerKind


@dataclass(slots=True, frozen=True)
class Position:
    """Zero-based line and character offset."""
    line: int
    character: int

    def translate(self, line_delta: int = 0, character_delta: int = 0) -> Position:
        return Position(self.line + line_delta, self.character + character_delta)


@dataclass(slots=True, frozen=True)
class CompletionTrigger:
    kind: TriggerKind = TriggerKind.INVOKE
    character: str | None = None


@dataclass(slots=True, frozen=True)
class YamlKey:
    """An ancestor key found by indentation, with the line it is declared on."""
    key: str
    line: int
    indent: int


class TextDocument:
    """An in-memory line-addressable text document."""

    def __init__(self, text: str, uri: str = "untitled:document") -> None:
        self.uri = uri
        self._lines = [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]

    @classmethod
    def from_lines(cls, lines: list[str], uri: str = "untitled:document") -> TextDocument:
        return cls("\n".join(lines), uri)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def text(self) -> str:
        return "\n".join(self._lines)

    def line_at(self, index: int) -> str:
        if index < 0 or index >= len(self._lines):
            raise IndexError(f"line {index} out of range (document has {len(self._lines)} lines)")
        return self._lines[index]

    def get_text(self, start: Position, end: Position) -> str:
        if start.line == end.line:
            return self.line_at(start.line)[start.character:end.character]
        parts = [self.line_at(start.line)[start.character:]]
        parts.extend(self._lines[start.line + 1:end.line])
        parts.append(self.line_at(end.line)[:end.character])
        return "\n".join(parts)

    def contains(self, position: Position) -> bool:
        return 0 <= position.line < len(self._lines) and position.character >= 0


class PreviousSymbolRegexes:
    NONSPACE: Final = RegexPatterns.PREVIOUS_NONSPACE
    DEFAULT: Final = RegexPatterns.PREVIOUS_DEFAULT
    BRACKET: Final = RegexPatterns.PREVIOUS_BRACKET


def get_indentation(line: str) -> int:
    return len(line) - len(line.lstrip())


def get_used_indentation(text: str, default: int = SystemDefaults.INDENT_SPACES) -> int:
    """Indentation width of the first nested key in `text`, or `default` when there is none.

    Blank lines between a key and its first child are skipped.
    """
    match = RegexPatterns.USED_INDENTATION.search(text)
    return len(match.group(1)) if match else default


def is_empty_line(document: TextDocument, line_index: int) -> bool:
    return RegexPatterns.EMPTY_LINE.match(document.line_at(line_index)) is not None


def is_key(document: TextDocument, line_index: int) -> bool:
    return RegexPatterns.YAML_KEY.match(document.line_at(line_index).strip()) is not None


def is_list(document: TextDocument, line_index: int) -> bool:
    return RegexPatterns.LIST_ITEM.match(document.line_at(line_index).strip()) is not None


def get_key(document: TextDocument, line_index: int) -> str:
    return document.line_at(line_index).strip().split(":")[0]


def get_upstream_key(document: TextDocument, line_index: int) -> YamlKey | None:
    """The nearest key at or above `line_index`, regardless of indentation."""
    for i in range(line_index, -1, -1):
        line = document.line_at(i)
        if RegexPatterns.YAML_KEY.match(line.strip()):
            return YamlKey(line.strip().split(":")[0].strip(), i, get_indentation(line))
    return None


def get_parent_keys(document: TextDocument, position: Position, include_line_key: bool = False) -> list[YamlKey]:
    """
    Enclosing keys of a position, innermost first.

    Walks upwards and keeps every key line whose indentation is strictly
    smaller than the last one kept. A non-key line counts as one column deeper
    than its indentation so a key at the same indentation still encloses it.
    With `include_line_key`, the key declared on the cursor line is returned
    first.
    """
    keys: list[YamlKey] = []
    line_index = position.line
    current_indent = get_indentation(document.line_at(line_index))

    if not is_key(document, line_index):
        current_indent += 1
    elif include_line_key:
        keys.append(YamlKey(get_key(document, line_index), line_index, current_indent))

    for i in range(line_index, -1, -1):
        line = document.line_at(i)
        if RegexPatterns.YAML_KEY.match(line.strip()):
            line_indent = get_indentation(line)
            if line_indent < current_indent:
                keys.append(YamlKey(line.strip().split(":")[0], i, line_indent))
                current_indent = line_indent
    return keys


def get_key_chain(document: TextDocument, position: Position, include_line_key: bool = False) -> list[str]:
    """Ancestor key names, outermost first."""
    return [yaml_key.key for yaml_key in reversed(get_parent_keys(document, position, include_line_key))]


def is_inside_key(document: TextDocument, line_index: int, key: str) -> bool:
    """Whether the nearest key above a non-key line is `key`."""
    if is_key(document, line_index):
        return False

    for i in range(line_index, -1, -1):
        line = document.line_at(i).strip()
        if line.startswith(f"{key}:"):
            return True
        if RegexPatterns.YAML_KEY.match(line):
            return False
    return False


def get_word_before_position(document: TextDocument, position: Position) -> str:
    text = document.line_at(position.line)[:position.character].strip()
    words = RegexPatterns.WHITESPACE.split(text)
    return words[-1] if words else ""


def get_char_before(document: TextDocument, position: Position, offset: int) -> str:
    """The `offset` characters immediately before the cursor, or '' near the line start."""
    if position.character < offset:
        return ""
    return document.get_text(position.translate(0, -offset), position)


def previous_symbol(pattern: re.Pattern[str], document: TextDocument, position: Position, depth: int = 0) -> str:
    """
    The last special symbol before the cursor according to `pattern`.

    With `depth` > 0 the search continues at the end of previous lines, blank
    lines being skipped without consuming depth.
    """
    line = document.line_at(position.line)
    match = pattern.search(line[:position.character])
    if match:
        return match.group(1)
    if depth > 0 and position.line > 0:
        if not line.strip():
            return previous_symbol(pattern, document, position.translate(-1), depth)
        end_of_previous = Position(position.line - 1, len(document.line_at(position.line - 1)))
        return previous_symbol(pattern, document, end_of_previous, depth - 1)
    return ""


def is_after_comment(document: TextDocument, position: Position) -> bool:
    return RegexPatterns.AFTER_COMMENT.search(document.line_at(position.line)[:position.character]) is not None


def text_after_key(text: str) -> str:
    """Text following the first colon of a key line."""
    _, sep, rest = text.partition(":")
    return rest if sep else ""


def text_after_list_dash(text: str) -> str:
    """Text following the dash of a list item line."""
    _, sep, rest = text.partition("-")
    return rest if sep else ""
