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
Definition errors raised while loading schemas and datasets.

Errors are located by source name and key path. Extra lines (context, hints,
"did you mean") ride along as exception notes and are printed after the
message by `ErrorCollector.get_error_summary`.
"""

from __future__ import annotations

from typing import Iterator, Sequence


class SchemaDefinitionError(Exception):
    """Malformed schema or dataset definition, located by its key path."""

    def __init__(self, source: str, path: Sequence[str], message: str) -> None:
        self.source = source
        self.path = tuple(path)
        self.message = message
        super().__init__(f"{source}: {self.location}: error: {message}")

    @property
    def location(self) -> str:
        return ".".join(self.path) or "<root>"

    @property
    def notes(self) -> list[str]:
        return list(getattr(self, "__notes__", ()))

    def add_context_note(self, context: str) -> None:
        self.add_note(f"Context: {context}")

    def add_resolution_hint(self, hint: str) -> None:
        self.add_note(f"Hint: {hint}")


class UnknownElementTypeError(SchemaDefinitionError):
    """An element `type` tag outside the known set."""

    def __init__(self, source: str, path: Sequence[str], type_tag: str) -> None:
        self.type_tag = type_tag
        super().__init__(source, path, f"Unrecognized element type: '{type_tag}'")

    def add_symbol_suggestion(self, suggestions: Sequence[str]) -> None:
        """Note the closest known tag, if any."""
        if suggestions:
            self.add_note(f"     | Did you mean: {suggestions[0]}?")


class ErrorCollector:
    """Accumulates definition errors so a whole file is reported at once."""

    def __init__(self) -> None:
        self.errors: list[SchemaDefinitionError] = []

    def add_error(self, error: SchemaDefinitionError) -> None:
        self.errors.append(error)

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def __len__(self) -> int:
        return len(self.errors)

    def __iter__(self) -> Iterator[SchemaDefinitionError]:
        return iter(self.errors)

    def get_error_summary(self) -> str:
        if not self.errors:
            return "No errors found."

        plural = "" if len(self.errors) == 1 else "s"
        summary = [f"Found {len(self.errors)} error{plural}:"]
        for error in self.errors:
            summary += [str(error), *error.notes]
        return "\n".join(summary)
