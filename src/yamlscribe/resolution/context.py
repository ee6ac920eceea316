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

from dataclasses import dataclass, field, replace
from typing import Callable

from yamlscribe.datasets import EnumRegistry
from yamlscribe.debugging import Dbg
from yamlscribe.document import CompletionTrigger, Position, TextDocument

TextExtractor = Callable[[str], str]


@dataclass(slots=True, frozen=True)
class CompletionSchemaContext:
    """Call-local inputs for value completion.

    `suffix` is appended after every inserted value and `retrigger` marks the
    produced suggestions as followed by another completion; both are set by
    the entry-list resolver when a further positional slot exists.
    """
    document: TextDocument | None = None
    position: Position | None = None
    trigger: CompletionTrigger | None = None
    datasets: EnumRegistry | None = None
    text_extractor: TextExtractor | None = None
    suffix: str = ""
    retrigger: bool = False
    dbg: Dbg = field(default_factory=lambda: Dbg(False))

    def for_slot(self, has_next: bool) -> CompletionSchemaContext:
        return replace(self, suffix=" " if has_next else "", retrigger=has_next)

    def line_before_cursor(self) -> str | None:
        if self.document is None or self.position is None:
            return None
        return self.document.line_at(self.position.line)[:self.position.character]
