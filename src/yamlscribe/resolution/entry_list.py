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
Positional completion inside an entry list.

An entry list is one textual token holding an ordered, space-delimited
sequence of typed slots, e.g. `ITEM amount chance`. Slot boundaries are
whitespace, so the slot under the cursor is found by counting the
whitespace-terminated fragments that precede it. Brace groups such as
`{a=1 b=2}` are opaque and never split: a group attached to a token stays part
of that token, and a standalone group takes up a slot of its own, so
`"{x y} "` is at slot 1.
"""

from __future__ import annotations

from typing import Callable

from yamlscribe.common import RegexPatterns
from yamlscribe.lsp.completions import CompletionSuggestion
from yamlscribe.schema import SchemaElement
from .context import CompletionSchemaContext

ValueDispatch = Callable[[SchemaElement, CompletionSchemaContext], 'list[CompletionSuggestion] | None']

OPAQUE_GROUP = "{}"


def entry_index(entry_text: str) -> int:
    """Zero-based slot index for the entry text that precedes the cursor.

    Each brace group counts as one token, so `"{x y} "` gives 1 and
    `"skill{a=1 b=2} "` also gives 1.
    """
    masked = RegexPatterns.BRACE_GROUP.sub(OPAQUE_GROUP, entry_text).lstrip()
    fragments = [fragment for fragment in masked.split(" ") if fragment.strip()]
    count = len(fragments)

    # A trailing fragment with no whitespace after it is the slot still being typed
    if fragments and not masked[-1].isspace():
        count -= 1
    return max(count, 0)


def resolve_entry_list(element: SchemaElement, context: CompletionSchemaContext,
                       dispatch: ValueDispatch) -> list[CompletionSuggestion] | None:
    """Delegate value completion to the handler of the slot under the cursor."""
    if not element.entries or context.text_extractor is None:
        return None

    line_before = context.line_before_cursor()
    if line_before is None:
        return None

    index = entry_index(context.text_extractor(line_before))
    if index >= len(element.entries):
        context.dbg(f"entry slot {index} is beyond the {len(element.entries)} declared slots")
        return None

    has_next = index + 1 < len(element.entries)
    context.dbg(f"entry slot {index} of {len(element.entries)}")
    return dispatch(element.entries[index], context.for_slot(has_next))
