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

from dataclasses import dataclass
from typing import Sequence

from yamlscribe.debugging import Dbg
from yamlscribe.schema import Schema, SchemaElement, get_key_schema, get_schema_element
from yamlscribe.suggestions import SuggestionEngine
from yamlscribe.types import ElementType


@dataclass(slots=True, frozen=True)
class NodeLocation:
    """The schema node governing a nesting level, and that level."""
    node: Schema | SchemaElement
    level: int

    @property
    def is_branch(self) -> bool:
        return isinstance(self.node, Schema)


def _report_not_found(key: str, schema: Schema, dbg: Dbg) -> None:
    if not dbg.enabled:
        return
    message = f"no schema node for '{key}'"
    suggestions = SuggestionEngine().suggest_schema_keys(key, schema)
    if suggestions:
        message += f", did you mean: {', '.join(suggestions)}?"
    dbg(message)


def locate(schema: Schema, keys: Sequence[str], level: int = 0, dbg: Dbg | None = None) -> NodeLocation | None:
    """
    Walk an outermost-first key chain down `schema`.

    Returns the node that governs the innermost level together with its
    nesting level, or None when the chain leaves the schema:
      - KEY with nested keys descends one level, unless it sets `max_depth`,
        in which case its nested schema is returned and the rest of the chain
        is ignored.
      - KEY_LIST returns the element itself one level down.
      - LIST returns the element at the same level, its items being siblings
        of the list key.
      - Any other element returns the schema that contains it.
    """
    dbg = dbg or Dbg(False)
    if not keys:
        return NodeLocation(schema, level)

    head, rest = keys[0], keys[1:]
    element = schema.get(head)

    if element is None:
        if schema.wildcard is not None:
            dbg(f"'{head}' taken by the wildcard key")
            return locate(get_key_schema(schema.wildcard.element.keys), rest, level + 1, dbg)
        if schema.array_key is not None:
            element = schema.array_key.override(head)
            if element is not None:
                dbg(f"'{head}' taken by the array key")
        if element is None:
            _report_not_found(head, schema, dbg)
            return None

    if element.type == ElementType.KEY and element.keys is not None:
        nested = get_key_schema(element.keys)
        if element.max_depth:
            dbg(f"'{head}' stops descent at level {level + 1}")
            return NodeLocation(nested, level + 1)
        with dbg:
            return locate(nested, rest, level + 1, dbg)
    if element.type == ElementType.KEY_LIST:
        return NodeLocation(element, level + 1)
    if element.type == ElementType.LIST:
        return NodeLocation(element, level)
    return NodeLocation(schema, level)


def find_element(schema: Schema, keys: Sequence[str], dbg: Dbg | None = None) -> SchemaElement | None:
    """Exact-path lookup of the terminal element, for value completion."""
    element = get_schema_element(keys, schema)
    if element is None and dbg is not None:
        dbg(f"no schema element at {'.'.join(keys) or '<root>'}")
    return element
