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
Canonical string instances.

Schema key names, type tags and LSP field names are hashed and compared on
every completion request. Loading a schema and serializing a suggestion route
them through the tables below so equal strings share one object.
"""

from __future__ import annotations

import sys
from types import MappingProxyType
from typing import Iterable

from yamlscribe.types import ElementType, SpecialKey


class InternTable:
    """Pre-interned known strings; anything else goes through `sys.intern`."""

    def __init__(self, known: Iterable[str]) -> None:
        self.known = MappingProxyType({value: sys.intern(value) for value in known})

    def __call__(self, value: str) -> str:
        return self.known.get(value) or sys.intern(value)

    def __contains__(self, value: object) -> bool:
        return value in self.known


SCHEMA_KEYS = InternTable(key.value for key in SpecialKey)
ELEMENT_TYPES = InternTable(tag.value for tag in ElementType)
LSP_FIELDS = InternTable(
    ("label", "kind", "detail", "sortText", "insertText", "insertTextFormat", "command", "title", "isIncomplete", "items"))


def intern_schema_key(key: str) -> str:
    return SCHEMA_KEYS(key)


def intern_element_type(tag: str) -> str:
    return ELEMENT_TYPES(tag)


def intern_lsp_string(field: str) -> str:
    return LSP_FIELDS(field)
