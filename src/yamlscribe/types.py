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

from enum import Enum, IntEnum


class BooleanLiteral(str, Enum):
    """Boolean literal values offered for boolean elements"""
    TRUE = "true"
    FALSE = "false"


class ElementType(str, Enum):
    """Closed tag set of schema element kinds"""
    KEY = "key"
    KEY_LIST = "key_list"
    LIST = "list"
    ENTRY_LIST = "entry_list"
    ENUM = "enum"
    BOOLEAN = "boolean"
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    VECTOR = "vector"

    @classmethod
    def from_str(cls, type_str: str) -> 'ElementType':
        """Create ElementType from its tag, accepting either the value or the member name."""
        lowered = type_str.strip().lower()
        for et in cls:
            if et.value == lowered or et.name.lower() == lowered:
                return et
        raise ValueError(f"Unknown ElementType string: {type_str}")


class SpecialKey(str, Enum):
    """Pseudo-keys used by serialized schemas for the wildcard and array-key variants"""
    WILDKEY = "*KEY"
    ARRAYKEY = "*ARRAYKEY"


class TriggerKind(IntEnum):
    """How a completion request was started, LSP CompletionTriggerKind values."""
    INVOKE = 1
    TRIGGER_CHARACTER = 2
    TRIGGER_FOR_INCOMPLETE = 3
