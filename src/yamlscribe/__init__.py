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
"""Schema-driven completion for indentation-structured YAML documents."""

from yamlscribe.config import PluginConfig, ScribeConfig
from yamlscribe.datasets import EnumDataset, EnumRegistry, EnumValue
from yamlscribe.document import CompletionTrigger, Position, TextDocument
from yamlscribe.loader import load_schema, load_schema_json
from yamlscribe.lsp.completions import CompletionSuggestion, LSPCompletionItemKind
from yamlscribe.resolution.engine import SchemaCompletionResolver, generate_file_completion
from yamlscribe.schema import ArrayKey, Schema, SchemaElement, WildcardKey
from yamlscribe.types import ElementType, TriggerKind

__version__ = "1.0.0"

__all__ = [
    "ArrayKey",
    "CompletionSuggestion",
    "CompletionTrigger",
    "ElementType",
    "EnumDataset",
    "EnumRegistry",
    "EnumValue",
    "LSPCompletionItemKind",
    "PluginConfig",
    "Position",
    "Schema",
    "SchemaCompletionResolver",
    "SchemaElement",
    "ScribeConfig",
    "TextDocument",
    "TriggerKind",
    "WildcardKey",
    "generate_file_completion",
    "load_schema",
    "load_schema_json",
]
