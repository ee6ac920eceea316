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
"""Wire shapes of the completion results handed to an LSP client."""

from __future__ import annotations

from typing import TypedDict


class LSPCommand(TypedDict):
    """Client command run after an item is accepted."""
    title: str
    command: str


class LSPCompletionItem(TypedDict, total=False):
    label: str
    kind: int
    detail: str
    sortText: str
    insertText: str
    # 2 marks insertText as a snippet
    insertTextFormat: int
    command: LSPCommand


class LSPCompletionList(TypedDict):
    isIncomplete: bool
    items: list[LSPCompletionItem]
