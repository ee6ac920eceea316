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

import sys
from contextlib import contextmanager
from typing import Iterator, Sequence, Sized, TextIO

from yamlscribe.common import SystemDefaults


class Dbg:
    """
    Nested trace of a completion request, written to stderr when enabled.

    Each line is prefixed with `[debug]` and indented by the current depth.
    `with dbg:` nests one level; `with dbg.scope(name):` also brackets the
    block between `<name>` and `</name>` lines.
    """

    STEP = "    "

    def __init__(self, enabled: bool, depth: int = 0, stream: TextIO | None = None) -> None:
        self.enabled = enabled
        self.depth = depth
        self.stream = stream

    def __call__(self, msg: str) -> None:
        if self.enabled:
            print(f"{SystemDefaults.DEBUG_PREFIX} {self.STEP * self.depth}{msg}", file=self.stream or sys.stderr)

    def _shift(self, amount: int) -> None:
        if self.enabled:
            self.depth = max(0, self.depth + amount)

    def __enter__(self) -> Dbg:
        self._shift(1)
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._shift(-1)

    @contextmanager
    def scope(self, name: str) -> Iterator[Dbg]:
        self(f"<{name}>")
        self._shift(1)
        try:
            yield self
        finally:
            self._shift(-1)
            self(f"</{name}>")

    def keys(self, label: str, chain: Sequence[str]) -> None:
        self(f"{label}: {' > '.join(chain) or '<root>'}")

    def outcome(self, items: Sized | None) -> None:
        self("no suggestions" if items is None else f"{len(items)} suggestion(s)")
