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
from typing import Iterable, Mapping

from yamlscribe.common import SystemDefaults


class PluginConfig:
    """Plugin-enablement provider. Plugins never configured default to enabled."""

    def __init__(self, enabled: Mapping[str, bool] | None = None) -> None:
        self._enabled: dict[str, bool] = dict(enabled or {})

    @classmethod
    def with_disabled(cls, plugins: Iterable[str]) -> 'PluginConfig':
        return cls({plugin: False for plugin in plugins})

    def is_enabled(self, plugin: str | None) -> bool:
        if plugin is None:
            return True
        return self._enabled.setdefault(plugin, True)

    def set_enabled(self, plugin: str, enabled: bool) -> None:
        self._enabled[plugin] = enabled

    def disabled(self) -> list[str]:
        return sorted(name for name, enabled in self._enabled.items() if not enabled)


@dataclass(slots=True, frozen=True)
class ScribeConfig:
    """Resolver settings.

    indent_width: spaces per nesting level, None detects it from the document.
    named_root: top-level keys are user-chosen object names, so the outermost
    ancestor key is skipped and schema navigation starts at level 1.
    """
    indent_width: int | None = None
    named_root: bool = True
    debug: bool = SystemDefaults.DEFAULT_DEBUG

    def __post_init__(self) -> None:
        if self.indent_width is not None and self.indent_width <= 0:
            raise ValueError(f"indent_width must be positive, got {self.indent_width}")
