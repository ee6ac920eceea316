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

import argparse
import re
import sys
from typing import Final, NoReturn, TextIO


class RegexPatterns:
    """Line patterns used by the document helpers"""
    YAML_KEY: Final = re.compile(r'^\s*[^:\s]+:')
    LIST_ITEM: Final = re.compile(r'^\s*-\s?')
    EMPTY_LINE: Final = re.compile(r'^\s*$')
    LIST_ITEM_FIRST_TOKEN: Final = re.compile(r'^\s*-\s*\S+\s', re.MULTILINE)
    BRACE_GROUP: Final = re.compile(r'\{.*?\}')
    USED_INDENTATION: Final = re.compile(r'^[^:\n]+:[ \t]*\n(?:[ \t]*\n)*([ \t]+)\S', re.MULTILINE)
    AFTER_COMMENT: Final = re.compile(r'\s#')
    WHITESPACE: Final = re.compile(r'\s+')

    # Previous "special symbol" lookups, anchored at the end of the text before the cursor
    PREVIOUS_NONSPACE: Final = re.compile(r'([^\w\s:])[\w\s:]*$', re.ASCII)
    PREVIOUS_DEFAULT: Final = re.compile(r'([^\w:])[\w:]*$', re.ASCII)
    PREVIOUS_BRACKET: Final = re.compile(r'([()\[\]{}])[^()\[\]{}]*$')


class SystemDefaults:
    """Defaults shared across the package"""
    DEFAULT_FILENAME: Final = "<stdin>"
    DEFAULT_DEBUG: Final = False
    INDENT_SPACES: Final = 2
    SORT_TEXT_WIDTH: Final = 4
    DEBUG_PREFIX: Final = "[debug]"
    RETRIGGER_COMMAND: Final = "editor.action.triggerSuggest"
    RETRIGGER_TITLE: Final = "Re-trigger completions..."


def fatal(message: str) -> NoReturn:
    """Report `message` on stderr and exit with status 1."""
    sys.stderr.write(message.rstrip("\n") + "\n")
    raise SystemExit(1)


def create_base_parser(description: str) -> argparse.ArgumentParser:
    """Parser with the document argument and `--debug`; callers add their own options."""
    parser = argparse.ArgumentParser(description=description, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument(
        "input_file",
        nargs="?",
        default=sys.stdin,
        type=argparse.FileType("r", encoding="utf-8"),
        help="YAML document to complete in (default: stdin)")
    parser.add_argument("--debug", action="store_true", help="Trace resolution steps on stderr")
    return parser


def process_input(input_file: TextIO) -> tuple[str, str]:
    """Read the whole document, returning its text and a display name."""
    if input_file is sys.stdin:
        return input_file.read(), SystemDefaults.DEFAULT_FILENAME

    with input_file:
        return input_file.read(), input_file.name
