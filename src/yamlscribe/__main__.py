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
"""Command line front end: print the completions for one cursor position."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from yamlscribe.common import create_base_parser, fatal, process_input
from yamlscribe.config import PluginConfig, ScribeConfig
from yamlscribe.datasets import EnumRegistry
from yamlscribe.debugging import Dbg
from yamlscribe.document import CompletionTrigger, Position, TextDocument
from yamlscribe.errors import ErrorCollector, SchemaDefinitionError
from yamlscribe.loader import load_schema_json
from yamlscribe.lsp.completions import CompletionSuggestion
from yamlscribe.lsp.types import LSPCompletionList
from yamlscribe.resolution.engine import SchemaCompletionResolver
from yamlscribe.types import TriggerKind


def build_parser() -> argparse.ArgumentParser:
    parser = create_base_parser("Print schema-driven completions for a position in a YAML document.")
    parser.add_argument("--schema", required=True, type=Path, help="JSON schema definition")
    parser.add_argument(
        "--dataset", action="append", default=[], type=Path, metavar="FILE", help="JSON file of named enum datasets (repeatable)")
    parser.add_argument("--line", type=int, help="Zero-based cursor line (default: last line)")
    parser.add_argument("--character", type=int, help="Zero-based cursor column (default: end of line)")

    trigger_group = parser.add_mutually_exclusive_group()
    trigger_group.add_argument("--trigger-character", metavar="CHAR", help="Completion was triggered by typing CHAR")
    trigger_group.add_argument(
        "--automatic", action="store_true", help="Completion was triggered while typing rather than explicitly invoked")

    parser.add_argument("--indent", type=int, help="Spaces per nesting level (default: detect from the document)")
    parser.add_argument(
        "--anonymous-root", action="store_true", help="Top-level keys are schema keys rather than user-chosen object names")
    parser.add_argument(
        "--disable-plugin", action="append", default=[], metavar="PLUGIN", help="Hide schema nodes gated by PLUGIN (repeatable)")
    parser.add_argument("--strict-schema", action="store_true", help="Treat unknown element types and other schema problems as fatal")
    parser.add_argument("--lsp", action="store_true", help="Emit an LSP CompletionList as JSON")
    return parser


def make_trigger(args: argparse.Namespace) -> CompletionTrigger:
    if args.trigger_character is not None:
        return CompletionTrigger(TriggerKind.TRIGGER_CHARACTER, args.trigger_character)
    if args.automatic:
        return CompletionTrigger(TriggerKind.TRIGGER_FOR_INCOMPLETE)
    return CompletionTrigger(TriggerKind.INVOKE)


def make_position(document: TextDocument, args: argparse.Namespace) -> Position:
    line = args.line if args.line is not None else document.line_count - 1
    if args.character is not None:
        return Position(line, args.character)
    if 0 <= line < document.line_count:
        return Position(line, len(document.line_at(line)))
    return Position(line, 0)


def format_listing(items: list[CompletionSuggestion]) -> str:
    lines = []
    for item in items:
        fields = [item.label, item.kind.name.lower(), json.dumps(item.insert_text) if item.insert_text is not None else "-"]
        if item.retrigger:
            fields.append("+retrigger")
        lines.append("\t".join(fields))
    return "\n".join(lines)


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()

    if args.indent is not None and args.indent <= 0:
        parser.error("--indent must be a positive number of spaces")

    content, filename = process_input(args.input_file)
    error_collector = ErrorCollector()

    datasets = EnumRegistry()
    for dataset_path in args.dataset:
        try:
            datasets.load_json(dataset_path, error_collector)
        except (OSError, json.JSONDecodeError) as e:
            fatal(f"{dataset_path}: error: {e}")

    try:
        schema = load_schema_json(args.schema, datasets, error_collector, strict=args.strict_schema)
    except (OSError, json.JSONDecodeError) as e:
        fatal(f"{args.schema}: error: {e}")
    except SchemaDefinitionError as e:
        fatal(str(e))

    if error_collector.has_errors():
        if args.strict_schema:
            fatal(error_collector.get_error_summary())
        print(error_collector.get_error_summary(), file=sys.stderr)

    config = ScribeConfig(indent_width=args.indent, named_root=not args.anonymous_root, debug=args.debug)
    resolver = SchemaCompletionResolver(datasets, PluginConfig.with_disabled(args.disable_plugin), config, Dbg(args.debug))

    document = TextDocument(content, uri=filename)
    items = resolver.resolve(document, make_position(document, args), make_trigger(args), schema)

    if args.lsp:
        completion_list: LSPCompletionList = {"isIncomplete": False, "items": [item.to_lsp_dict() for item in items or []]}
        print(json.dumps(completion_list, indent=2))
    elif items:
        print(format_listing(items))


if __name__ == "__main__":
    main()
