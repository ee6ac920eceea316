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

import pytest
from utils import document_at_cursor, inserts, labels, sample_datasets

from yamlscribe.document import CompletionTrigger
from yamlscribe.lsp.completions import LSPCompletionItemKind
from yamlscribe.resolution.context import CompletionSchemaContext
from yamlscribe.resolution.handlers import (DEFAULT_HANDLER, HANDLERS, get_handler, provide_structure_completion,
                                            provide_value_completion)
from yamlscribe.resolution.helpers import generate_enum_completions, get_list_completion_needed_spaces
from yamlscribe.schema import SchemaElement
from yamlscribe.types import ElementType, TriggerKind


class TestHandlerRegistry:

    @pytest.mark.parametrize("tag", [None, "", "string", "integer", "float", "vector", "mystery", ElementType.STRING])
    def test_default_handler(self, tag):
        assert get_handler(tag) is DEFAULT_HANDLER

    @pytest.mark.parametrize(
        "tag,element_type", [
            ("boolean", ElementType.BOOLEAN),
            (ElementType.ENUM, ElementType.ENUM),
            ("list", ElementType.LIST),
            ("entry_list", ElementType.ENTRY_LIST),
            ("key", ElementType.KEY),
            ("key_list", ElementType.KEY_LIST),
        ])
    def test_registered_handler(self, tag, element_type):
        assert get_handler(tag) is HANDLERS[element_type]

    def test_unknown_tag_uses_default_values(self):
        element = SchemaElement("mystery", values=("a", "b"))
        assert labels(provide_value_completion(element, CompletionSchemaContext())) == ["a", "b"]


class TestValueHandlers:

    def setup_method(self):
        self.context = CompletionSchemaContext(datasets=sample_datasets())

    @pytest.mark.parametrize(
        "element", [
            SchemaElement(ElementType.BOOLEAN),
            SchemaElement(ElementType.BOOLEAN, values=("yes", "no", "maybe")),
            SchemaElement(ElementType.BOOLEAN, dataset="Item"),
        ])
    def test_boolean_is_always_true_false(self, element):
        items = provide_value_completion(element, self.context)
        assert labels(items) == ["true", "false"]

    def test_default_sort_rank_follows_declaration(self):
        element = SchemaElement(ElementType.STRING, values=("zeta", "alpha", "mid"))
        items = provide_value_completion(element, self.context)

        assert labels(items) == ["zeta", "alpha", "mid"]
        assert [item.sort_text for item in items] == ["0000", "0001", "0002"]
        assert sorted(items, key=lambda item: item.label)[0].sort_text == "0001"

    def test_default_without_values(self):
        assert provide_value_completion(SchemaElement(), self.context) is None

    def test_default_escapes_snippet_syntax(self):
        items = provide_value_completion(SchemaElement(values=("<$var>",)), self.context)
        assert inserts(items) == ["<\\$var>"]

    def test_enum_prefix_and_suffix(self):
        context = CompletionSchemaContext(datasets=sample_datasets()).for_slot(has_next=True)
        items = generate_enum_completions("item", context, prefix=" ")

        assert inserts(items) == [" DIAMOND ", " STICK "]
        assert all(item.retrigger for item in items)
        assert items[1].detail == "A stick"

    @pytest.mark.parametrize(
        "element", [
            SchemaElement(ElementType.ENUM),
            SchemaElement(ElementType.ENUM, dataset="Missing"),
        ])
    def test_enum_without_dataset(self, element):
        assert provide_value_completion(element, self.context) is None

    def test_enum_without_registry(self):
        assert generate_enum_completions("Item", CompletionSchemaContext()) is None

    def test_key_with_values(self):
        element = SchemaElement(ElementType.KEY, values=("inline",))
        assert labels(provide_value_completion(element, self.context)) == ["inline"]

    def test_bare_key(self):
        assert provide_value_completion(SchemaElement(ElementType.KEY), self.context) is None

    def test_key_list_uses_default(self):
        element = SchemaElement(ElementType.KEY_LIST, values=("x",))
        assert labels(provide_value_completion(element, self.context)) == ["x"]

    def test_list_without_document(self):
        element = SchemaElement(ElementType.LIST, dataset="Item")
        assert provide_value_completion(element, self.context) is None

    def test_entry_list_without_entries(self):
        document, position = document_at_cursor("Args: |")
        context = CompletionSchemaContext(document, position, CompletionTrigger(), sample_datasets())
        assert provide_value_completion(SchemaElement(ElementType.ENTRY_LIST, entries=()), context) is None


class TestStructureHandlers:

    @pytest.mark.parametrize(
        "element,kind,expected", [
            (SchemaElement(), LSPCompletionItemKind.FILE, "  Name: $0"),
            (SchemaElement(ElementType.STRING), LSPCompletionItemKind.FILE, "  Name: $0"),
            (SchemaElement(ElementType.BOOLEAN), LSPCompletionItemKind.PROPERTY, "  Name: ${1|true,false|}$0"),
            (SchemaElement(ElementType.ENUM), LSPCompletionItemKind.ENUM, "  Name: $0"),
            (SchemaElement(ElementType.LIST), LSPCompletionItemKind.PROPERTY, "  Name:\n  - $0"),
            (SchemaElement(ElementType.ENTRY_LIST), LSPCompletionItemKind.SNIPPET, "  Name: $0"),
            (SchemaElement(ElementType.KEY), LSPCompletionItemKind.PROPERTY, "  Name:\n    $0"),
            (SchemaElement(ElementType.KEY_LIST), LSPCompletionItemKind.PROPERTY, "  Name:\n    $1: $2$0"),
        ])
    def test_snippet_per_type(self, element, kind, expected):
        items = provide_structure_completion("Name", element, "  ", "  ")
        assert len(items) == 1
        assert items[0].label == "Name"
        assert items[0].kind == kind
        assert items[0].insert_text == expected
        assert items[0].retrigger

    def test_detail_falls_back_to_link(self):
        element = SchemaElement(link="https://example.invalid/docs")
        assert provide_structure_completion("Name", element, "", "  ")[0].detail == "https://example.invalid/docs"

    def test_key_is_escaped(self):
        items = provide_structure_completion("$price", SchemaElement(), "", "  ")
        assert items[0].insert_text == "\\$price: $0"
        assert items[0].label == "$price"


class TestListSpacing:
    """Spacing inserted before a dataset-driven list item value."""

    @pytest.mark.parametrize(
        "text,trigger,expected", [
            pytest.param("  - it|em ", CompletionTrigger(), None, id="first-token-complete"),
            pytest.param("  -|", CompletionTrigger(), " ", id="right-after-dash"),
            pytest.param("  - |", CompletionTrigger(), "", id="after-dash-space"),
            pytest.param("  - |", CompletionTrigger(TriggerKind.TRIGGER_CHARACTER, " "), "", id="space-trigger"),
            pytest.param("  - |", CompletionTrigger(TriggerKind.TRIGGER_CHARACTER, "-"), " ", id="other-trigger"),
            pytest.param("  -|", CompletionTrigger(TriggerKind.TRIGGER_CHARACTER, "-"), None, id="trigger-without-space"),
            pytest.param("  Key: value|", CompletionTrigger(), None, id="not-a-list"),
            pytest.param("|", CompletionTrigger(), None, id="empty-line"),
        ])
    def test_rule(self, text, trigger, expected):
        document, position = document_at_cursor(text)
        assert get_list_completion_needed_spaces(document, position, trigger) == expected
