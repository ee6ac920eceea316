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

import json
from pathlib import Path

import pytest
from utils import labels, resolve

from yamlscribe.config import ScribeConfig
from yamlscribe.datasets import EnumDataset, EnumRegistry, EnumValue
from yamlscribe.errors import ErrorCollector, SchemaDefinitionError, UnknownElementTypeError
from yamlscribe.loader import load_schema, load_schema_json
from yamlscribe.resolution.handlers import DEFAULT_HANDLER, get_handler
from yamlscribe.schema import SchemaElement
from yamlscribe.types import ElementType

MOB_DEFINITION = {
    "Type": {
        "type": "enum",
        "dataset": "EntityType",
        "description": "The entity type",
        "aliases": ["Entity"]
    },
    "Health": {
        "type": "integer",
        "range": {
            "min": 0,
            "max": 10,
            "step": 5
        }
    },
    "Options": {
        "type": "key",
        "max_depth": True,
        "keys": {
            "Silent": {
                "type": "boolean"
            }
        }
    },
    "Drops": {
        "type": "list",
        "entries": [{
            "type": "enum",
            "dataset": "Item"
        }, {
            "type": "integer",
            "values": ["1", "2"]
        }]
    },
    "Disguise": {
        "type": "key",
        "plugin": "LibsDisguises",
        "link": "https://example.invalid/disguise",
        "keys": {
            "Baby": {
                "type": "boolean"
            }
        }
    },
    "*KEY": {
        "type": "key",
        "display": "New Variable",
        "keys": {
            "Value": {}
        }
    },
}


class TestLoadSchema:

    def setup_method(self):
        self.schema = load_schema(MOB_DEFINITION)

    def test_named_keys(self):
        assert list(self.schema) == ["Type", "Health", "Options", "Drops", "Disguise", "Entity"]
        assert self.schema.get("Type") == SchemaElement(
            ElementType.ENUM, "The entity type", dataset="EntityType")

    def test_alias_shares_element(self):
        assert self.schema.get("Entity") is self.schema.get("Type")

    def test_range_values(self):
        assert self.schema.get("Health").values == ("0", "5", "10")

    def test_nested_keys_and_depth(self):
        options = self.schema.get("Options")
        assert options.max_depth
        assert options.keys.get("Silent").type == ElementType.BOOLEAN

    def test_entries_in_order(self):
        entries = self.schema.get("Drops").entries
        assert [entry.type for entry in entries] == [ElementType.ENUM, ElementType.INTEGER]
        assert entries[1].values == ("1", "2")

    def test_options_inherited_by_children(self):
        baby = self.schema.get("Disguise").keys.get("Baby")
        assert baby.plugin == "LibsDisguises"
        assert baby.link == "https://example.invalid/disguise"

    def test_wildcard(self):
        assert "*KEY" not in self.schema
        assert self.schema.wildcard.display == "New Variable"
        assert list(self.schema.wildcard.element.keys) == ["Value"]
        assert self.schema.wildcard.element.keys.get("Value") == SchemaElement()

    def test_type_tag_by_member_name(self):
        schema = load_schema({"Vars": {"type": "KEY_LIST"}})
        assert schema.get("Vars").type is ElementType.KEY_LIST

    def test_drives_completion(self):
        datasets = EnumRegistry([EnumDataset("EntityType", {"ZOMBIE": EnumValue()})])
        assert labels(resolve("MyMob:\n  Entity: |", self.schema, datasets=datasets)) == ["ZOMBIE"]


class TestArrayKeyLoading:

    def test_dataset_backed_keys_are_lazy(self):
        registry = EnumRegistry()
        schema = load_schema(
            {"*ARRAYKEY": {
                "type": "key",
                "possible_key_values": "Slot",
                "keys": {
                    "Item": {}
                }
            }}, datasets=registry)

        assert schema.array_key.expand() == []
        registry.register(EnumDataset("Slot", {"Slot1": EnumValue("First")}))
        assert [(key, element.description) for key, element in schema.array_key.expand()] == [("Slot1", "First")]

    @pytest.mark.parametrize(
        "possible,expected", [
            (["A", "B"], [("A", None), ("B", None)]),
            ({
                "A": "First",
                "B": None
            }, [("A", "First"), ("B", None)]),
        ])
    def test_static_keys(self, possible, expected):
        schema = load_schema({"*ARRAYKEY": {"type": "key", "possible_key_values": possible}})
        assert [(key, element.description) for key, element in schema.array_key.expand()] == expected

    def test_missing_possible_keys(self):
        with pytest.raises(SchemaDefinitionError, match=r"\*ARRAYKEY: error: an array key needs 'possible_key_values'"):
            load_schema({"*ARRAYKEY": {"type": "key"}})

    def test_resolves_through_array_key(self):
        registry = EnumRegistry([EnumDataset("Slot", {"HEAD": EnumValue("Helmet")})])
        schema = load_schema(
            {"*ARRAYKEY": {
                "type": "key",
                "possible_key_values": "Slot",
                "keys": {
                    "Item": {
                        "values": ["IRON"]
                    }
                }
            }},
            datasets=registry)
        items = resolve("HEAD:\n  Item: |", schema, datasets=registry, config=ScribeConfig(named_root=False))
        assert labels(items) == ["IRON"]


class TestLoaderErrors:

    def test_unknown_type_strict(self):
        with pytest.raises(UnknownElementTypeError) as exc_info:
            load_schema({"Despawn": {"type": "bolean"}}, "mob.json")

        error = exc_info.value
        assert str(error) == "mob.json: Despawn: error: Unrecognized element type: 'bolean'"
        assert error.type_tag == "bolean"
        assert "     | Did you mean: boolean?" in error.__notes__

    def test_unknown_type_lenient(self):
        schema = load_schema({"Despawn": {"type": "bolean", "values": ["x"]}}, strict=False)
        element = schema.get("Despawn")
        assert element.type == "bolean"
        assert get_handler(element.type) is DEFAULT_HANDLER

    def test_unknown_field_hint(self):
        with pytest.raises(SchemaDefinitionError) as exc_info:
            load_schema({"Type": {"type": "enum", "descripton": "typo"}})
        assert "unknown element field 'descripton'" in str(exc_info.value)
        assert "Hint: did you mean 'description'?" in exc_info.value.__notes__

    @pytest.mark.parametrize(
        "definition,message", [
            ({
                "A": 5
            }, "A: error: expected an element object, got int"),
            ({
                "A": {
                    "type": 3
                }
            }, "A.type: error: 'type' must be a string"),
            ({
                "A": {
                    "values": "x"
                }
            }, "A.values: error: 'values' must be a list of strings"),
            ({
                "A": {
                    "keys": []
                }
            }, "A.keys: error: 'keys' must be an object"),
            ({
                "A": {
                    "entries": {}
                }
            }, "A.entries: error: 'entries' must be a list of elements"),
            ({
                "A": {
                    "description": 1
                }
            }, "A.description: error: 'description' must be a string"),
            ({
                "A": {
                    "range": {
                        "min": 0
                    }
                }
            }, "A.range: error: 'range' needs at least 'min' and 'max'"),
            ({
                "A": {
                    "range": {
                        "min": 0,
                        "max": 1,
                        "step": 0
                    }
                }
            }, "A.range: error: step must be positive, got 0"),
        ])
    def test_malformed(self, definition, message):
        with pytest.raises(SchemaDefinitionError, match=message.replace(".", r"\.")):
            load_schema(definition)

    def test_root_must_be_object(self):
        with pytest.raises(SchemaDefinitionError, match="schema must be an object of keys, got list"):
            load_schema(["A"])

    def test_errors_collected(self):
        collector = ErrorCollector()
        schema = load_schema(
            {
                "A": {
                    "type": "bolean"
                },
                "B": 5,
                "C": {
                    "type": "key",
                    "keys": []
                },
                "D": {
                    "type": "boolean"
                },
            },
            error_collector=collector)

        assert len(collector.errors) == 3
        assert list(schema) == ["A", "C", "D"]
        assert schema.get("A").type == "bolean"
        assert schema.get("C").keys is None
        assert collector.get_error_summary().startswith("Found 3 errors:")

    def test_broken_entry_keeps_slot_position(self):
        collector = ErrorCollector()
        schema = load_schema(
            {"Drops": {
                "type": "list",
                "entries": [{
                    "type": "enum"
                }, 7, {
                    "type": "integer"
                }]
            }}, error_collector=collector)

        entries = schema.get("Drops").entries
        assert len(entries) == 3
        assert entries[1] == SchemaElement()
        assert entries[2].type == ElementType.INTEGER
        assert "Drops.1: error: expected an element object, got int" in collector.get_error_summary()


class TestLoadSchemaJson:

    def test_load(self, tmp_path: Path):
        path = tmp_path / "mob.json"
        path.write_text(json.dumps(MOB_DEFINITION))
        assert "Options" in load_schema_json(path)

    def test_error_names_file(self, tmp_path: Path):
        path = tmp_path / "mob.json"
        path.write_text(json.dumps({"A": {"type": "bolean"}}))
        with pytest.raises(UnknownElementTypeError, match="mob.json: A: error"):
            load_schema_json(path)

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "mob.json"
        path.write_text("{not json")
        with pytest.raises(json.JSONDecodeError):
            load_schema_json(path)
