#!/usr/bin/env python3
"""
Tests for reading symbol and struct records from disk
"""

import json

import pytest

from app.loaders import load_struct_records, load_symbol_records
from core.errors import MalformedInputError
from core.model_builder import parse_address


class TestLoadSymbolRecords:
    def test_json_camel_case(self, tmp_path):
        path = tmp_path / "symbols.json"
        path.write_text(json.dumps([
            {"functionName": "Get", "address": "0x401010", "className": "Foo", "accessLevel": "public",
             "isVirtual": True, "returnType": "Baz *", "parameters": "Bar", "callingConvention": "thiscall"},
            {"functionName": "CExoFree", "address": "401020"},
        ]), encoding="utf-8")
        first, second = load_symbol_records(str(path))
        assert first.function_name == "Get"
        assert first.class_name == "Foo"
        assert first.is_virtual and not first.is_static
        assert first.return_type == "Baz *"
        assert first.calling_convention == "thiscall"
        assert second.class_name is None
        assert second.parameters == ""

    def test_yaml_snake_case_with_parameter_list(self, tmp_path):
        path = tmp_path / "symbols.yaml"
        path.write_text(
            "symbols:\n"
            "  - function_name: Set\n"
            "    address: '0x402010'\n"
            "    class_name: Bar\n"
            "    is_const: 'true'\n"
            "    parameters: [Foo *, int]\n",
            encoding="utf-8",
        )
        (rec,) = load_symbol_records(str(path))
        assert rec.parameters == "Foo *,int"
        assert rec.is_const

    def test_missing_address(self, tmp_path):
        path = tmp_path / "symbols.json"
        path.write_text(json.dumps([{"functionName": "Get"}]), encoding="utf-8")
        with pytest.raises(MalformedInputError):
            load_symbol_records(str(path))

    def test_numeric_addresses_keep_their_value(self, tmp_path):
        json_path = tmp_path / "symbols.json"
        json_path.write_text(json.dumps([{"functionName": "CExoFree", "address": 4198400}]), encoding="utf-8")
        yaml_path = tmp_path / "symbols.yml"
        yaml_path.write_text("- functionName: CExoFree\n  address: 0x401000\n", encoding="utf-8")
        for path in (json_path, yaml_path):
            (rec,) = load_symbol_records(str(path))
            assert parse_address(rec.address) == 0x401000

    def test_non_address_value(self, tmp_path):
        path = tmp_path / "symbols.json"
        path.write_text(json.dumps([{"functionName": "Get", "address": True}]), encoding="utf-8")
        with pytest.raises(MalformedInputError):
            load_symbol_records(str(path))

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "symbols.json"
        path.write_text(json.dumps({"symbols": "nope"}), encoding="utf-8")
        with pytest.raises(ValueError):
            load_symbol_records(str(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_symbol_records(str(tmp_path / "absent.json"))


class TestLoadStructRecords:
    def test_structured_records_with_prefix_filter(self, tmp_path):
        path = tmp_path / "structs.json"
        path.write_text(json.dumps({"structs": [
            {"name": "CFoo", "members": [{"name": "m_x", "type": "int"}, ["m_name[8]", "char"]],
             "baseClassNames": ["CBase"]},
            {"name": "Vector", "members": []},
        ]}), encoding="utf-8")
        (foo,) = load_struct_records(str(path), name_prefixes=["C"])
        assert foo.members == [("m_x", "int"), ("m_name[8]", "char")]
        assert foo.base_class_names == ["CBase"]

    def test_text_dump(self, tmp_path):
        path = tmp_path / "localtypes.h"
        path.write_text("struct CFoo\n{\n  int m_x;\n};\n", encoding="utf-8")
        (foo,) = load_struct_records(str(path))
        assert foo.name == "CFoo"
        assert foo.members == [("m_x", "int")]

    def test_missing_name(self, tmp_path):
        path = tmp_path / "structs.yml"
        path.write_text("- members: []\n", encoding="utf-8")
        with pytest.raises(MalformedInputError):
            load_struct_records(str(path))
