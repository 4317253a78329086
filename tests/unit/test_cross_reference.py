#!/usr/bin/env python3
"""
Tests for filling missing metadata from a second model
"""

from core.cross_reference import cross_reference
from core.model_builder import build_symbol_model
from sym_types import AccessLevel


class TestCrossReference:
    def test_missing_return_type_filled(self, record):
        primary = build_symbol_model([record("Bar", "0x1000", "Foo")])
        secondary = build_symbol_model([record("Bar", "0x1000", "Foo", return_type="int")])
        assert cross_reference(primary, secondary) == 1
        bar = primary.get_class("Foo").functions_named("Bar")[0]
        assert bar.return_type.type == "int32_t"

    def test_populated_fields_kept(self, record):
        primary = build_symbol_model([record("Bar", "0x1000", "Foo", return_type="bool", access_level="public")])
        secondary = build_symbol_model([record("Bar", "0x1000", "Foo", return_type="int", access_level="private")])
        assert cross_reference(primary, secondary) == 0
        bar = primary.get_class("Foo").functions_named("Bar")[0]
        assert bar.return_type.type == "bool"
        assert bar.access_level is AccessLevel.PUBLIC

    def test_first_donor_wins_for_overloads(self, record):
        primary = build_symbol_model([record("Bar", "0x1000", "Foo")])
        secondary = build_symbol_model([
            record("Bar", "0x1000", "Foo", return_type="float", parameters="int"),
            record("Bar", "0x1010", "Foo", return_type="int"),
        ])
        cross_reference(primary, secondary)
        assert primary.get_class("Foo").functions_named("Bar")[0].return_type.type == "float"

    def test_classes_missing_from_secondary_untouched(self, record):
        primary = build_symbol_model([record("Bar", "0x1000", "Foo")])
        secondary = build_symbol_model([record("Bar", "0x1000", "Other", return_type="int")])
        assert cross_reference(primary, secondary) == 0
        assert primary.get_class("Foo").functions_named("Bar")[0].return_type is None

    def test_freestanding_functions_cross_referenced(self, record):
        primary = build_symbol_model([record("CExoFree", "0x1000")])
        secondary = build_symbol_model([record("CExoFree", "0x1000", return_type="void")])
        assert cross_reference(primary, secondary) == 1
        assert primary.freestanding.functions[0].return_type.type == "void"
