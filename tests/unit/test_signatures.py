#!/usr/bin/env python3
"""
Tests for per-platform signature and trampoline rendering
"""

from core.model_builder import build_symbol_model
from gen.cpp.signatures import FunctionRenderer, format_address
from sym_types import TargetPlatform

WINDOWS = FunctionRenderer(TargetPlatform.WINDOWS)
LINUX = FunctionRenderer(TargetPlatform.LINUX)


def function(record, **kwargs):
    model = build_symbol_model([record(kwargs.pop("name", "Get"), kwargs.pop("address", "0x401010"),
                                       kwargs.pop("class_name", "Foo"), **kwargs)])
    owner = model.get_class("Foo") if "Foo" in model else model.freestanding
    return owner.functions[0]


class TestDeclarations:
    def test_windows_convention_before_name(self, record):
        func = function(record, return_type="Baz *", parameters="Bar", calling_convention="thiscall")
        assert WINDOWS.member_declaration(func) == "Baz* __thiscall Get(Bar);"

    def test_linux_convention_as_attribute(self, record):
        func = function(record, return_type="Baz *", parameters="Bar", calling_convention="thiscall")
        assert LINUX.member_declaration(func) == "Baz* Get(Bar) __attribute__((thiscall));"

    def test_missing_return_type_defaults_to_void(self, record):
        func = function(record, is_virtual=True, calling_convention="__thiscall")
        assert WINDOWS.member_declaration(func) == "virtual void __thiscall Get();"

    def test_static_const(self, record):
        func = function(record, return_type="int", is_static=True, is_const=True)
        assert WINDOWS.member_declaration(func) == "static int32_t Get() const;"

    def test_constructor_has_no_return_type(self, record):
        func = function(record, name="Foo", parameters="int", calling_convention="thiscall")
        assert WINDOWS.member_declaration(func) == "__thiscall Foo(int32_t);"


class TestDefinitions:
    def test_windows_trampoline(self, record):
        func = function(record, return_type="Baz *", parameters="Bar")
        assert WINDOWS.member_definition(func, "Foo") == [
            "Baz* Foo::Get(Bar)",
            "{",
            "    __asm",
            "    {",
            "        leave;",
            "        mov eax, 0x00401010;",
            "        jmp eax;",
            "    }",
            "}",
        ]

    def test_linux_trampoline(self, record):
        func = function(record)
        lines = LINUX.member_definition(func, "Foo")
        assert lines[0] == "void Foo::Get()"
        assert "    __asm__ __volatile__" in lines
        assert "        \"jmp *%0;\"" in lines
        assert "        : \"r\" (0x00401010)" in lines
        assert lines[-1] == "}"

    def test_synthesized_constructor_has_empty_body(self, record):
        model = build_symbol_model([record("Get", "0x1000", "Foo")])
        ctor = [f for f in model.get_class("Foo").functions if f.is_synthesized][0]
        assert WINDOWS.member_definition(ctor, "Foo") == ["Foo::Foo(void)", "{", "}"]


class TestAddressSymbols:
    def test_format_address(self):
        assert format_address(0x401000) == "0x00401000"
        assert format_address(0xDEADBEEF) == "0xDEADBEEF"

    def test_class_symbol(self, record):
        func = function(record, return_type="Baz *", parameters="Bar",
                        access_level="public", calling_convention="thiscall")
        assert WINDOWS.symbol_name(func) == "Foo__Get"
        assert WINDOWS.decorative_signature(func) == "public Baz* __thiscall Foo::Get(Bar)"
        assert WINDOWS.symbol_declaration("Foo__Get") == "extern void * const Foo__Get;"
        assert (WINDOWS.symbol_definition("Foo__Get", func.address)
                == "void * const Foo__Get = reinterpret_cast<void*>(0x00401010);")

    def test_operator_symbol_uses_friendly_name(self, record):
        func = function(record, name="operator==", return_type="bool", parameters="const Foo &")
        assert WINDOWS.symbol_name(func) == "Foo__OperatorEqualTo"

    def test_freestanding_symbol(self, record):
        func = function(record, name="CExoFree", class_name=None)
        assert func.owner is None
        assert WINDOWS.symbol_name(func) == "CExoFree"
