import os
import sys

import pytest

# Ensure project root is first on sys.path so the local packages are used
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from sym_types import StructRecord, SymbolRecord  # noqa: E402


def make_record(function_name, address="0x00401000", class_name=None, **kwargs):
    return SymbolRecord(function_name=function_name, address=address, class_name=class_name, **kwargs)


@pytest.fixture
def record():
    """Factory for symbol records with a default address."""
    return make_record


@pytest.fixture
def struct_record():
    def _make(name, members=(), bases=()):
        return StructRecord(name=name, members=list(members), base_class_names=list(bases))
    return _make


@pytest.fixture
def foo_bar_records():
    """Foo takes Bar by value, Bar points at Foo, Foo returns an unknown Baz*."""
    return [
        make_record("Foo", "0x401000", "Foo", access_level="public", calling_convention="thiscall"),
        make_record("Get", "0x401010", "Foo", access_level="public", return_type="Baz*",
                    parameters="Bar", calling_convention="thiscall"),
        make_record("Bar", "0x402000", "Bar", access_level="public", calling_convention="thiscall"),
        make_record("Set", "0x402010", "Bar", access_level="public", return_type="void",
                    parameters="Foo*", calling_convention="thiscall"),
    ]
