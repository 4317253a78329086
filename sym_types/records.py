#!/usr/bin/env python3
"""
Flat input records handed to the core by the lexer and struct dump parser.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Tuple

RawMember = Tuple[str, str]  # (member name, raw type spelling)


def _pick(data: Mapping[str, Any], *keys: str) -> Any:
    for k in keys:
        if k in data and data[k] is not None:
            return data[k]
    return None


def _flag(data: Mapping[str, Any], *keys: str) -> bool:
    value = _pick(data, *keys)
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes")
    return bool(value)


@dataclass
class SymbolRecord:
    """One lexed line of the symbol dump."""
    function_name: str
    address: str
    class_name: Optional[str] = None
    access_level: Optional[str] = None
    is_virtual: bool = False
    is_const: bool = False
    is_static: bool = False
    return_type: Optional[str] = None
    parameters: str = ""  # comma-separated raw type spellings
    calling_convention: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SymbolRecord":
        """Build a record from a mapping with camelCase or snake_case keys."""
        function_name = _pick(data, "functionName", "function_name", "func", "name")
        address = _pick(data, "address", "addr")
        if not function_name:
            raise KeyError("symbol record is missing 'functionName'")
        if address is None:
            raise KeyError(f"symbol record '{function_name}' is missing 'address'")
        if isinstance(address, bool) or not isinstance(address, (str, int)):
            raise TypeError(f"symbol record '{function_name}' has a non-address value {address!r}")
        if isinstance(address, int):
            # numeric input (JSON number, YAML hex literal) is already the value
            address = hex(address)
        params = _pick(data, "parameters", "params")
        if isinstance(params, (list, tuple)):
            params = ",".join(str(p) for p in params)
        return cls(
            function_name=str(function_name),
            address=str(address),
            class_name=_pick(data, "className", "class_name", "class") or None,
            access_level=_pick(data, "accessLevel", "access_level", "access"),
            is_virtual=_flag(data, "isVirtual", "is_virtual", "virtual"),
            is_const=_flag(data, "isConst", "is_const", "const"),
            is_static=_flag(data, "isStatic", "is_static", "static"),
            return_type=_pick(data, "returnType", "return_type") or None,
            parameters=str(params or ""),
            calling_convention=_pick(data, "callingConvention", "calling_convention", "convention"),
        )


@dataclass
class StructRecord:
    """One struct definition from the layout dump."""
    name: str
    members: List[RawMember] = field(default_factory=list)
    base_class_names: List[str] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "StructRecord":
        name = _pick(data, "name")
        if not name:
            raise KeyError("struct record is missing 'name'")
        members: List[RawMember] = []
        for m in _pick(data, "members", "fields") or []:
            if isinstance(m, Mapping):
                members.append((str(m.get("name", "")), str(m.get("type", ""))))
            else:
                member_name, member_type = m
                members.append((str(member_name), str(member_type)))
        bases = _pick(data, "baseClassNames", "base_class_names", "bases", "inherits") or []
        return cls(name=str(name), members=members, base_class_names=[str(b) for b in bases])
