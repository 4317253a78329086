#!/usr/bin/env python3
"""
Type normalization.

Canonicalizes raw type spellings from the symbol dump into ``CppType``:
a built-in base type, a pointer to a named type, or a named type.
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass
from typing import Optional

from core.templates import mangle_template_name
from sym_types import BaseType, BASE_TYPE_SPELLINGS

VARIADIC = "..."

_ARRAY_RE = re.compile(r'\s*\[\s*\]')
_ENUM_RE = re.compile(r'\benum\s+[A-Za-z_][A-Za-z0-9_:]*')
_ELABORATED_RE = re.compile(r'\b(class|struct|union)\s+')
_QUALIFIER_RE = re.compile(r'\b(const|volatile)\b')
_INDIRECTION_RE = re.compile(r'[\*&\s]+$')


def convert_array_to_ptr(spelling: str) -> str:
    """Rewrite ``T[]`` array syntax as ``T*``."""
    return _ARRAY_RE.sub('*', spelling)


def convert_enum_to_int(spelling: str) -> str:
    """Rewrite ``enum X`` as ``int``; enums are not modeled as distinct types."""
    return _ENUM_RE.sub('int', spelling)


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class CppType:
    """A normalized type. Equality, hashing and ordering use ``type`` only."""
    raw: str
    type: str
    base_type: Optional[BaseType] = None
    pointer_depth: int = 0
    is_reference: bool = False
    is_const: bool = False

    @property
    def is_base_type(self) -> bool:
        return self.base_type is not None

    @property
    def is_pointer(self) -> bool:
        """True for any indirection; a reference needs no definition either."""
        return self.pointer_depth > 0 or self.is_reference

    @property
    def is_variadic(self) -> bool:
        return self.type == VARIADIC

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CppType):
            return NotImplemented
        return self.type == other.type

    def __lt__(self, other: "CppType") -> bool:
        if not isinstance(other, CppType):
            return NotImplemented
        return self.type < other.type

    def __hash__(self) -> int:
        return hash(self.type)

    def __str__(self) -> str:
        text = ("const " if self.is_const else "") + self.type
        text += "*" * self.pointer_depth
        if self.is_reference:
            text += "&"
        return text


def normalize_type(spelling: str) -> CppType:
    """Normalize a raw spelling such as ``const CExoString &`` or ``unsigned __int8[]``."""
    raw = spelling
    s = convert_enum_to_int(convert_array_to_ptr(spelling.strip()))
    s = mangle_template_name(s)

    if s.strip() == VARIADIC:
        return CppType(raw=raw, type=VARIADIC)
    if '(' in s:
        # function pointer; only its size matters to the layout
        return CppType(raw=raw, type=BaseType.VOID.value, base_type=BaseType.VOID, pointer_depth=1)

    s = _ELABORATED_RE.sub('', s)
    is_const = bool(re.search(r'\bconst\b', s))
    s = _QUALIFIER_RE.sub('', s)

    suffix_match = _INDIRECTION_RE.search(s)
    suffix = suffix_match.group(0) if suffix_match else ""
    name = s[:len(s) - len(suffix)] if suffix else s
    name = re.sub(r'\s+', ' ', name).strip().replace("::", "__")

    pointer_depth = suffix.count('*')
    is_reference = '&' in suffix

    base_type = BASE_TYPE_SPELLINGS.get(name)
    return CppType(
        raw=raw,
        type=base_type.value if base_type else name,
        base_type=base_type,
        pointer_depth=pointer_depth,
        is_reference=is_reference,
        is_const=is_const,
    )


def named_type(name: str) -> CppType:
    """A plain by-value reference to a class name (used for inheritance edges)."""
    return CppType(raw=name, type=name)


__all__ = [
    "VARIADIC",
    "CppType",
    "convert_array_to_ptr",
    "convert_enum_to_int",
    "normalize_type",
    "named_type",
]
