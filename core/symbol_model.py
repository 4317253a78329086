#!/usr/bin/env python3
"""
Object model built from the symbol dump: functions, classes, struct layouts,
and the ``SymbolModel`` arena that owns every class.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from core.errors import MalformedInputError
from core.templates import mangle_template_name, strip_template_suffix
from core.type_normalizer import CppType, normalize_type
from sym_types import AccessLevel, CallingConvention, ClassName, StructRecord

# Sentinel name of the shared bucket holding free-standing functions.
FREESTANDING_BUCKET = ClassName("<freestanding>")


# ---------- Data member ----------
@dataclass
class NamedCppType:
    name: str
    type: CppType
    array_size: Optional[int] = None

    def declaration(self) -> str:
        suffix = f"[{self.array_size}]" if self.array_size is not None else ""
        return f"{self.type} {self.name}{suffix};"


# ---------- Function ----------
@dataclass
class ParsedFunction:
    name: str
    friendly_name: str
    return_type: Optional[CppType] = None
    parameters: List[CppType] = field(default_factory=list)
    access_level: Optional[AccessLevel] = None
    calling_convention: Optional[CallingConvention] = None
    is_constructor: bool = False
    is_destructor: bool = False
    is_virtual: bool = False
    is_const: bool = False
    is_static: bool = False
    address: Optional[int] = None
    owner: Optional[ClassName] = None

    @property
    def is_synthesized(self) -> bool:
        return self.address is None

    @property
    def has_no_parameters(self) -> bool:
        """Empty list, or the lexer's ``(void)`` convention."""
        return not self.parameters or (
            len(self.parameters) == 1
            and self.parameters[0].is_base_type
            and not self.parameters[0].is_pointer
            and self.parameters[0].type == "void"
        )

    def cross_reference_using(self, other: "ParsedFunction") -> bool:
        """Fill a missing return type or access level from ``other``.

        Populated fields are never overwritten. Returns True if anything changed.
        """
        changed = False
        if (self.return_type is None and other.return_type is not None
                and not (self.is_constructor or self.is_destructor)):
            self.return_type = other.return_type
            changed = True
        if self.access_level is None and other.access_level is not None:
            self.access_level = other.access_level
            changed = True
        return changed


# ---------- Class ----------
@dataclass
class ParsedClass:
    name: ClassName
    functions: List[ParsedFunction] = field(default_factory=list)
    inherits: List[ClassName] = field(default_factory=list)
    data: List[NamedCppType] = field(default_factory=list)
    header_dependencies: List[ClassName] = field(default_factory=list)
    source_dependencies: List[ClassName] = field(default_factory=list)
    unknown_dependencies: List[str] = field(default_factory=list)

    @property
    def base_name(self) -> str:
        return strip_template_suffix(self.name)

    @property
    def is_freestanding_bucket(self) -> bool:
        return self.name == FREESTANDING_BUCKET

    @property
    def has_default_constructor(self) -> bool:
        return any(f.is_constructor and f.has_no_parameters for f in self.functions)

    def add_data(self, members: List[NamedCppType]) -> None:
        self.data.extend(members)

    def functions_named(self, name: str) -> List[ParsedFunction]:
        return [f for f in self.functions if f.name == name]

    def clear_dependencies(self) -> None:
        self.header_dependencies = []
        self.source_dependencies = []
        self.unknown_dependencies = []


# ---------- Struct layout (transient) ----------
@dataclass
class ParsedStruct:
    name: ClassName
    members: List[NamedCppType] = field(default_factory=list)
    inherits_from: List[str] = field(default_factory=list)

    @classmethod
    def from_record(cls, record: StructRecord) -> "ParsedStruct":
        members = [_member_from_raw(name, raw) for name, raw in record.members]
        return cls(
            name=ClassName(mangle_template_name(record.name.strip()).replace("::", "__")),
            members=members,
            inherits_from=[mangle_template_name(b.strip()).replace("::", "__") for b in record.base_class_names],
        )


def _member_from_raw(name: str, raw_type: str) -> NamedCppType:
    name = name.strip()
    array_size: Optional[int] = None
    if name.endswith(']') and '[' in name:
        name, _, size = name[:-1].partition('[')
        name = name.strip()
        try:
            array_size = int(size.strip(), 0)
        except ValueError as e:
            raise MalformedInputError(f"Member '{name}' has a non-numeric array size '{size}'") from e
    return NamedCppType(name=name, type=normalize_type(raw_type), array_size=array_size)


# ---------- Arena ----------
class SymbolModel:
    """Owns every class, keyed by name. Edges between classes are names."""

    def __init__(self) -> None:
        self._classes: Dict[ClassName, ParsedClass] = {}
        self.freestanding = ParsedClass(name=FREESTANDING_BUCKET)

    def __len__(self) -> int:
        return len(self._classes)

    def __contains__(self, name: object) -> bool:
        return name in self._classes

    def __iter__(self) -> Iterator[ParsedClass]:
        return iter(self.classes)

    @property
    def classes(self) -> List[ParsedClass]:
        """All classes in ordinal name order."""
        return [self._classes[k] for k in sorted(self._classes)]

    def all_classes(self) -> List[ParsedClass]:
        """Classes plus the free-standing bucket when it holds anything."""
        result = self.classes
        if self.freestanding.functions:
            result.append(self.freestanding)
        return result

    def get_class(self, name: str) -> Optional[ParsedClass]:
        if name == FREESTANDING_BUCKET:
            return self.freestanding
        return self._classes.get(ClassName(name))

    def require_class(self, name: str) -> ParsedClass:
        cls = self._classes.get(ClassName(name))
        if cls is None:
            raise MalformedInputError(f"No class named '{name}' in the model")
        return cls

    def get_or_create(self, name: str) -> Tuple[ParsedClass, bool]:
        key = ClassName(name)
        cls = self._classes.get(key)
        if cls is not None:
            return cls, False
        cls = ParsedClass(name=key)
        self._classes[key] = cls
        return cls, True


__all__ = [
    "FREESTANDING_BUCKET",
    "NamedCppType",
    "ParsedFunction",
    "ParsedClass",
    "ParsedStruct",
    "SymbolModel",
]
