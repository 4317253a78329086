#!/usr/bin/env python3
"""
C++-specific enums and type aliases for sym2cpp.
"""

from enum import Enum
from typing import Dict, NewType, Optional

# ---------- Type aliases ----------
ClassName = NewType('ClassName', str)
Address = NewType('Address', int)

ADDRESS_MASK = 0xFFFFFFFF


# ---------- Built-in types ----------
class BaseType(Enum):
    VOID = "void"
    INT8 = "int8_t"
    UINT8 = "uint8_t"
    INT16 = "int16_t"
    UINT16 = "uint16_t"
    INT32 = "int32_t"
    UINT32 = "uint32_t"
    INT64 = "int64_t"
    UINT64 = "uint64_t"
    FLOAT = "float"
    DOUBLE = "double"
    BOOL = "bool"


# Raw spelling -> built-in. Spellings are whitespace-normalized before lookup.
BASE_TYPE_SPELLINGS: Dict[str, BaseType] = {
    "void": BaseType.VOID,

    "char": BaseType.INT8,
    "signed char": BaseType.INT8,
    "__int8": BaseType.INT8,
    "signed __int8": BaseType.INT8,
    "int8_t": BaseType.INT8,
    "_BYTE": BaseType.UINT8,
    "unsigned char": BaseType.UINT8,
    "unsigned __int8": BaseType.UINT8,
    "uint8_t": BaseType.UINT8,

    "short": BaseType.INT16,
    "short int": BaseType.INT16,
    "signed short": BaseType.INT16,
    "__int16": BaseType.INT16,
    "signed __int16": BaseType.INT16,
    "int16_t": BaseType.INT16,
    "_WORD": BaseType.UINT16,
    "unsigned short": BaseType.UINT16,
    "unsigned short int": BaseType.UINT16,
    "unsigned __int16": BaseType.UINT16,
    "wchar_t": BaseType.UINT16,
    "uint16_t": BaseType.UINT16,

    "int": BaseType.INT32,
    "signed": BaseType.INT32,
    "signed int": BaseType.INT32,
    "long": BaseType.INT32,
    "long int": BaseType.INT32,
    "signed long": BaseType.INT32,
    "__int32": BaseType.INT32,
    "signed __int32": BaseType.INT32,
    "int32_t": BaseType.INT32,
    "_DWORD": BaseType.UINT32,
    "unsigned": BaseType.UINT32,
    "unsigned int": BaseType.UINT32,
    "unsigned long": BaseType.UINT32,
    "unsigned long int": BaseType.UINT32,
    "unsigned __int32": BaseType.UINT32,
    "size_t": BaseType.UINT32,
    "uint32_t": BaseType.UINT32,

    "long long": BaseType.INT64,
    "__int64": BaseType.INT64,
    "signed __int64": BaseType.INT64,
    "int64_t": BaseType.INT64,
    "_QWORD": BaseType.UINT64,
    "unsigned long long": BaseType.UINT64,
    "unsigned __int64": BaseType.UINT64,
    "uint64_t": BaseType.UINT64,

    "float": BaseType.FLOAT,
    "double": BaseType.DOUBLE,
    "long double": BaseType.DOUBLE,

    "bool": BaseType.BOOL,
    "_BOOL1": BaseType.BOOL,
}


# ---------- Function metadata ----------
class AccessLevel(Enum):
    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"

    @classmethod
    def from_string(cls, value: Optional[str]) -> Optional["AccessLevel"]:
        if not value:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class CallingConvention(Enum):
    CDECL = "cdecl"
    THISCALL = "thiscall"
    STDCALL = "stdcall"
    FASTCALL = "fastcall"

    @classmethod
    def from_string(cls, value: Optional[str]) -> Optional["CallingConvention"]:
        if not value:
            return None
        try:
            return cls(value.strip().lower().lstrip("_"))
        except ValueError:
            return None


class TargetPlatform(Enum):
    WINDOWS = "windows"
    LINUX = "linux"

    @property
    def folder_name(self) -> str:
        return self.value.capitalize()


# ---------- Operators ----------
class OperatorKind(Enum):
    """Overloadable operators with an identifier-safe spelling."""
    ADDITION = ("operator+", "OperatorAddition")
    ADDITION_ASSIGNMENT = ("operator+=", "OperatorAdditionAssignment")
    SUBTRACTION = ("operator-", "OperatorSubtraction")
    SUBTRACTION_ASSIGNMENT = ("operator-=", "OperatorSubtractionAssignment")
    DIVISION = ("operator/", "OperatorDivision")
    DIVISION_ASSIGNMENT = ("operator/=", "OperatorDivisionAssignment")
    MULTIPLICATION = ("operator*", "OperatorMultiplication")
    MULTIPLICATION_ASSIGNMENT = ("operator*=", "OperatorMultiplicationAssignment")
    EQUAL_TO = ("operator==", "OperatorEqualTo")
    NOT_EQUAL_TO = ("operator!=", "OperatorNotEqualTo")
    GREATER_THAN = ("operator>", "OperatorGreaterThan")
    GREATER_THAN_OR_EQUAL_TO = ("operator>=", "OperatorGreaterThanOrEqualTo")
    LESSER_THAN = ("operator<", "OperatorLesserThan")
    LESSER_THAN_OR_EQUAL_TO = ("operator<=", "OperatorLesserThanOrEqualTo")
    MODULUS = ("operator%", "OperatorModulus")
    ASSIGNMENT = ("operator=", "OperatorAssignment")
    SUBSCRIPT = ("operator[]", "OperatorSubscript")
    DEREFERENCE = ("operator->", "OperatorDereference")
    CALL = ("operator()", "OperatorCall")
    LOGICAL_NOT = ("operator!", "OperatorLogicalNot")
    LOGICAL_AND = ("operator&&", "OperatorLogicalAnd")
    LOGICAL_OR = ("operator||", "OperatorLogicalOr")
    INCREMENT = ("operator++", "OperatorIncrement")
    DECREMENT = ("operator--", "OperatorDecrement")
    LEFT_SHIFT = ("operator<<", "OperatorLeftShift")
    RIGHT_SHIFT = ("operator>>", "OperatorRightShift")
    BITWISE_AND = ("operator&", "OperatorBitwiseAnd")
    BITWISE_OR = ("operator|", "OperatorBitwiseOr")
    BITWISE_XOR = ("operator^", "OperatorBitwiseXor")
    BITWISE_NOT = ("operator~", "OperatorBitwiseNot")
    NEW = ("operator new", "OperatorNew")
    DELETE = ("operator delete", "OperatorDelete")
    UNRECOGNIZED = ("", "OperatorUndefined")

    def __init__(self, spelling: str, friendly_name: str) -> None:
        self.spelling = spelling
        self.friendly_name = friendly_name

    @classmethod
    def from_function_name(cls, name: str) -> Optional["OperatorKind"]:
        """Return the operator a function name spells, or None for ordinary names."""
        if not name.startswith("operator"):
            return None
        rest = name[len("operator"):]
        # "operatorName" is an ordinary identifier, not an operator
        if rest and (rest[0].isalnum() or rest[0] == "_"):
            return None
        spelling = "operator" + rest.strip()
        if rest.strip() in ("new", "delete"):
            spelling = "operator " + rest.strip()
        for kind in cls:
            if kind.spelling == spelling and kind is not cls.UNRECOGNIZED:
                return kind
        return cls.UNRECOGNIZED
