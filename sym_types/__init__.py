#!/usr/bin/env python3
"""
Types module for sym2cpp.
Closed enumerations and input record types shared by every pass.
"""

from .cpp import (
    ClassName, Address, ADDRESS_MASK,
    BaseType, BASE_TYPE_SPELLINGS,
    AccessLevel, CallingConvention, TargetPlatform, OperatorKind
)

from .records import (
    RawMember,
    SymbolRecord, StructRecord
)

__all__ = [
    # C++ types
    'ClassName', 'Address', 'ADDRESS_MASK',
    'BaseType', 'BASE_TYPE_SPELLINGS',
    'AccessLevel', 'CallingConvention', 'TargetPlatform', 'OperatorKind',

    # Records
    'RawMember',
    'SymbolRecord', 'StructRecord',
]
