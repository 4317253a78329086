"""
Core symbol model: building, struct merging, cross referencing and
dependency resolution over the class arena.
"""

from .errors import MalformedInputError
from .symbol_model import (
    FREESTANDING_BUCKET,
    NamedCppType,
    ParsedClass,
    ParsedFunction,
    ParsedStruct,
    SymbolModel,
)

__all__ = [
    'MalformedInputError', 'FREESTANDING_BUCKET', 'NamedCppType',
    'ParsedClass', 'ParsedFunction', 'ParsedStruct', 'SymbolModel',
]
