#!/usr/bin/env python3
"""
Symbol model builder.

Groups lexed symbol records into classes by de-templated class name, detects
constructors/destructors, buckets whitelisted class-less functions, and gives
every class a default constructor.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, Optional, Sequence

from core.errors import MalformedInputError
from core.symbol_model import ParsedClass, ParsedFunction, SymbolModel
from core.templates import mangle_template_name, split_top_level
from core.type_normalizer import normalize_type
from sym_types import (
    ADDRESS_MASK, AccessLevel, Address, CallingConvention, ClassName, OperatorKind, SymbolRecord
)

logger = logging.getLogger(__name__)

DEFAULT_FREESTANDING_PATTERNS: Sequence[str] = ("Exo", "Admin", "Create")

_NON_IDENTIFIER_RE = re.compile(r'\W')


def parse_address(text: str) -> Address:
    """Parse a hex address (``0x`` prefix optional) that must fit in 32 bits."""
    s = text.strip()
    if s.lower().startswith("0x"):
        s = s[2:]
    try:
        value = int(s, 16)
    except ValueError as e:
        raise MalformedInputError(f"Address '{text}' is not hexadecimal") from e
    if value < 0 or value > ADDRESS_MASK:
        raise MalformedInputError(f"Address '{text}' does not fit in 32 bits")
    return Address(value)


def split_parameters(parameters: str) -> list[str]:
    """Split a raw parameter list on top-level commas, then mangle each parameter."""
    return [mangle_template_name(p) for p in split_top_level(parameters)]


def make_friendly_name(name: str, is_constructor: bool, is_destructor: bool) -> str:
    op = OperatorKind.from_function_name(name)
    if op is not None:
        return op.friendly_name
    if is_constructor:
        friendly = name + "Ctor"
    elif is_destructor:
        friendly = name.replace("~", "") + "Dtor"
    else:
        friendly = name
    return _NON_IDENTIFIER_RE.sub("_", friendly)


class SymbolModelBuilder:
    """Builds a ``SymbolModel`` from ordered symbol records."""

    def __init__(self, freestanding_patterns: Optional[Sequence[str]] = None) -> None:
        if freestanding_patterns is None:
            freestanding_patterns = DEFAULT_FREESTANDING_PATTERNS
        self.freestanding_patterns = tuple(freestanding_patterns)
        self.stats: Dict[str, int] = {
            'records': 0,
            'class_functions': 0,
            'freestanding_functions': 0,
            'discarded': 0,
            'synthesized_constructors': 0,
        }

    def build(self, records: Iterable[SymbolRecord]) -> SymbolModel:
        model = SymbolModel()

        for record in records:
            self.stats['records'] += 1
            self._add_record(model, record)

        self.synthesize_default_constructors(model)

        logger.info(f"Built {len(model)} classes from {self.stats['records']} records: {self.stats}")
        return model

    def _add_record(self, model: SymbolModel, record: SymbolRecord) -> None:
        class_name = (record.class_name or "").strip()
        if not class_name:
            if any(p in record.function_name for p in self.freestanding_patterns):
                model.freestanding.functions.append(self.make_function(record, None))
                self.stats['freestanding_functions'] += 1
            else:
                self.stats['discarded'] += 1
                logger.debug(f"Discarded class-less function {record.function_name}")
            return

        class_name = mangle_template_name(class_name).replace("::", "__")
        owner, created = model.get_or_create(class_name)
        if created:
            logger.debug(f"New class {owner.name}")
        owner.functions.append(self.make_function(record, owner))
        self.stats['class_functions'] += 1

    @staticmethod
    def make_function(record: SymbolRecord, owner: Optional[ParsedClass]) -> ParsedFunction:
        name = mangle_template_name(record.function_name.strip())
        is_constructor = False
        is_destructor = False

        if owner is not None:
            base = owner.base_name
            if base != owner.name:
                # template class: ctor/dtor are spelled with the de-templated name
                if name == base:
                    name = owner.name
                    is_constructor = True
                elif name == "~" + base:
                    name = "~" + owner.name
                    is_destructor = True
            if not (is_constructor or is_destructor):
                if name == owner.name:
                    is_constructor = True
                elif name == "~" + owner.name:
                    is_destructor = True

        return_type = None
        if record.return_type and not (is_constructor or is_destructor):
            return_type = normalize_type(record.return_type)

        return ParsedFunction(
            name=name,
            friendly_name=make_friendly_name(name, is_constructor, is_destructor),
            return_type=return_type,
            parameters=[normalize_type(p) for p in split_parameters(record.parameters)],
            access_level=AccessLevel.from_string(record.access_level) if owner else None,
            calling_convention=CallingConvention.from_string(record.calling_convention),
            is_constructor=is_constructor,
            is_destructor=is_destructor,
            is_virtual=record.is_virtual if owner else False,
            is_const=record.is_const if owner else False,
            is_static=record.is_static,
            address=parse_address(record.address),
            owner=owner.name if owner else None,
        )

    def synthesize_default_constructors(self, model: SymbolModel) -> None:
        """Give every class lacking a zero-parameter constructor a synthesized one."""
        for cls in model.classes:
            if cls.has_default_constructor:
                continue
            cls.functions.append(ParsedFunction(
                name=cls.name,
                friendly_name=make_friendly_name(cls.name, True, False),
                parameters=[normalize_type("void")],
                is_constructor=True,
                owner=ClassName(cls.name),
            ))
            self.stats['synthesized_constructors'] += 1
            logger.debug(f"Synthesized default constructor for {cls.name}")


def build_symbol_model(records: Iterable[SymbolRecord],
                       freestanding_patterns: Optional[Sequence[str]] = None) -> SymbolModel:
    """Main API: build a model from ordered symbol records."""
    return SymbolModelBuilder(freestanding_patterns).build(records)


__all__ = [
    "DEFAULT_FREESTANDING_PATTERNS",
    "SymbolModelBuilder",
    "build_symbol_model",
    "make_friendly_name",
    "parse_address",
    "split_parameters",
]
