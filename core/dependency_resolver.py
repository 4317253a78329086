#!/usr/bin/env python3
"""
Dependency resolver.

Splits everything a class references into three disjoint sets:

- header dependencies: used by value somewhere (base, member, parameter or
  return type), so the full definition must be included by the header;
- source dependencies: only ever used through a pointer or reference, so a
  forward declaration in the header suffices and the include moves to the
  source file;
- unknown dependencies: names with no class in the model, emitted later as
  opaque placeholder types.

Because pointer-only usage never lands in the header set, two classes that
point at each other forward-declare each other instead of including each other.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import DefaultDict, Dict, List

from core.symbol_model import ParsedClass, SymbolModel
from core.type_normalizer import VARIADIC, CppType, named_type

logger = logging.getLogger(__name__)

# target type name -> one is_pointer flag per occurrence
Usages = Dict[str, List[bool]]


def collect_usages(cls: ParsedClass) -> Usages:
    """Every non-base-type reference made by ``cls``, grouped by target name."""
    usages: DefaultDict[str, List[bool]] = defaultdict(list)

    def add(t: CppType) -> None:
        if not t.is_base_type:
            usages[t.type].append(t.is_pointer)

    for base in cls.inherits:
        add(named_type(base))
    for func in cls.functions:
        if func.return_type is not None:
            add(func.return_type)
        for param in func.parameters:
            add(param)
    for member in cls.data:
        add(member.type)

    return dict(usages)


def needs_concrete_definition(pointer_flags: List[bool]) -> bool:
    """Any by-value occurrence requires the complete type."""
    return not all(pointer_flags)


class DependencyResolver:
    def __init__(self, model: SymbolModel) -> None:
        self.model = model

    def resolve(self) -> None:
        totals = {'header': 0, 'source': 0, 'unknown': 0}
        unknown = set()
        for cls in self.model.classes:
            self.resolve_class(cls)
            totals['header'] += len(cls.header_dependencies)
            totals['source'] += len(cls.source_dependencies)
            totals['unknown'] += len(cls.unknown_dependencies)
            unknown.update(cls.unknown_dependencies)
        logger.info(f"Resolved dependencies for {len(self.model)} classes: {totals}")
        if unknown:
            logger.info(f"Unknown types emitted as placeholders: {', '.join(sorted(unknown))}")

    def resolve_class(self, cls: ParsedClass) -> None:
        cls.clear_dependencies()
        usages = collect_usages(cls)

        for target in sorted(usages):
            if target == VARIADIC or target == cls.name:
                continue

            dependency = self.model.get_class(target)
            if dependency is None:
                cls.unknown_dependencies.append(target)
                logger.debug(f"{cls.name}: unknown type {target}")
            elif needs_concrete_definition(usages[target]):
                cls.header_dependencies.append(dependency.name)
            else:
                cls.source_dependencies.append(dependency.name)


def resolve_dependencies(model: SymbolModel) -> None:
    DependencyResolver(model).resolve()


__all__ = [
    "DependencyResolver",
    "collect_usages",
    "needs_concrete_definition",
    "resolve_dependencies",
]
