#!/usr/bin/env python3
"""
Struct layout merger.

Folds struct layout records into the class model in two passes: data members
first (creating classes for structs no function mentioned), then inheritance
once every class exists, so structs may name bases defined later in the dump.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List

from core.symbol_model import ParsedStruct, SymbolModel
from sym_types import StructRecord

logger = logging.getLogger(__name__)


class StructLayoutMerger:
    def __init__(self, model: SymbolModel) -> None:
        self.model = model
        self.stats: Dict[str, int] = {
            'structs': 0,
            'matched_classes': 0,
            'created_classes': 0,
            'inheritance_edges': 0,
        }

    def merge(self, structs: Iterable[ParsedStruct]) -> None:
        structs = list(structs)
        self.merge_members(structs)
        self.merge_inheritance(structs)
        logger.info(f"Merged struct layouts: {self.stats}")

    def merge_members(self, structs: List[ParsedStruct]) -> None:
        for st in structs:
            self.stats['structs'] += 1
            cls, created = self.model.get_or_create(st.name)
            self.stats['created_classes' if created else 'matched_classes'] += 1
            cls.add_data(st.members)
            logger.debug(f"Struct {st.name}: {len(st.members)} members ({'new class' if created else 'existing class'})")

    def merge_inheritance(self, structs: List[ParsedStruct]) -> None:
        """Resolve base names; an unknown base raises ``MalformedInputError``."""
        for st in structs:
            cls = self.model.require_class(st.name)
            for base_name in st.inherits_from:
                base = self.model.require_class(base_name)
                cls.inherits.append(base.name)
                self.stats['inheritance_edges'] += 1


def merge_struct_records(model: SymbolModel, records: Iterable[StructRecord]) -> None:
    """Main API: convert struct records and merge them into ``model``."""
    StructLayoutMerger(model).merge(ParsedStruct.from_record(r) for r in records)


__all__ = ["StructLayoutMerger", "merge_struct_records"]
