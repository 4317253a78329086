"""
Noise filtering and spelling cleanup for lexed symbol records.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from typing import Iterable, List, Optional, Sequence

from core.type_normalizer import convert_array_to_ptr, convert_enum_to_int
from sym_types import SymbolRecord

logger = logging.getLogger(__name__)


def clean_spelling(text: Optional[str]) -> Optional[str]:
    """Drop elaborated-type keywords and tighten pointer/reference spacing."""
    if text is None:
        return None
    s = text.replace("class ", "").replace("struct ", "")
    s = s.replace(" *", "*").replace(" &", "&").replace(")const", ") const")
    s = s.replace("::", "__")
    s = convert_array_to_ptr(s)
    return convert_enum_to_int(s)


class RecordCleaner:
    def __init__(self, blacklisted_patterns: Optional[Sequence[str]] = None, jobs: int = 1) -> None:
        self.blacklisted_patterns = tuple(blacklisted_patterns or ())
        self.jobs = max(1, jobs)

    def is_blacklisted(self, record: SymbolRecord) -> bool:
        if record.function_name.startswith('_'):
            return True
        text = " ".join(filter(None, (
            record.class_name, record.function_name, record.return_type, record.parameters
        )))
        return any(p in text for p in self.blacklisted_patterns)

    def clean_record(self, record: SymbolRecord) -> Optional[SymbolRecord]:
        if self.is_blacklisted(record):
            return None
        return replace(
            record,
            class_name=clean_spelling(record.class_name),
            return_type=clean_spelling(record.return_type),
            parameters=clean_spelling(record.parameters) or "",
        )

    def clean(self, records: Iterable[SymbolRecord]) -> List[SymbolRecord]:
        """Clean records, keeping input order even when run on several workers."""
        records = list(records)
        if self.jobs > 1:
            with ThreadPoolExecutor(max_workers=self.jobs) as executor:
                cleaned = list(executor.map(self.clean_record, records))
        else:
            cleaned = [self.clean_record(r) for r in records]
        kept = [r for r in cleaned if r is not None]
        logger.info(f"Kept {len(kept)} of {len(records)} symbol records after filtering")
        return kept


__all__ = ["RecordCleaner", "clean_spelling"]
