from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional

from adapters.symbol_dump.cleaner import RecordCleaner
from app.config import GeneratorConfig, DEFAULT_CONFIG
from core.cross_reference import cross_reference
from core.dependency_resolver import DependencyResolver
from core.model_builder import SymbolModelBuilder
from core.struct_merger import StructLayoutMerger
from core.symbol_model import ParsedStruct, SymbolModel
from gen.cpp.emitter import CodeEmitter, GeneratedSources
from sym_types import StructRecord, SymbolRecord, TargetPlatform

logger = logging.getLogger(__name__)


class SymbolPipeline:
    """clean -> build -> merge structs -> cross reference -> resolve -> emit."""

    def __init__(self, config: Optional[GeneratorConfig] = None) -> None:
        self.config = config or DEFAULT_CONFIG
        self.cleaner = RecordCleaner(self.config.blacklisted_patterns, jobs=self.config.jobs)

    def build_model(self, records: Iterable[SymbolRecord]) -> SymbolModel:
        cleaned = self.cleaner.clean(records)
        return SymbolModelBuilder(self.config.freestanding_patterns).build(cleaned)

    def build(self,
              records: Iterable[SymbolRecord],
              struct_records: Optional[Iterable[StructRecord]] = None,
              crossref_records: Optional[Iterable[SymbolRecord]] = None) -> SymbolModel:
        model = self.build_model(records)

        if struct_records is not None:
            StructLayoutMerger(model).merge(ParsedStruct.from_record(r) for r in struct_records)

        if crossref_records is not None:
            logger.info("Building cross reference model")
            cross_reference(model, self.build_model(crossref_records))

        DependencyResolver(model).resolve()
        return model

    def generate(self, model: SymbolModel) -> Dict[TargetPlatform, GeneratedSources]:
        return {
            platform: CodeEmitter(model, platform, self.config).emit()
            for platform in self.config.targets
        }


__all__ = ["SymbolPipeline"]
