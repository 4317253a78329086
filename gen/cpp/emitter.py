#!/usr/bin/env python3
"""
C++ code emitter.

Renders the resolved model into header/source text for one target platform:
one file pair per class, one shared file pair of address symbols, one
placeholder header per unknown type, and optionally a unity build file.
Nothing here touches the disk; see ``gen.cpp.writer``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from app.config import GeneratorConfig, DEFAULT_CONFIG
from core.symbol_model import ParsedClass, SymbolModel
from gen.cpp.signatures import INDENT, FunctionRenderer
from sym_types import AccessLevel, TargetPlatform

logger = logging.getLogger(__name__)

UNKNOWN_PREFIX = "unknown_"


@dataclass
class ClassSource:
    name: str
    header: List[str]
    source: List[str]


@dataclass
class GeneratedSources:
    platform: TargetPlatform
    classes: List[ClassSource] = field(default_factory=list)
    function_header: List[str] = field(default_factory=list)
    function_source: List[str] = field(default_factory=list)
    unknown_headers: Dict[str, List[str]] = field(default_factory=dict)
    unity_build: Optional[List[str]] = None

    @property
    def function_file_stem(self) -> str:
        return function_file_stem(self.platform)


def function_file_stem(platform: TargetPlatform) -> str:
    return f"Functions{platform.folder_name}"


def unknown_header_name(type_name: str) -> str:
    return f"{UNKNOWN_PREFIX}{type_name}.hpp"


class CodeEmitter:
    def __init__(self, model: SymbolModel, platform: TargetPlatform,
                 config: Optional[GeneratorConfig] = None) -> None:
        self.model = model
        self.platform = platform
        self.config = config or DEFAULT_CONFIG
        self.renderer = FunctionRenderer(platform)

    def emit(self) -> GeneratedSources:
        out = GeneratedSources(platform=self.platform)
        for cls in self.model.classes:
            out.classes.append(ClassSource(cls.name, self.class_header(cls), self.class_source(cls)))
        out.function_header, out.function_source = self.function_files()
        for type_name in self.unknown_types():
            out.unknown_headers[type_name] = self.unknown_header(type_name)
        if self.config.produce_unity_build:
            out.unity_build = self.unity_build()
        logger.info(
            f"Emitted {len(out.classes)} classes and {len(out.unknown_headers)} placeholder types "
            f"for {self.platform.value}"
        )
        return out

    # ---------- shared scaffolding ----------
    def _open_guard(self, stem: str) -> List[str]:
        prefix = self.config.header_guard_prefix
        if prefix:
            guard = f"{prefix}{stem}_HPP"
            return [f"#ifndef {guard}", f"#define {guard}"]
        return ["#pragma once"]

    def _close_guard(self) -> List[str]:
        return ["", "#endif"] if self.config.header_guard_prefix else []

    @staticmethod
    def _in_namespaces(body: List[str], *namespaces: str) -> List[str]:
        opened = [ns for ns in namespaces if ns]
        lines: List[str] = []
        for ns in opened:
            lines.extend([f"namespace {ns} {{", ""])
        lines.extend(body)
        for i, _ in enumerate(opened):
            if i:
                lines.append("")
            lines.append("}")
        return lines

    def _class_namespaces(self, body: List[str]) -> List[str]:
        return self._in_namespaces(body, self.config.lib_namespace, self.config.class_namespace)

    # ---------- class files ----------
    def class_header(self, cls: ParsedClass) -> List[str]:
        lines = self._open_guard(cls.name)
        lines.extend(["", "#include <cstdint>", ""])

        includes = [f"#include \"{dep}.hpp\"" for dep in cls.header_dependencies]
        includes += [f"#include \"{unknown_header_name(dep)}\"" for dep in cls.unknown_dependencies]
        if includes:
            lines.extend(includes)
            lines.append("")

        body: List[str] = []
        if cls.source_dependencies:
            body.append("// Forward class declarations (defined in the source file)")
            body.extend(f"class {dep};" for dep in cls.source_dependencies)
            body.append("")
        body.extend(self.class_declaration(cls))
        body.append("")

        lines.extend(self._class_namespaces(body))
        lines.extend(self._close_guard())
        return lines

    def class_declaration(self, cls: ParsedClass) -> List[str]:
        head = f"class {cls.name}"
        if cls.inherits:
            head += " : " + ", ".join(f"public {base}" for base in cls.inherits)
        lines = [head, "{"]

        current: Optional[AccessLevel] = None
        if cls.data:
            lines.append("public:")
            lines.extend(INDENT + member.declaration() for member in cls.data)
            current = AccessLevel.PUBLIC

        for func in cls.functions:
            level = func.access_level or AccessLevel.PUBLIC
            if level is not current:
                if lines[-1] != "{":
                    lines.append("")
                lines.append(f"{level.value}:")
                current = level
            lines.append(INDENT + self.renderer.member_declaration(func))

        lines.append("};")
        return lines

    def class_source(self, cls: ParsedClass) -> List[str]:
        lines = [f"#include \"{cls.name}.hpp\"", ""]
        if cls.source_dependencies:
            lines.extend(f"#include \"{dep}.hpp\"" for dep in cls.source_dependencies)
            lines.append("")

        body: List[str] = []
        for func in cls.functions:
            body.extend(self.renderer.member_definition(func, cls.name))
            body.append("")

        lines.extend(self._class_namespaces(body))
        return lines

    # ---------- shared address symbols ----------
    def function_files(self) -> tuple[List[str], List[str]]:
        stem = function_file_stem(self.platform)
        declarations: List[str] = []
        definitions: List[str] = []
        used: Set[str] = set()

        for cls in self.model.all_classes():
            for func in cls.functions:
                if func.address is None:
                    continue
                symbol = self._unique_symbol(self.renderer.symbol_name(func), used)
                declarations.append(f"// {self.renderer.decorative_signature(func)}")
                declarations.append(self.renderer.symbol_declaration(symbol))
                declarations.append("")
                definitions.append(self.renderer.symbol_definition(symbol, func.address))

        if definitions:
            definitions.append("")

        namespaces = (self.config.lib_namespace, self.config.function_namespace)
        header = self._open_guard(stem)
        header.extend(["", "#include <cstdint>", ""])
        header.extend(self._in_namespaces(declarations, *namespaces))
        header.extend(self._close_guard())

        source = [f"#include \"{stem}.hpp\"", ""]
        source.extend(self._in_namespaces(definitions, *namespaces))
        return header, source

    @staticmethod
    def _unique_symbol(symbol: str, used: Set[str]) -> str:
        candidate = symbol
        counter = 0
        while candidate in used:
            counter += 1
            candidate = f"{symbol}_{counter}"
        used.add(candidate)
        return candidate

    # ---------- placeholders ----------
    def unknown_types(self) -> List[str]:
        seen: Dict[str, None] = {}
        for cls in self.model.classes:
            for name in cls.unknown_dependencies:
                seen.setdefault(name, None)
        return list(seen)

    def unknown_header(self, type_name: str) -> List[str]:
        lines = self._open_guard(UNKNOWN_PREFIX + type_name)
        lines.append("")
        lines.extend(self._class_namespaces([f"struct {type_name} {{ }};", ""]))
        lines.extend(self._close_guard())
        return lines

    def unity_build(self) -> List[str]:
        return [f"#include \"{cls.name}.cpp\"" for cls in self.model.classes]


def emit_sources(model: SymbolModel, platform: TargetPlatform,
                 config: Optional[GeneratorConfig] = None) -> GeneratedSources:
    return CodeEmitter(model, platform, config).emit()


__all__ = [
    "ClassSource",
    "GeneratedSources",
    "CodeEmitter",
    "emit_sources",
    "function_file_stem",
    "unknown_header_name",
]
