"""
Parser for C header-style struct layout dumps (local types exported by the
disassembler), producing ``StructRecord``s for the struct layout merger.
"""
from __future__ import annotations

import logging
import re
from typing import List, Optional, Sequence, Tuple

from core.templates import bracket_spans, split_top_level
from sym_types import RawMember, StructRecord

logger = logging.getLogger(__name__)

TOKEN_BLACKLIST: Tuple[str, ...] = ("__attribute__", "__cppobj", "[]")

_HEADER_RE = re.compile(r'\bstruct\s+(?:__declspec\([^)]*\)+\s+)?(?P<name>[A-Za-z_]\w*)')
_MEMBER_RE = re.compile(
    r'^(?P<type>.+?)\s*(?P<name>[A-Za-z_]\w*)\s*(?P<dims>(?:\[\s*\w*\s*\])*)\s*;$'
)
_DIM_RE = re.compile(r'\[\s*(\w*)\s*\]')
_BASE_KEYWORDS_RE = re.compile(r'\b(public|protected|private|virtual)\s+')


class StructDumpParser:
    def __init__(self, name_prefixes: Optional[Sequence[str]] = None) -> None:
        self.name_prefixes = tuple(name_prefixes) if name_prefixes else None

    @staticmethod
    def preprocess_line(line: str) -> str:
        tokens = [t for t in line.rstrip("\r\n").split(' ') if not any(bl in t for bl in TOKEN_BLACKLIST)]
        return " ".join(tokens).replace("::", "__")

    @staticmethod
    def is_struct_start(line: str) -> bool:
        if "struct" not in line:
            return False
        # forward declarations, macros and typedefs
        return not any(marker in line for marker in (";", "std__", "#define", "typedef"))

    def parse_file(self, path: str) -> List[StructRecord]:
        with open(path, 'r', encoding='utf-8', errors='replace') as f:
            return self.parse_lines(f.readlines())

    def parse_text(self, text: str) -> List[StructRecord]:
        return self.parse_lines(text.splitlines())

    def parse_lines(self, raw_lines: Sequence[str]) -> List[StructRecord]:
        lines = [self.preprocess_line(l) for l in raw_lines]
        structs: List[StructRecord] = []

        i = 0
        while i < len(lines):
            line = lines[i]
            if not self.is_struct_start(line):
                i += 1
                continue

            body: List[str] = [line]
            i += 1
            while i < len(lines):
                body.append(lines[i])
                i += 1
                if lines[i - 1].strip() == "};":
                    break

            record = self.parse_struct(body)
            if record is not None:
                structs.append(record)

        if self.name_prefixes is not None:
            structs = [s for s in structs if s.name.startswith(self.name_prefixes)]

        logger.info(f"Parsed {len(structs)} struct layouts")
        return structs

    def parse_struct(self, lines: List[str]) -> Optional[StructRecord]:
        header = _HEADER_RE.search(lines[0])
        if header is None:
            logger.debug(f"Unrecognized struct header: {lines[0]!r}")
            return None

        name, rest = self.take_template_arguments(header.group('name'), lines[0][header.end():])

        bases: List[str] = []
        rest = rest.split('{', 1)[0].strip()
        if rest.startswith(':'):
            for base in split_top_level(rest[1:]):
                base = _BASE_KEYWORDS_RE.sub('', base).strip()
                if base:
                    bases.append(base)

        members: List[RawMember] = []
        for line in lines[1:]:
            member = self.parse_member(line)
            if member is not None:
                members.append(member)

        return StructRecord(name=name, members=members, base_class_names=bases)

    @staticmethod
    def take_template_arguments(name: str, rest: str) -> Tuple[str, str]:
        """Extend ``name`` with a directly following ``<...>`` list; returns (name, remainder)."""
        stripped = rest.lstrip()
        if not stripped.startswith('<'):
            return name, rest
        spans = bracket_spans(stripped)
        if not spans:
            return name, rest
        end = spans[0][1] + 1
        return name + stripped[:end], stripped[end:]

    @staticmethod
    def parse_member(line: str) -> Optional[RawMember]:
        text = line.split("//", 1)[0].strip()
        if not text or text in ("{", "};", "}") or text.endswith(":"):
            return None

        m = _MEMBER_RE.match(text)
        if m is None:
            logger.debug(f"Skipping unparsed member line: {text!r}")
            return None

        name = m.group('name')
        dims = _DIM_RE.findall(m.group('dims'))
        if dims:
            size = 1
            for dim in dims:
                try:
                    size *= int(dim, 0)
                except ValueError:
                    logger.warning(f"Member {name} has a symbolic array size [{dim}]; skipped")
                    return None
            name = f"{name}[{size}]"

        return name, m.group('type').strip()


def parse_struct_dump(path: str, name_prefixes: Optional[Sequence[str]] = None) -> List[StructRecord]:
    return StructDumpParser(name_prefixes).parse_file(path)


__all__ = ["StructDumpParser", "parse_struct_dump", "TOKEN_BLACKLIST"]
