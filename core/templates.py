#!/usr/bin/env python3
"""
Template name mangling.

Flattens nested template argument lists into legal identifiers, innermost
first: ``CExoArrayList<CNWSObject *>`` becomes ``CExoArrayListTemplatedCNWSObjectPtr``.
"""

from __future__ import annotations

from typing import List, Tuple

SPACE_MARKER = "^"
TEMPLATE_MARKER = "Templated"

_ARGUMENT_REWRITES: Tuple[Tuple[str, str], ...] = (
    ("*", "Ptr"),
    ("&", "Ref"),
    (SPACE_MARKER, ""),
    (" ", ""),
    (",", ""),
)


def bracket_spans(line: str) -> List[Tuple[int, int]]:
    """Return ``(start, end)`` of the contents of every top-level ``<...>`` pair.

    A ``<`` with no matching ``>`` before the end of the line is an operator
    token (``operator<``), so the search stops there and returns what was found.
    """
    spans: List[Tuple[int, int]] = []
    index = line.find('<')

    while index != -1:
        index += 1
        matching_index = 0
        depth = 1

        for i in range(index, len(line)):
            c = line[i]
            if c == '<':
                depth += 1
            elif c == '>':
                depth -= 1
                if depth == 0:
                    matching_index = i
                    break

        if matching_index <= index:
            break

        spans.append((index, matching_index))
        index = line.find('<', matching_index + 1)

    return spans


def get_matching_brackets(line: str) -> List[str]:
    """Return the contents of every top-level ``<...>`` pair, left to right."""
    return [line[start:end] for start, end in bracket_spans(line)]


def split_top_level(text: str, separator: str = ',') -> List[str]:
    """Split on ``separator`` outside template brackets; parts are stripped, empties dropped."""
    parts: List[str] = []
    depth = 0
    start = 0
    for i, c in enumerate(text):
        if c == '<':
            depth += 1
        elif c == '>' and depth > 0:
            depth -= 1
        elif c == separator and depth == 0:
            parts.append(text[start:i])
            start = i + 1
    parts.append(text[start:])
    return [p.strip() for p in parts if p.strip()]


def preprocess_template(line: str) -> str:
    """Replace spaces inside template brackets with the space marker."""
    for start, end in reversed(bracket_spans(line)):
        line = line[:start] + line[start:end].replace(" ", SPACE_MARKER) + line[end:]
    return line


def _mangle_argument(mangled: str) -> str:
    for old, new in _ARGUMENT_REWRITES:
        mangled = mangled.replace(old, new)
    return mangled


def _mangle(name: str) -> str:
    # right to left so earlier spans keep their indices
    for start, end in reversed(bracket_spans(name)):
        inner = _mangle_argument(_mangle(name[start:end]))
        name = name[:start - 1] + TEMPLATE_MARKER + inner + name[end + 1:]
    return name


def mangle_template_name(name: str) -> str:
    """Mangle every template argument list in ``name`` into identifier text.

    Pure and idempotent: the result contains no template brackets, so mangling
    it again returns it unchanged.
    """
    return _mangle(preprocess_template(name))


def strip_template_suffix(name: str) -> str:
    """Return the de-templated base of a mangled class name."""
    index = name.find(TEMPLATE_MARKER)
    return name[:index] if index > 0 else name


__all__ = [
    "SPACE_MARKER",
    "TEMPLATE_MARKER",
    "bracket_spans",
    "get_matching_brackets",
    "split_top_level",
    "preprocess_template",
    "mangle_template_name",
    "strip_template_suffix",
]
