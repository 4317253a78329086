#!/usr/bin/env python3
"""
Cross-referencing of two independently built models of the same binary.

Functions are matched by class name and function name only. Overloads are
not told apart: every same-named pair is processed in order, so the first
donor to supply a field wins for each primary function.
"""

from __future__ import annotations

import logging

from core.symbol_model import SymbolModel

logger = logging.getLogger(__name__)


def cross_reference(primary: SymbolModel, secondary: SymbolModel) -> int:
    """Fill missing return types and access levels in ``primary``; returns functions changed."""
    filled = 0
    matched_classes = 0

    for main_class in primary.all_classes():
        other_class = secondary.get_class(main_class.name)
        if other_class is None:
            continue
        matched_classes += 1
        for main_func in main_class.functions:
            for other_func in other_class.functions_named(main_func.name):
                if main_func.cross_reference_using(other_func):
                    filled += 1
                    logger.debug(f"Filled {main_class.name}::{main_func.name} from cross reference")

    logger.info(f"Cross reference: {matched_classes} shared classes, {filled} functions filled")
    return filled


__all__ = ["cross_reference"]
