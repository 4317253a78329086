#!/usr/bin/env python3
"""
Function signature rendering for one target platform.

Declarations carry the function's calling convention. Definitions are
trampolines that tear down their own frame and jump to the function's address.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from core.symbol_model import ParsedFunction
from sym_types import CallingConvention, TargetPlatform

DEFAULT_RETURN_TYPE = "void"
INDENT = "    "

_MSVC_CONVENTIONS: Dict[CallingConvention, str] = {
    CallingConvention.CDECL: "__cdecl",
    CallingConvention.THISCALL: "__thiscall",
    CallingConvention.STDCALL: "__stdcall",
    CallingConvention.FASTCALL: "__fastcall",
}


def format_address(address: int) -> str:
    return f"0x{address:08X}"


class FunctionRenderer:
    def __init__(self, platform: TargetPlatform) -> None:
        self.platform = platform

    # ---------- pieces ----------
    def calling_convention(self, convention: Optional[CallingConvention]) -> Optional[str]:
        if convention is None:
            return None
        if self.platform is TargetPlatform.WINDOWS:
            return _MSVC_CONVENTIONS[convention]
        return f"__attribute__(({convention.value}))"

    @staticmethod
    def return_type(func: ParsedFunction) -> str:
        """Declared return type; empty for constructors and destructors."""
        if func.return_type is not None:
            return str(func.return_type)
        if func.is_constructor or func.is_destructor:
            return ""
        return DEFAULT_RETURN_TYPE

    @staticmethod
    def parameters(func: ParsedFunction) -> str:
        return ", ".join(str(p) for p in func.parameters)

    def signature(self, func: ParsedFunction, qualifier: str = "", with_convention: bool = False) -> str:
        """``ret [cc] [qualifier::]name(params) [const] [attribute]``."""
        parts: List[str] = []
        ret = self.return_type(func)
        if ret:
            parts.append(ret)
        convention = self.calling_convention(func.calling_convention) if with_convention else None
        if convention and self.platform is TargetPlatform.WINDOWS:
            parts.append(convention)
        name = f"{qualifier}::{func.name}" if qualifier else func.name
        parts.append(f"{name}({self.parameters(func)})")
        if func.is_const:
            parts.append("const")
        if convention and self.platform is TargetPlatform.LINUX:
            parts.append(convention)
        return " ".join(parts)

    # ---------- class members ----------
    def member_declaration(self, func: ParsedFunction) -> str:
        prefix = ""
        if func.is_static:
            prefix += "static "
        if func.is_virtual:
            prefix += "virtual "
        return prefix + self.signature(func, with_convention=True) + ";"

    def member_definition(self, func: ParsedFunction, class_name: str) -> List[str]:
        lines = [self.signature(func, qualifier=class_name), "{"]
        if func.address is not None:
            lines.extend(self.trampoline(func.address))
        lines.append("}")
        return lines

    def trampoline(self, address: int) -> List[str]:
        """Body that drops the current frame and jumps to ``address``."""
        target = format_address(address)
        if self.platform is TargetPlatform.WINDOWS:
            body = [
                "__asm",
                "{",
                INDENT + "leave;",
                INDENT + f"mov eax, {target};",
                INDENT + "jmp eax;",
                "}",
            ]
        else:
            body = [
                "__asm__ __volatile__",
                "(",
                INDENT + "\"leave;\"",
                INDENT + "\"jmp *%0;\"",
                INDENT + ": // No outputs",
                INDENT + f": \"r\" ({target})",
                INDENT + ": // No clobbered registers",
                ");",
            ]
        return [INDENT + line for line in body]

    # ---------- address symbols ----------
    @staticmethod
    def symbol_name(func: ParsedFunction) -> str:
        if func.owner:
            return f"{func.owner}__{func.friendly_name}"
        return func.friendly_name

    def decorative_signature(self, func: ParsedFunction) -> str:
        text = self.signature(func, qualifier=func.owner or "", with_convention=True)
        if func.access_level is not None:
            text = f"{func.access_level.value} {text}"
        return text

    @staticmethod
    def symbol_declaration(symbol: str) -> str:
        return f"extern void * const {symbol};"

    @staticmethod
    def symbol_definition(symbol: str, address: int) -> str:
        return f"void * const {symbol} = reinterpret_cast<void*>({format_address(address)});"


__all__ = ["FunctionRenderer", "format_address", "DEFAULT_RETURN_TYPE"]
