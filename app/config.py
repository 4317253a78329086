from __future__ import annotations

import json
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Optional

import yaml

from core.model_builder import DEFAULT_FREESTANDING_PATTERNS
from sym_types import TargetPlatform


DEFAULT_BLACKLISTED_PATTERNS: List[str] = [
    "sub_",
    "unknown_",
    "SEH",
    "iterator'",
    "keyed to'",
    "MS_",
    "Mem5",
    "vector deleting",
    "scalar deleting",
    "bad_alloc",
    "bad_cast",
    "bad_exception",
    "bad_typeid",
    "exception",
    "type_info",
    "...",
]


@dataclass
class GeneratorConfig:
    # Output
    output_directory: str = "output"
    targets: List[TargetPlatform] = field(default_factory=lambda: [TargetPlatform.WINDOWS])
    produce_unity_build: bool = False

    # Injected verbatim into generated text
    lib_namespace: str = "API"
    class_namespace: str = "Classes"
    function_namespace: str = "Functions"
    header_guard_prefix: Optional[str] = None   # None -> "#pragma once"

    # Input filtering
    freestanding_patterns: List[str] = field(default_factory=lambda: list(DEFAULT_FREESTANDING_PATTERNS))
    blacklisted_patterns: List[str] = field(default_factory=lambda: list(DEFAULT_BLACKLISTED_PATTERNS))
    struct_name_prefixes: Optional[List[str]] = None  # e.g. ["C"]; None keeps every struct

    # Processing
    jobs: int = 1                               # record cleaning workers
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        self.targets = [t if isinstance(t, TargetPlatform) else TargetPlatform(str(t).lower())
                        for t in self.targets]
        if self.jobs < 1:
            raise ValueError(f"jobs must be at least 1, got {self.jobs}")

    def with_overrides(self, **overrides: Any) -> "GeneratorConfig":
        """Copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


DEFAULT_CONFIG = GeneratorConfig()


def _read_mapping(path: str) -> Dict[str, Any]:
    with open(path, 'r', encoding='utf-8') as f:
        if path.lower().endswith('.json'):
            data = json.load(f)
        else:
            data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")
    return data


def load_config(path: Optional[str] = None) -> GeneratorConfig:
    """Load a YAML (or JSON) config file; unknown keys are rejected."""
    if not path:
        return GeneratorConfig()
    data = _read_mapping(path)
    known = {f.name for f in fields(GeneratorConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown config keys in {path}: {', '.join(unknown)}")
    return GeneratorConfig(**data)


__all__ = [
    "DEFAULT_BLACKLISTED_PATTERNS",
    "DEFAULT_FREESTANDING_PATTERNS",
    "GeneratorConfig",
    "DEFAULT_CONFIG",
    "load_config",
]
