from __future__ import annotations

import json
import os
from typing import Any, List, Optional, Sequence

import yaml

from adapters.symbol_dump.struct_parser import StructDumpParser
from core.errors import MalformedInputError
from sym_types import StructRecord, SymbolRecord

_STRUCTURED_SUFFIXES = ('.json', '.yml', '.yaml')


def load_json(path: str) -> Any:
    # Prefer orjson if available; fall back to stdlib json
    try:
        import orjson  # type: ignore
    except ImportError:
        orjson = None  # type: ignore
    if orjson is not None:
        with open(path, "rb") as f:
            return orjson.loads(f.read())
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _load_structured(path: str) -> Any:
    if not os.path.isfile(path):
        raise FileNotFoundError(f"Input file not found: {path}")
    if path.lower().endswith(('.yml', '.yaml')):
        with open(path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or []
    return load_json(path)


def _record_list(data: Any, path: str, key: str) -> List[Any]:
    if isinstance(data, dict):
        data = data.get(key, [])
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of records")
    return data


def load_symbol_records(path: str) -> List[SymbolRecord]:
    """Read lexed symbol records from a JSON or YAML file, in file order."""
    records: List[SymbolRecord] = []
    for i, item in enumerate(_record_list(_load_structured(path), path, "symbols")):
        try:
            records.append(SymbolRecord.from_mapping(item))
        except (KeyError, TypeError, AttributeError) as e:
            raise MalformedInputError(f"{path}: symbol record {i}: {e}") from e
    return records


def load_struct_records(path: str, name_prefixes: Optional[Sequence[str]] = None) -> List[StructRecord]:
    """Read struct records from JSON/YAML, or parse a text layout dump."""
    if not path.lower().endswith(_STRUCTURED_SUFFIXES):
        return StructDumpParser(name_prefixes).parse_file(path)

    records: List[StructRecord] = []
    for i, item in enumerate(_record_list(_load_structured(path), path, "structs")):
        try:
            records.append(StructRecord.from_mapping(item))
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedInputError(f"{path}: struct record {i}: {e}") from e
    if name_prefixes:
        records = [r for r in records if r.name.startswith(tuple(name_prefixes))]
    return records


__all__ = ["load_symbol_records", "load_struct_records"]
