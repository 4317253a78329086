#!/usr/bin/env python3
"""
CLI entrypoint for sym2cpp.

Usage:
  python -m app.cli <symbols.json> [--structs PATH] [--crossref PATH] [flags]

Turns a lexed symbol dump into per-class C++ headers and sources whose
function bodies jump to the original addresses.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

import yaml

from app.config import GeneratorConfig, load_config
from app.loaders import load_struct_records, load_symbol_records
from app.pipeline import SymbolPipeline
from core.errors import MalformedInputError
from gen.cpp.writer import SourceTreeWriter
from sym_types import TargetPlatform
from utils.logging_config import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sym2cpp",
        description="Generate address-bound C++ bindings from a symbol dump",
    )
    parser.add_argument('symbols', help='Lexed symbol records (.json, .yml, .yaml)')
    parser.add_argument('--structs', help='Struct layouts: text dump or .json/.yml records')
    parser.add_argument('--crossref', help='Second symbol record file used to fill missing metadata')
    parser.add_argument('--config', help='YAML or JSON configuration file')
    parser.add_argument('--out-dir', '-o', dest='output_directory', help='Output directory')
    parser.add_argument('--target', action='append', choices=[t.value for t in TargetPlatform],
                        help='Target platform (repeatable)')
    parser.add_argument('--unity-build', action='store_true', default=None,
                        help='Also write UnityBuild.cpp')
    parser.add_argument('--lib-namespace', help='Outer namespace of generated code')
    parser.add_argument('--class-namespace', help='Namespace of generated classes')
    parser.add_argument('--function-namespace', help='Namespace of address symbols')
    parser.add_argument('--header-guard-prefix', help='Use #ifndef guards with this prefix instead of #pragma once')
    parser.add_argument('--jobs', '-j', type=int, help='Workers used to clean records')
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument('--verbose', '-v', action='store_true', help='Debug logging')
    verbosity.add_argument('--quiet', '-q', action='store_true', help='Warnings and errors only')
    return parser


def config_from_args(args: argparse.Namespace) -> GeneratorConfig:
    config = load_config(args.config)
    log_level = "DEBUG" if args.verbose else "WARNING" if args.quiet else None
    return config.with_overrides(
        output_directory=args.output_directory,
        targets=[TargetPlatform(t) for t in args.target] if args.target else None,
        produce_unity_build=args.unity_build,
        lib_namespace=args.lib_namespace,
        class_namespace=args.class_namespace,
        function_namespace=args.function_namespace,
        header_guard_prefix=args.header_guard_prefix,
        jobs=args.jobs,
        log_level=log_level,
    )


def run(args: argparse.Namespace) -> int:
    config = config_from_args(args)
    configure_logging(config.log_level)

    records = load_symbol_records(args.symbols)
    structs = load_struct_records(args.structs, config.struct_name_prefixes) if args.structs else None
    crossref = load_symbol_records(args.crossref) if args.crossref else None

    pipeline = SymbolPipeline(config)
    model = pipeline.build(records, structs, crossref)

    writer = SourceTreeWriter(config.output_directory)
    for sources in pipeline.generate(model).values():
        writer.write(sources)

    logger.info(f"Generated {len(model)} classes into {config.output_directory}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return run(args)
    except MalformedInputError as e:
        logger.error(f"Malformed input: {e}")
        return 1
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.error(f"Generation failed: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
