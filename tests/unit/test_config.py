#!/usr/bin/env python3
"""
Tests for generator configuration loading
"""

import json

import pytest

from app.config import DEFAULT_CONFIG, GeneratorConfig, load_config
from sym_types import TargetPlatform


class TestGeneratorConfig:
    def test_defaults(self):
        assert DEFAULT_CONFIG.targets == [TargetPlatform.WINDOWS]
        assert DEFAULT_CONFIG.lib_namespace == "API"
        assert DEFAULT_CONFIG.class_namespace == "Classes"
        assert DEFAULT_CONFIG.function_namespace == "Functions"
        assert DEFAULT_CONFIG.header_guard_prefix is None
        assert DEFAULT_CONFIG.freestanding_patterns == ["Exo", "Admin", "Create"]
        assert DEFAULT_CONFIG.struct_name_prefixes is None

    def test_targets_from_strings(self):
        config = GeneratorConfig(targets=["Linux", "windows"])
        assert config.targets == [TargetPlatform.LINUX, TargetPlatform.WINDOWS]

    def test_invalid_jobs(self):
        with pytest.raises(ValueError):
            GeneratorConfig(jobs=0)

    def test_overrides_skip_none(self):
        config = GeneratorConfig(lib_namespace="NWNXLib").with_overrides(lib_namespace=None, jobs=3)
        assert config.lib_namespace == "NWNXLib"
        assert config.jobs == 3


class TestLoadConfig:
    def test_no_path_gives_defaults(self):
        assert load_config(None) == GeneratorConfig()

    def test_yaml(self, tmp_path):
        path = tmp_path / "sym2cpp.yml"
        path.write_text(
            "output_directory: build/out\n"
            "targets: [linux, windows]\n"
            "header_guard_prefix: NWN_\n"
            "struct_name_prefixes: [C]\n",
            encoding="utf-8",
        )
        config = load_config(str(path))
        assert config.output_directory == "build/out"
        assert config.targets == [TargetPlatform.LINUX, TargetPlatform.WINDOWS]
        assert config.header_guard_prefix == "NWN_"
        assert config.struct_name_prefixes == ["C"]

    def test_json(self, tmp_path):
        path = tmp_path / "sym2cpp.json"
        path.write_text(json.dumps({"produce_unity_build": True, "jobs": 2}), encoding="utf-8")
        config = load_config(str(path))
        assert config.produce_unity_build
        assert config.jobs == 2

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yml"
        path.write_text("", encoding="utf-8")
        assert load_config(str(path)) == GeneratorConfig()

    def test_unknown_keys_rejected(self, tmp_path):
        path = tmp_path / "bad.yml"
        path.write_text("output_dir: out\n", encoding="utf-8")
        with pytest.raises(ValueError, match="output_dir"):
            load_config(str(path))

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "list.yml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_config(str(path))
