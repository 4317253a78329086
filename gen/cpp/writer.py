from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List

from gen.cpp.emitter import GeneratedSources, unknown_header_name

logger = logging.getLogger(__name__)

CLASS_FOLDER = "API"
FUNCTION_FOLDER = "Functions"
UNITY_BUILD_FILE = "UnityBuild.cpp"


class SourceTreeWriter:
    """Writes generated text under ``<out>/API/<Platform>`` and ``<out>/Functions``."""

    def __init__(self, output_directory: str) -> None:
        self.root = Path(output_directory)
        self.written: List[Path] = []

    def class_directory(self, sources: GeneratedSources) -> Path:
        return self.root / CLASS_FOLDER / sources.platform.folder_name

    def function_directory(self) -> Path:
        return self.root / FUNCTION_FOLDER

    def _write(self, path: Path, lines: Iterable[str]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        self.written.append(path)
        logger.debug(f"Wrote {path}")

    def write(self, sources: GeneratedSources) -> List[Path]:
        start = len(self.written)
        class_dir = self.class_directory(sources)
        function_dir = self.function_directory()

        for cls in sources.classes:
            self._write(class_dir / f"{cls.name}.hpp", cls.header)
            self._write(class_dir / f"{cls.name}.cpp", cls.source)

        for type_name, lines in sources.unknown_headers.items():
            self._write(class_dir / unknown_header_name(type_name), lines)

        self._write(function_dir / f"{sources.function_file_stem}.hpp", sources.function_header)
        self._write(function_dir / f"{sources.function_file_stem}.cpp", sources.function_source)

        if sources.unity_build is not None:
            self._write(class_dir / UNITY_BUILD_FILE, sources.unity_build)

        written = self.written[start:]
        logger.info(f"Wrote {len(written)} files for {sources.platform.value} under {self.root}")
        return written


__all__ = ["SourceTreeWriter", "CLASS_FOLDER", "FUNCTION_FOLDER", "UNITY_BUILD_FILE"]
