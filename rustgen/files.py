from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .scope import Scope

logger = logging.getLogger(__name__)

LIB_FILE = "lib.rs"


class CodegenFileError(Exception):
    """Base class for failures while persisting generated code."""


class FileAlreadyExistsError(CodegenFileError):
    def __init__(self, path: Path) -> None:
        super().__init__(f"File already exists: {path}")
        self.path = path


class FileGenerationError(CodegenFileError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"File generation failed: {path}: {reason}")
        self.path = path


class LibraryGenerationError(CodegenFileError):
    def __init__(self, name: str, path: Path) -> None:
        super().__init__(f"Library `{name}` generation failed at {path}")
        self.name = name
        self.path = path


@dataclass
class File:
    path: Path
    scope: Scope = field(default_factory=Scope)

    def __post_init__(self) -> None:
        self.path = Path(self.path)

    def generate(self, out_dir: str | Path) -> Path:
        """Write the rendered scope to ``out_dir / path``.

        Never overwrites: an existing destination raises
        :class:`FileAlreadyExistsError`, any other I/O failure raises
        :class:`FileGenerationError`.
        """
        file_path = Path(out_dir) / self.path
        if file_path.exists():
            raise FileAlreadyExistsError(file_path)

        text = self.scope.to_string()
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileGenerationError(file_path, e.strerror or str(e)) from e
        try:
            with file_path.open("x", encoding="utf-8") as fh:
                fh.write(text)
        except FileExistsError as e:
            raise FileAlreadyExistsError(file_path) from e
        except OSError as e:
            raise FileGenerationError(file_path, e.strerror or str(e)) from e

        logger.info("Wrote %s (%d bytes)", file_path, len(text))
        return file_path


@dataclass
class Library:
    """A crate source tree: ``lib.rs`` plus uniquely-pathed sibling files."""
    name: str
    path: Path
    lib: File = field(default_factory=lambda: File(Path(LIB_FILE)))
    files: dict[Path, File] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.path = Path(self.path)

    def push_file(self, file: File) -> None:
        if file.path == Path(LIB_FILE) or file.path in self.files:
            raise FileAlreadyExistsError(file.path)
        self.files[file.path] = file

    def new_file(self, path: str | Path) -> File:
        file = File(Path(path))
        self.push_file(file)
        return file

    def generate(self) -> list[Path]:
        written: list[Path] = []
        logger.debug("Generating library %s into %s", self.name, self.path)
        for file in [self.lib, *self.files.values()]:
            try:
                written.append(file.generate(self.path))
            except CodegenFileError as e:
                raise LibraryGenerationError(self.name, self.path / file.path) from e
        return written
