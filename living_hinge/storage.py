# living_hinge/storage.py
# Storage boundary for generated drawings.
# The engine only needs write() and list(); DirectoryStorage is the file-system
# implementation, MemoryStorage is for tests and embedding.

from __future__ import annotations

import fnmatch
from pathlib import Path
from typing import Dict, List, Protocol

from .config import DEFAULTS


class Storage(Protocol):
    def write(self, relative_path: str, content: str) -> None: ...

    def list(self, pattern: str) -> List[str]: ...


def _check_relative(relative_path: str) -> str:
    p = Path(relative_path)
    if p.is_absolute() or ".." in p.parts:
        raise ValueError(f"Storage path must be relative and inside the root: {relative_path!r}")
    return p.as_posix()


class DirectoryStorage:
    """Files under one root directory (created on first write)."""

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def write(self, relative_path: str, content: str) -> None:
        path = self.root / _check_relative(relative_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")

    def read(self, relative_path: str) -> str:
        return (self.root / _check_relative(relative_path)).read_text(encoding="utf-8")

    def list(self, pattern: str) -> List[str]:
        if not self.root.is_dir():
            return []
        return sorted(p.name for p in self.root.glob(pattern) if p.is_file())


class MemoryStorage:
    def __init__(self) -> None:
        self.files: Dict[str, str] = {}

    def write(self, relative_path: str, content: str) -> None:
        self.files[_check_relative(relative_path)] = content

    def read(self, relative_path: str) -> str:
        return self.files[_check_relative(relative_path)]

    def list(self, pattern: str) -> List[str]:
        return sorted(n for n in self.files if fnmatch.fnmatchcase(n, pattern))


def list_generated_hinges(storage: Storage) -> List[str]:
    """All artifacts of both naming families, newest first by name."""
    names = set()
    for pattern in DEFAULTS.artifact_patterns:
        names.update(storage.list(pattern))
    return sorted(names, reverse=True)
