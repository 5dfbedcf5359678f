"""Filesystem capability set used by migration, providers and workspace setup."""

from __future__ import annotations

import shutil
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from pathlib import Path


class FileSystem(Protocol):
    """Operations the scaffolding code performs on disk.

    Every function that touches the filesystem accepts an optional
    implementation of this protocol, so tests can swap in an in-memory one.
    """

    def exists(self, path: Path) -> bool: ...

    def is_file(self, path: Path) -> bool: ...

    def is_dir(self, path: Path) -> bool: ...

    def read_dir(self, path: Path) -> list[str]: ...

    def read_text(self, path: Path) -> str: ...

    def write_text(self, path: Path, content: str) -> None: ...

    def copy_file(self, source: Path, dest: Path) -> None: ...

    def delete_file(self, path: Path) -> None: ...

    def remove_tree(self, path: Path) -> None: ...

    def make_dirs(self, path: Path) -> None: ...

    def make_executable(self, path: Path) -> None: ...


class LocalFileSystem:
    """The real filesystem."""

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_file(self, path: Path) -> bool:
        return path.is_file()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def read_dir(self, path: Path) -> list[str]:
        """Return child names sorted, so enumeration order is stable."""
        return sorted(child.name for child in path.iterdir())

    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    def write_text(self, path: Path, content: str) -> None:
        path.write_text(content, encoding="utf-8")

    def copy_file(self, source: Path, dest: Path) -> None:
        shutil.copy2(source, dest)

    def delete_file(self, path: Path) -> None:
        path.unlink()

    def remove_tree(self, path: Path) -> None:
        shutil.rmtree(path)

    def make_dirs(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)

    def make_executable(self, path: Path) -> None:
        try:
            path.chmod(0o755)
        except PermissionError:
            # Windows and some mounted volumes refuse mode changes.
            pass


def default_fs() -> FileSystem:
    """Return the production filesystem."""
    return LocalFileSystem()


def ensure_directory(path: Path, fs: FileSystem | None = None) -> None:
    """Create *path* (and parents) if it does not exist yet."""
    fs = fs or default_fs()
    if not fs.exists(path):
        fs.make_dirs(path)


def write_file(path: Path, content: str, fs: FileSystem | None = None) -> None:
    """Write *content* to *path*, creating parent directories first."""
    fs = fs or default_fs()
    ensure_directory(path.parent, fs)
    fs.write_text(path, content)


def list_markdown_files(directory: Path, base: Path, fs: FileSystem | None = None) -> list[str]:
    """List ``*.md`` files in *directory* as sorted POSIX paths relative to *base*."""
    fs = fs or default_fs()
    if not fs.is_dir(directory):
        return []
    rel_dir = directory.relative_to(base)
    return sorted(
        (rel_dir / name).as_posix()
        for name in fs.read_dir(directory)
        if name.lower().endswith(".md")
    )
