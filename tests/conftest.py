"""Shared test fixtures for ai-dotfiles-manager."""

from __future__ import annotations

from pathlib import Path

import pytest


class MemoryFileSystem:
    """In-memory implementation of the ``FileSystem`` protocol."""

    def __init__(self) -> None:
        self.files: dict[Path, str] = {}
        self.dirs: set[Path] = set()
        self.executable: set[Path] = set()

    def add_file(self, path: Path, content: str) -> None:
        self.make_dirs(path.parent)
        self.files[path] = content

    def exists(self, path: Path) -> bool:
        return path in self.files or path in self.dirs

    def is_file(self, path: Path) -> bool:
        return path in self.files

    def is_dir(self, path: Path) -> bool:
        return path in self.dirs

    def read_dir(self, path: Path) -> list[str]:
        if path not in self.dirs:
            raise FileNotFoundError(str(path))
        return sorted({p.name for p in (*self.files, *self.dirs) if p.parent == path and p != path})

    def read_text(self, path: Path) -> str:
        try:
            return self.files[path]
        except KeyError:
            raise FileNotFoundError(str(path)) from None

    def write_text(self, path: Path, content: str) -> None:
        if path.parent not in self.dirs:
            raise FileNotFoundError(str(path.parent))
        self.files[path] = content

    def copy_file(self, source: Path, dest: Path) -> None:
        self.write_text(dest, self.read_text(source))

    def delete_file(self, path: Path) -> None:
        if path not in self.files:
            raise FileNotFoundError(str(path))
        del self.files[path]

    def remove_tree(self, path: Path) -> None:
        self.files = {p: c for p, c in self.files.items() if path not in p.parents}
        self.dirs = {d for d in self.dirs if d != path and path not in d.parents}

    def make_dirs(self, path: Path) -> None:
        self.dirs.add(path)
        self.dirs.update(path.parents)

    def make_executable(self, path: Path) -> None:
        self.executable.add(path)


@pytest.fixture()
def memory_fs() -> MemoryFileSystem:
    return MemoryFileSystem()


@pytest.fixture()
def messages() -> list[str]:
    """Collects progress lines; pass ``messages.append`` as ``log``."""
    return []


@pytest.fixture()
def project(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture()
def home_dir(tmp_path: Path) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    return home


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


@pytest.fixture()
def templates_dir(tmp_path: Path) -> Path:
    """A small but complete template set."""
    tpl = tmp_path / "templates"

    _write(tpl / "AGENTS.md", "# Agents\n")

    _write(tpl / "shared" / "rules" / "architecture.md", "shared architecture\n")
    _write(tpl / "shared" / "rules" / "testing.md", "shared testing\n")
    _write(tpl / "languages" / "typescript" / "rules" / "ts-style.md", "ts style\n")
    _write(tpl / "languages" / "python" / "rules" / "py-style.md", "py style\n")
    for name in ("tsconfig.json", "tsconfig.test.json", "tsconfig.eslint.json", ".eslintrc.json"):
        _write(tpl / "languages" / "typescript" / name, f'{{"template": "{name}"}}\n')

    _write(tpl / "claude" / "settings.json", '{"template": true}\n')
    _write(tpl / "claude" / "commands" / "review.md", "review command\n")
    _write(tpl / "claude" / "hooks" / "session-start.sh", "#!/bin/sh\necho start\n")
    _write(tpl / "claude" / "workflows" / "release.md", "release workflow\n")

    _write(tpl / "gemini" / "settings.json", '{"gemini": true}\n')
    _write(tpl / "gemini" / "tool-policy.json", '{"policy": true}\n')
    _write(tpl / "gemini" / "commands" / "load.toml", 'prompt = "load"\n')

    _write(tpl / "cursor" / ".cursorrules", "template cursor rules\n")
    _write(tpl / "kilocode" / "config.json", '{"kilo": true}\n')
    _write(tpl / "roo" / "config.json", '{"roo": true}\n')

    _write(tpl / "dev" / "architecture.md", "# Team notes\n")
    _write(tpl / "dev" / "feature.md", "# Feature\n")
    _write(tpl / "dev" / "DESIGNcode.md", "# Bootstrap\n")
    _write(tpl / "dev" / "lint" / "lint-guide.md", "lint guide\n")

    return tpl
