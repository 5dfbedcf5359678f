"""Project language and framework detection.

Detection is a fixed set of marker-file checks plus a read of the project
manifest; source files are never parsed.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from ai_dotfiles.filesystem import default_fs

if TYPE_CHECKING:
    from pathlib import Path

    from ai_dotfiles.filesystem import FileSystem

logger = logging.getLogger(__name__)

LANGUAGES: tuple[str, ...] = ("typescript", "python", "javascript")

_PYTHON_MARKERS = ("requirements.txt", "pyproject.toml", "setup.py", "Pipfile")

# First match wins, most specific first.
_JS_FRAMEWORKS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Next.js", ("next",)),
    ("NestJS", ("@nestjs/core", "nestjs")),
    ("React", ("react",)),
    ("Vue", ("vue",)),
    ("Express", ("express",)),
    ("Fastify", ("fastify",)),
    ("Koa", ("koa",)),
)

_PY_FRAMEWORKS: tuple[tuple[str, str], ...] = (
    ("Django", "django"),
    ("FastAPI", "fastapi"),
    ("Flask", "flask"),
)


def _read_package_json(project_root: Path, fs: FileSystem) -> dict[str, Any] | None:
    """Parse ``package.json``; return *None* when missing or unreadable."""
    path = project_root / "package.json"
    if not fs.exists(path):
        return None
    try:
        data = json.loads(fs.read_text(path))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        logger.warning("Cannot parse %s", path)
        return None
    if not isinstance(data, dict):
        return None
    return data


def _dependency_names(package: dict[str, Any]) -> list[str]:
    names: list[str] = []
    for section in ("dependencies", "devDependencies"):
        deps = package.get(section)
        if isinstance(deps, dict):
            names.extend(deps)
    return names


def package_dependencies(project_root: Path, fs: FileSystem | None = None) -> list[str]:
    """Return dependency and devDependency names from ``package.json``."""
    fs = fs or default_fs()
    package = _read_package_json(project_root, fs)
    return _dependency_names(package) if package is not None else []


def has_typescript(project_root: Path, fs: FileSystem | None = None) -> bool:
    """``tsconfig.json`` exists, or ``package.json`` depends on typescript."""
    fs = fs or default_fs()
    if fs.exists(project_root / "tsconfig.json"):
        return True
    package = _read_package_json(project_root, fs)
    if package is None:
        return False
    return "typescript" in _dependency_names(package)


def has_javascript(project_root: Path, fs: FileSystem | None = None) -> bool:
    """``package.json`` exists and the project is not TypeScript."""
    fs = fs or default_fs()
    if not fs.exists(project_root / "package.json"):
        return False
    return not has_typescript(project_root, fs)


def has_python(project_root: Path, fs: FileSystem | None = None) -> bool:
    fs = fs or default_fs()
    return any(fs.exists(project_root / marker) for marker in _PYTHON_MARKERS)


def detect_language(project_root: Path, fs: FileSystem | None = None) -> str | None:
    """Return ``typescript``, ``javascript``, ``python`` or *None*.

    TypeScript wins over JavaScript, which wins over Python.
    """
    fs = fs or default_fs()
    if has_typescript(project_root, fs):
        return "typescript"
    if has_javascript(project_root, fs):
        return "javascript"
    if has_python(project_root, fs):
        return "python"
    return None


def _python_manifest_text(project_root: Path, fs: FileSystem) -> str:
    chunks: list[str] = []
    for name in ("requirements.txt", "pyproject.toml", "Pipfile"):
        path = project_root / name
        if not fs.exists(path):
            continue
        try:
            chunks.append(fs.read_text(path).lower())
        except (OSError, UnicodeDecodeError):
            logger.warning("Cannot read %s", path)
    return "\n".join(chunks)


def detect_framework(project_root: Path, fs: FileSystem | None = None) -> str:
    """Return a framework name from the project manifests, or ``Unknown``."""
    fs = fs or default_fs()

    package = _read_package_json(project_root, fs)
    if package is not None:
        deps = _dependency_names(package)
        for framework, packages in _JS_FRAMEWORKS:
            if any(pkg in deps for pkg in packages):
                return framework

    manifest_text = _python_manifest_text(project_root, fs)
    if manifest_text:
        for framework, needle in _PY_FRAMEWORKS:
            if needle in manifest_text:
                return framework

    return "Unknown"
