"""Generate the ``.dev/architecture.md`` project overview."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from ai_dotfiles.filesystem import default_fs
from ai_dotfiles.language import detect_framework, package_dependencies

if TYPE_CHECKING:
    from pathlib import Path

    from ai_dotfiles.filesystem import FileSystem

_CLEAN_LAYERS = ("domain", "application", "infrastructure")

_SRC_DIR_NOTES: dict[str, str] = {
    "domain": "Core business logic",
    "application": "Use cases & services",
    "infrastructure": "External integrations",
    "interfaces": "API interfaces",
    "components": "UI components",
    "utils": "Utility functions",
    "services": "Business services",
    "controllers": "Request handlers",
    "models": "Data models",
    "config": "Configuration",
}

_TEST_DIRS = ("tests", "test", "__tests__")
_MAX_TECHNOLOGIES = 10


def _src_dirs(project_root: Path, fs: FileSystem) -> list[str]:
    src = project_root / "src"
    if not fs.is_dir(src):
        return []
    return [name for name in fs.read_dir(src) if fs.is_dir(src / name)]


def generate_architecture_doc(
    project_root: Path,
    language: str,
    fs: FileSystem | None = None,
    *,
    today: date | None = None,
) -> str:
    """Render a markdown overview of *project_root*.

    Uses only marker files and directory names: language, framework,
    top-level ``src/`` layout, and whether the three Clean Architecture
    layers are present.
    """
    fs = fs or default_fs()
    today = today or date.today()

    project_name = project_root.resolve().name
    framework = detect_framework(project_root, fs)
    dependencies = package_dependencies(project_root, fs)
    src_dirs = _src_dirs(project_root, fs)
    has_src = fs.is_dir(project_root / "src")
    has_tests = any(fs.is_dir(project_root / d) for d in _TEST_DIRS)
    clean = all(layer in src_dirs for layer in _CLEAN_LAYERS)

    tree = [f"{project_name}/"]
    if has_src:
        tree.append("├── src/                    # Source code")
        for name, note in _SRC_DIR_NOTES.items():
            if name in src_dirs:
                tree.append(f"│   ├── {name + '/':<22}# {note}")
    if has_tests:
        tree.append("├── tests/                  # Test files")
    if fs.exists(project_root / "package.json"):
        tree.append("├── package.json            # Dependencies")
    if fs.exists(project_root / "pyproject.toml"):
        tree.append("├── pyproject.toml          # Dependencies")
    if fs.exists(project_root / ".dev"):
        tree.append("├── .dev/                   # Developer workspace")

    if dependencies:
        technologies = "\n".join(f"- {dep}" for dep in dependencies[:_MAX_TECHNOLOGIES])
    else:
        technologies = "- (Add key technologies here)"

    if clean:
        principles = """\
This project follows **Clean Architecture** with three layers:

1. **Domain Layer** (src/domain/): business entities and interfaces, no external dependencies
2. **Application Layer** (src/application/): use cases, depends only on Domain
3. **Infrastructure Layer** (src/infrastructure/): databases, APIs, repository implementations"""
        patterns = """\
- **Repository Pattern**: All data access through repositories
- **Dependency Injection**: Constructor injection for all dependencies
- **Domain Errors**: Specific error classes per failure"""
    else:
        principles = """\
This project follows a **custom architecture** pattern.
Consider adopting Clean Architecture for better separation of concerns."""
        patterns = """\
- **Modular Design**: Separate concerns into different modules
- **Single Responsibility**: Each module has a single purpose"""

    tree_text = "\n".join(tree)
    return f"""\
# {project_name} - Architecture Overview

> Auto-generated architecture overview for AI context loading

## Project Information

- **Language**: {language}
- **Framework**: {framework}
- **Architecture**: {"Clean Architecture (3-layer)" if clean else "Custom"}
- **Last Updated**: {today.isoformat()}

## Directory Structure

```
{tree_text}
```

## Key Technologies

{technologies}

## Architecture Principles

{principles}

## Key Patterns

{patterns}

## Notes

- Project-specific rules are in `.dev/rules/.local/` and override the shared rules
- All rules in `.dev/rules/` are loaded into AI context
"""
