"""Template discovery, copying, and generated content.

Templates ship inside the package under ``ai_dotfiles/data/templates``:

- ``shared/rules/`` and ``languages/<lang>/rules/``: centralized rules;
- ``<provider>/``: provider-specific files (settings, commands, hooks);
- ``dev/``: ``.dev/`` workspace seeds;
- ``AGENTS.md``: default agent instructions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from ai_dotfiles.filesystem import default_fs, ensure_directory, list_markdown_files

if TYPE_CHECKING:
    from ai_dotfiles.filesystem import FileSystem

DEV_DIR_NAME = ".dev"
TOOL_NAME = "ai-dotfiles-manager"


def get_templates_dir() -> Path:
    """Return the directory holding the packaged templates."""
    return Path(__file__).resolve().parent / "data" / "templates"


def rules_language_dir(language: str) -> str:
    """JavaScript projects share the TypeScript rule set."""
    return "typescript" if language == "javascript" else language


def copy_tree(source: Path, dest: Path, fs: FileSystem | None = None) -> None:
    """Recursively copy directory *source* into *dest*."""
    fs = fs or default_fs()
    fs.make_dirs(dest)
    for name in fs.read_dir(source):
        src_path = source / name
        dest_path = dest / name
        if fs.is_dir(src_path):
            copy_tree(src_path, dest_path, fs)
        else:
            fs.copy_file(src_path, dest_path)


def copy_path(
    source: Path,
    target: Path,
    *,
    replace: bool = True,
    fs: FileSystem | None = None,
) -> bool:
    """Copy a file or directory tree from *source* to *target*.

    An existing target is removed first when *replace* is true; otherwise
    nothing is copied and ``False`` is returned.
    """
    fs = fs or default_fs()

    if fs.exists(target):
        if not replace:
            return False
        if fs.is_dir(target):
            fs.remove_tree(target)
        else:
            fs.delete_file(target)

    if fs.is_dir(source):
        copy_tree(source, target, fs)
    else:
        ensure_directory(target.parent, fs)
        fs.copy_file(source, target)
    return True


def has_entries(directory: Path, fs: FileSystem | None = None) -> bool:
    """True if *directory* exists and is not empty."""
    fs = fs or default_fs()
    return fs.is_dir(directory) and bool(fs.read_dir(directory))


# ---------------------------------------------------------------------------
# Generated READMEs
# ---------------------------------------------------------------------------


def generate_local_rules_readme(tool_name: str = "AI Tools") -> str:
    return f"""\
# {tool_name} - Local Rules

This directory is for **your project-specific custom rules** that override or extend the base rules.

## Why use .local?

The base rule directories (`shared/`, `typescript/`, etc.) are **copied** from this package
during setup/update. Treat them as managed sources; do not edit them directly because updates
may overwrite changes. Use .local for customizations that persist.

## How to customize

### Override specific rules
Create a file with the same name as a base rule to override it:
```
.local/
  └── architecture.md    # Overrides shared/architecture.md
```

### Add new rules
Add new markdown files for project-specific requirements:
```
.local/
  └── custom-api-standards.md
  └── database-conventions.md
```

## Updating base rules

`{TOOL_NAME} update` refreshes the copied base rule directories with the latest
templates. Files in .local are never touched.

## Git

Commit .local files to share project-specific rules with your team:
```gitignore
.dev/rules/shared
.dev/rules/typescript
!.dev/rules/.local/
```
"""


def generate_centralized_rules_readme() -> str:
    return f"""\
# Centralized Rules Directory

Rules for all AI coding assistants live here, so provider folders do not duplicate them.

## Structure

```
.dev/rules/
├── shared/       # Language-agnostic rules (managed copies)
├── <language>/   # Language-specific rules (managed copies)
└── .local/       # Project-specific overrides
```

## Loading priority

1. Shared rules
2. Language-specific rules
3. Local overrides (highest priority)

Files in `.local/` with the same name as a base rule take precedence.
Run `{TOOL_NAME} update` to refresh the managed copies.
"""


def generate_dev_readme() -> str:
    return """\
# .dev/ - Developer Workspace

This folder is a personal developer workspace that AI assistants load into
context at the start of every session.

## Files

- `architecture.md`: auto-generated project overview, regenerated on setup/update.
- `todo.md`: your task list. Check items off as you complete them.
- `feature.md`: notes on the feature currently in progress.
- `rules/`: centralized rules for every configured assistant.

## Git

`.dev/` is personal and usually not committed:

```gitignore
.dev/
```

Commit it if you want to share architecture notes or tasks with your team.
"""


def generate_todo_template() -> str:
    return """\
# Developer Todo List

> Personal task list - auto-loaded into AI context. Check off items as you complete them.

## Current Sprint

- [ ] Task 1
- [ ] Task 2

## Backlog

- [ ] Future task

## Completed

- [x] Example completed task
"""


# ---------------------------------------------------------------------------
# Rule discovery and Codex manifest
# ---------------------------------------------------------------------------


@dataclass
class RuleFiles:
    """Rule files found under ``.dev/``, as project-relative POSIX paths."""

    shared: list[str] = field(default_factory=list)
    language: list[str] = field(default_factory=list)
    local: list[str] = field(default_factory=list)
    lint: list[str] = field(default_factory=list)


def discover_rule_files(
    project_root: Path,
    language: str,
    fs: FileSystem | None = None,
) -> RuleFiles:
    fs = fs or default_fs()
    dev_dir = project_root / DEV_DIR_NAME
    rules_dir = dev_dir / "rules"
    return RuleFiles(
        shared=list_markdown_files(rules_dir / "shared", project_root, fs),
        language=list_markdown_files(rules_dir / rules_language_dir(language), project_root, fs),
        local=list_markdown_files(rules_dir / ".local", project_root, fs),
        lint=list_markdown_files(dev_dir / "lint", project_root, fs),
    )


def generate_context_index(files: RuleFiles) -> str:
    """Render ``.dev/context-index.md``."""
    lines = [
        "# Codex Context Index",
        "",
        "This index lists key context files Codex should consult.",
        "",
        "## Core",
        "- `.dev/DESIGNcode.md` (Codex bootstrap)",
        "- `.dev/architecture.md`",
        "- `.dev/feature.md`",
        "- `.dev/todo.md` (if present)",
        "",
        "## Rules (precedence: .local > language > shared)",
    ]

    def add_section(title: str, paths: list[str], heading: str = "###") -> None:
        lines.append(f"{heading} {title}")
        if paths:
            lines.extend(f"- `{p}`" for p in paths)
        else:
            lines.append("- (none)")
        lines.append("")

    add_section("Local Overrides", files.local)
    add_section("Language Rules", files.language)
    add_section("Shared Rules", files.shared)
    add_section("Linting Guides", files.lint, "##")

    lines.append("---")
    lines.append(f"This file is generated by {TOOL_NAME}.")
    return "\n".join(lines)


_CORE_FILES = ("DESIGNcode.md", "architecture.md", "feature.md", "todo.md")


def generate_codex_manifest(
    project_root: Path,
    language: str,
    files: RuleFiles,
    fs: FileSystem | None = None,
) -> dict[str, list[str]]:
    """Build the ``.dev/codex-manifest.json`` payload.

    ``load`` lists core files that exist, then lint guides, shared,
    language and local rules; ``precedence`` runs from highest to lowest.
    """
    fs = fs or default_fs()
    load = [
        f"{DEV_DIR_NAME}/{name}"
        for name in _CORE_FILES
        if fs.exists(project_root / DEV_DIR_NAME / name)
    ]
    load.extend(files.lint)
    load.extend(files.shared)
    load.extend(files.language)
    load.extend(files.local)

    lang_dir = rules_language_dir(language)
    return {
        "load": load,
        "precedence": [".dev/rules/.local", f".dev/rules/{lang_dir}", ".dev/rules/shared"],
    }
