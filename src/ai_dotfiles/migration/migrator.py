"""Move existing provider configuration out of the way of fresh templates.

Two layouts are supported:

- directory providers (``.claude``, ``.gemini``, ...): markdown files at the
  root of the config directory and inside its ``rules/`` subdirectory move
  into ``rules/.local/``;
- single-file providers (``.cursorrules``): the file moves to a sibling
  ``<name>.local`` file, appending when that file already exists.

Filesystem errors are not caught. A failure halfway through a directory
migration leaves the files processed so far in ``.local/``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ai_dotfiles.filesystem import default_fs
from ai_dotfiles.migration.actions import FileMigrationResult, MigrationAction, MigrationResult
from ai_dotfiles.reporting import resolve_log

if TYPE_CHECKING:
    from pathlib import Path

    from ai_dotfiles.filesystem import FileSystem
    from ai_dotfiles.reporting import Log

logger = logging.getLogger(__name__)

RULES_DIR_NAME = "rules"
LOCAL_DIR_NAME = ".local"
LOCAL_SUFFIX = ".local"


def local_dir_for(config_dir: Path) -> Path:
    """Return the override directory of a provider config directory."""
    return config_dir / RULES_DIR_NAME / LOCAL_DIR_NAME


def local_file_for(source_path: Path, project_root: Path) -> Path:
    """Return the override file that *source_path* migrates into."""
    return project_root / f"{source_path.name}{LOCAL_SUFFIX}"


def _markdown_files(directory: Path, fs: FileSystem) -> list[str]:
    return [
        name
        for name in fs.read_dir(directory)
        if name.endswith(".md") and fs.is_file(directory / name)
    ]


def _require_migration(action: MigrationAction | str) -> MigrationAction:
    action = MigrationAction.parse(action)
    if not action.is_migration:
        raise ValueError(f"{action.value!r} is not a migration action")
    return action


def migrate_directory_config(
    config_dir: Path,
    action: MigrationAction | str,
    *,
    fs: FileSystem | None = None,
    log: Log | None = None,
) -> MigrationResult:
    """Move markdown rule files from *config_dir* into ``rules/.local/``.

    Root-level files are processed before ``rules/`` files. When both
    levels hold a file with the same name, the ``rules/`` copy lands last
    and wins.
    """
    fs = fs or default_fs()
    log = resolve_log(log)
    action = _require_migration(action)

    rules_dir = config_dir / RULES_DIR_NAME
    local_dir = local_dir_for(config_dir)

    root_files = _markdown_files(config_dir, fs)
    rules_files = _markdown_files(rules_dir, fs) if fs.is_dir(rules_dir) else []

    if not root_files and not rules_files:
        logger.debug("No markdown files to migrate in %s", config_dir)
        return MigrationResult(files_migrated=0, action=action, files=[])

    fs.make_dirs(local_dir)

    migrated: list[str] = []
    for source_dir, names in ((config_dir, root_files), (rules_dir, rules_files)):
        for name in names:
            dest = local_dir / name
            if name in migrated:
                logger.debug("%s overwrites an earlier migrated file of the same name", dest)
            fs.copy_file(source_dir / name, dest)
            fs.delete_file(source_dir / name)
            migrated.append(name)

    log(f"[green]  ✓ Migrated {len(migrated)} files to .local/[/green]")
    if action is MigrationAction.MIGRATE_SUPERSEDE:
        log("[blue]  ℹ Your .local/ files will supersede shared rules with same names[/blue]")
    else:
        log("[blue]  ℹ Your .local/ files preserved alongside shared rules[/blue]")

    return MigrationResult(files_migrated=len(migrated), action=action, files=migrated)


def migrate_single_file_config(
    source_path: Path,
    project_root: Path,
    action: MigrationAction | str,
    *,
    fs: FileSystem | None = None,
    log: Log | None = None,
) -> FileMigrationResult:
    """Move a single-file config to its ``.local`` sibling.

    An existing ``.local`` file is never truncated: the source content is
    appended after a ``# Migrated from`` separator, so repeated updates
    accumulate history.
    """
    fs = fs or default_fs()
    log = resolve_log(log)
    action = _require_migration(action)

    dest = local_file_for(source_path, project_root)

    if fs.exists(dest):
        source_content = fs.read_text(source_path)
        local_content = fs.read_text(dest)
        fs.write_text(
            dest,
            f"{local_content}\n\n# Migrated from {source_path.name}\n{source_content}",
        )
        log(f"[green]  ✓ Appended content to existing {dest.name}[/green]")
    else:
        fs.copy_file(source_path, dest)
        log(f"[green]  ✓ Migrated to {dest.name}[/green]")

    fs.delete_file(source_path)

    if action is MigrationAction.MIGRATE_SUPERSEDE:
        log(f"[blue]  ℹ Your {dest.name} will supersede shared rules[/blue]")
    else:
        log(f"[blue]  ℹ Your {dest.name} preserved alongside shared rules[/blue]")

    return FileMigrationResult(migrated=True, action=action, destination=dest)


def remove_existing_config(
    config_dir: Path,
    *,
    fs: FileSystem | None = None,
    log: Log | None = None,
) -> None:
    """Delete everything directly under *config_dir*, overrides included."""
    fs = fs or default_fs()
    log = resolve_log(log)

    for name in fs.read_dir(config_dir):
        path = config_dir / name
        if fs.is_dir(path):
            fs.remove_tree(path)
        else:
            fs.delete_file(path)

    log("[green]  ✓ Removed existing files[/green]")


def remove_single_file_config(
    path: Path,
    *,
    fs: FileSystem | None = None,
    log: Log | None = None,
) -> None:
    """Delete a single-file config (``replace`` for single-file providers)."""
    fs = fs or default_fs()
    log = resolve_log(log)
    fs.delete_file(path)
    log("[green]  ✓ Removed existing file[/green]")
