"""Provider setup skeleton shared by every AI tool."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from ai_dotfiles.filesystem import default_fs, ensure_directory
from ai_dotfiles.migration import (
    MigrationAction,
    MigrationResult,
    migrate_directory_config,
    remove_existing_config,
)
from ai_dotfiles.prompts import confirm_overwrite, default_action_chooser, prompt_migration_action
from ai_dotfiles.reporting import resolve_log
from ai_dotfiles.templates import copy_path, has_entries

if TYPE_CHECKING:
    from ai_dotfiles.filesystem import FileSystem
    from ai_dotfiles.prompts import ActionChooser
    from ai_dotfiles.reporting import Log

logger = logging.getLogger(__name__)

# Hook files with these extensions are made executable after copying.
_SCRIPT_EXTENSIONS = (".js", ".py", ".sh")


@dataclass
class ProviderResult:
    """What a provider setup did.

    ``action`` is *None* when no existing configuration was found.
    """

    provider: str
    skipped: bool = False
    action: MigrationAction | None = None
    migration: MigrationResult | None = None


class BaseProvider:
    """Set up one provider's ``.<name>/`` directory.

    ``setup()`` runs the fixed sequence: handle existing configuration,
    then hooks, commands, settings and any additional files. Subclasses
    override the individual steps.
    """

    def __init__(
        self,
        name: str,
        display_name: str,
        project_root: Path,
        templates_dir: Path,
        *,
        auto_yes: bool = False,
        choose_action: ActionChooser | None = None,
        fs: FileSystem | None = None,
        log: Log | None = None,
        home_dir: Path | None = None,
    ) -> None:
        self.name = name
        self.display_name = display_name
        self.project_root = project_root
        self.templates_dir = templates_dir
        self.auto_yes = auto_yes
        if choose_action is None:
            choose_action = default_action_chooser() if auto_yes else prompt_migration_action
        self.choose_action = choose_action
        self.fs = fs or default_fs()
        self.log = resolve_log(log)
        self.home_dir = home_dir or Path.home()

        self.config_dir = project_root / f".{name}"
        self.template_dir = templates_dir / name

    def setup(self) -> ProviderResult:
        self.log(f"[blue]\n📦 Setting up {self.display_name}...[/blue]")
        result = ProviderResult(provider=self.name)

        if has_entries(self.config_dir, self.fs):
            self.handle_existing_config(result)
            if result.skipped:
                self.log(f"[dim]  Skipped {self.display_name} setup[/dim]")
                return result
        else:
            self.fs.make_dirs(self.config_dir)
            self.log(f"[dim]  Created .{self.name} directory[/dim]")

        self.setup_hooks()
        self.setup_commands()
        self.setup_settings()
        self.setup_additional()

        self.log(f"[green]  ✓ {self.display_name} configuration set up[/green]")
        return result

    def handle_existing_config(self, result: ProviderResult) -> None:
        """Ask for an action and apply it before any template is copied."""
        self.log(f"[yellow]\n  ⚠ Existing {self.display_name} configuration detected[/yellow]")
        action = self.choose_action(self.display_name)
        result.action = action
        logger.debug("%s: existing configuration action %s", self.name, action.value)

        if action is MigrationAction.SKIP:
            result.skipped = True
        elif action is MigrationAction.REPLACE:
            remove_existing_config(self.config_dir, fs=self.fs, log=self.log)
        else:
            result.migration = migrate_directory_config(
                self.config_dir, action, fs=self.fs, log=self.log
            )

    def setup_hooks(self) -> None:
        """Copy hook scripts, keeping any hook the user already has."""
        template_hooks = self.template_dir / "hooks"
        if not has_entries(template_hooks, self.fs):
            return

        hooks_dir = self.config_dir / "hooks"
        ensure_directory(hooks_dir, self.fs)

        for name in self.fs.read_dir(template_hooks):
            dest = hooks_dir / name
            if self.fs.exists(dest):
                continue
            self.fs.copy_file(template_hooks / name, dest)
            if name.endswith(_SCRIPT_EXTENSIONS):
                self.fs.make_executable(dest)
            self.log(f"[green]  ✓ Copied {name} to hooks/[/green]")

        self.log("[blue]  ℹ Hooks will run automatically on session start/end[/blue]")

    def setup_commands(self) -> None:
        pass

    def setup_settings(self) -> None:
        pass

    def setup_additional(self) -> None:
        pass

    def copy_file_from_template(self, filename: str, *, preserve_existing: bool = False) -> bool:
        """Copy ``<template_dir>/<filename>`` into the config directory.

        Returns ``False`` if the template is missing or an existing file
        was preserved.
        """
        source = self.template_dir / filename
        dest = self.config_dir / filename

        if not self.fs.exists(source):
            logger.debug("%s: no template %s", self.name, source)
            return False

        if preserve_existing and self.fs.exists(dest):
            self.log(f"[dim]  Skipped {filename} (already exists)[/dim]")
            return False

        copy_path(source, dest, replace=True, fs=self.fs)
        self.log(f"[green]  ✓ Copied {filename}[/green]")
        return True

    def copy_settings_with_confirmation(self, filename: str = "settings.json") -> bool:
        """Copy a settings file; an existing one is only replaced on confirmation.

        ``--yes`` runs never overwrite project-specific settings.
        """
        source = self.template_dir / filename
        dest = self.config_dir / filename
        if not self.fs.exists(source):
            return False

        if self.fs.exists(dest) and (self.auto_yes or not confirm_overwrite(filename)):
            self.log(f"[dim]  Skipped {filename}[/dim]")
            return False

        self.fs.copy_file(source, dest)
        self.log(f"[green]  ✓ Copied {filename} (project-specific)[/green]")
        return True
