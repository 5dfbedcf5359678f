"""Cursor provider: a single ``.cursorrules`` file instead of a directory."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ai_dotfiles.filesystem import write_file
from ai_dotfiles.migration import (
    MigrationAction,
    local_file_for,
    migrate_single_file_config,
    remove_single_file_config,
)
from ai_dotfiles.prompts import prompt_single_file_migration_action
from ai_dotfiles.providers.base import BaseProvider, ProviderResult
from ai_dotfiles.templates import copy_path

if TYPE_CHECKING:
    from pathlib import Path

RULES_FILENAME = ".cursorrules"

_LOCAL_SEED = (
    "# Add your custom Cursor rules here\n"
    "# These rules will be loaded in addition to .cursorrules\n"
)


class CursorProvider(BaseProvider):
    def __init__(self, project_root: Path, templates_dir: Path, **options: Any) -> None:
        if options.get("choose_action") is None and not options.get("auto_yes"):
            options["choose_action"] = prompt_single_file_migration_action
        super().__init__("cursor", "Cursor", project_root, templates_dir, **options)
        self.rules_path = project_root / RULES_FILENAME
        self.template_path = self.template_dir / RULES_FILENAME
        self.local_path = local_file_for(self.rules_path, project_root)

    def setup(self) -> ProviderResult:
        self.log(f"[blue]\n📦 Setting up {self.display_name}...[/blue]")
        result = ProviderResult(provider=self.name)

        if not self.fs.exists(self.template_path):
            self.log("[yellow]  ⚠ Cursor template not found, skipping[/yellow]")
            result.skipped = True
            return result

        if self.fs.exists(self.rules_path):
            self.handle_existing_config(result)
            if result.skipped:
                self.log(f"[dim]  Skipped {self.display_name} setup[/dim]")
                return result

        copy_path(self.template_path, self.rules_path, replace=True, fs=self.fs)
        self.log(f"[green]  ✓ Copied {RULES_FILENAME}[/green]")

        if not self.fs.exists(self.local_path):
            write_file(self.local_path, _LOCAL_SEED, self.fs)
            self.log(f"[green]  ✓ Created {self.local_path.name} for custom rules[/green]")

        self.log(f"[green]  ✓ {self.display_name} configuration set up[/green]")
        return result

    def handle_existing_config(self, result: ProviderResult) -> None:
        self.log(f"[yellow]\n  ⚠ Existing {self.display_name} configuration detected[/yellow]")
        action = self.choose_action(RULES_FILENAME)
        result.action = action

        if action is MigrationAction.SKIP:
            result.skipped = True
        elif action is MigrationAction.REPLACE:
            remove_single_file_config(self.rules_path, fs=self.fs, log=self.log)
        else:
            migrate_single_file_config(
                self.rules_path, self.project_root, action, fs=self.fs, log=self.log
            )
