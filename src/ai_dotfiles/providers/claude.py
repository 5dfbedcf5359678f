"""Claude Code provider."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ai_dotfiles.filesystem import ensure_directory
from ai_dotfiles.providers.base import BaseProvider
from ai_dotfiles.templates import copy_path, has_entries

if TYPE_CHECKING:
    from pathlib import Path


class ClaudeProvider(BaseProvider):
    def __init__(self, project_root: Path, templates_dir: Path, **options: Any) -> None:
        super().__init__("claude", "Claude Code", project_root, templates_dir, **options)

    @property
    def global_commands_dir(self) -> Path:
        return self.home_dir / ".claude" / "commands"

    def setup_commands(self) -> None:
        """Slash commands are global: install them under ``~/.claude/commands``."""
        template_commands = self.template_dir / "commands"
        if not has_entries(template_commands, self.fs):
            return

        ensure_directory(self.global_commands_dir, self.fs)
        self.log("[green]  ✓ Created global ~/.claude/commands directory[/green]")

        for name in self.fs.read_dir(template_commands):
            if not name.endswith(".md"):
                continue
            source = template_commands / name
            dest = self.global_commands_dir / name
            if self.fs.exists(dest) and self.fs.read_text(source) == self.fs.read_text(dest):
                continue
            self.fs.copy_file(source, dest)
            self.log(f"[green]  ✓ Copied {name} to global commands[/green]")

        self.log("[blue]  ℹ Commands available globally in all projects[/blue]")

    def setup_settings(self) -> None:
        self.copy_settings_with_confirmation("settings.json")

    def setup_additional(self) -> None:
        template_workflows = self.template_dir / "workflows"
        if has_entries(template_workflows, self.fs):
            copy_path(template_workflows, self.config_dir / "workflows", replace=True, fs=self.fs)
            self.log("[green]  ✓ Copied workflows directory[/green]")
