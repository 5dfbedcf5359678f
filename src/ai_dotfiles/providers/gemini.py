"""Gemini CLI provider."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ai_dotfiles.providers.base import BaseProvider
from ai_dotfiles.templates import copy_path, has_entries

if TYPE_CHECKING:
    from pathlib import Path


class GeminiProvider(BaseProvider):
    def __init__(self, project_root: Path, templates_dir: Path, **options: Any) -> None:
        super().__init__("gemini", "Gemini CLI", project_root, templates_dir, **options)

    def setup_commands(self) -> None:
        """Gemini commands are project-specific and live in ``.gemini/commands``."""
        template_commands = self.template_dir / "commands"
        if has_entries(template_commands, self.fs):
            copy_path(template_commands, self.config_dir / "commands", replace=True, fs=self.fs)
            self.log("[green]  ✓ Copied commands directory[/green]")

    def setup_settings(self) -> None:
        self.copy_file_from_template("settings.json")
        self.copy_file_from_template("tool-policy.json")
