"""Providers whose setup is a single managed ``config.json``."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ai_dotfiles.providers.base import BaseProvider

if TYPE_CHECKING:
    from pathlib import Path


class KiloProvider(BaseProvider):
    """Kilo Code: ``.kilocode/config.json``."""

    def __init__(self, project_root: Path, templates_dir: Path, **options: Any) -> None:
        super().__init__("kilocode", "Kilo Code", project_root, templates_dir, **options)

    def setup_settings(self) -> None:
        self.copy_file_from_template("config.json")


class RooProvider(BaseProvider):
    """Roo Code: ``.roo/config.json``."""

    def __init__(self, project_root: Path, templates_dir: Path, **options: Any) -> None:
        super().__init__("roo", "Roo Code", project_root, templates_dir, **options)

    def setup_settings(self) -> None:
        self.copy_file_from_template("config.json")
