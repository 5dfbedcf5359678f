"""Per-project defaults read from ``.ai-dotfiles.yml``.

Example::

    language: python
    tools: [claude, cursor]
    codex_guide: true
    migration:
      default_action: migrate-preserve

Every key is optional. The file only supplies defaults: command-line flags
and interactive answers take precedence.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import yaml

from ai_dotfiles.language import LANGUAGES
from ai_dotfiles.migration import MigrationAction

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".ai-dotfiles.yml"

# Provider keys in the order they are offered and set up.
KNOWN_TOOLS: tuple[str, ...] = ("claude", "gemini", "cursor", "kilo", "roo")

# Tools configured by ``--yes`` when the config file names none.
DEFAULT_TOOLS: tuple[str, ...] = ("claude",)

# Language used by ``--yes`` when detection finds nothing.
FALLBACK_LANGUAGE = "typescript"


@dataclass
class DotfilesConfig:
    """Defaults for setup/update runs."""

    language: str | None = None
    tools: list[str] | None = None
    codex_guide: bool = True
    default_action: MigrationAction = MigrationAction.REPLACE


def _parse_tools(value: Any) -> list[str] | None:
    if not isinstance(value, list):
        if value is not None:
            logger.warning("Ignoring non-list 'tools' in %s", CONFIG_FILENAME)
        return None
    tools: list[str] = []
    for item in value:
        name = str(item).strip().lower()
        if name not in KNOWN_TOOLS:
            logger.warning("Ignoring unknown tool %r in %s", item, CONFIG_FILENAME)
            continue
        if name not in tools:
            tools.append(name)
    return tools


def load_config(project_root: Path) -> DotfilesConfig:
    """Load ``.ai-dotfiles.yml`` from *project_root*.

    Falls back to defaults for a missing file, a malformed file, or
    individual invalid keys.
    """
    config_path = project_root / CONFIG_FILENAME
    if not config_path.is_file():
        return DotfilesConfig()

    try:
        with config_path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError):
        logger.warning("Failed to read %s, using defaults", config_path)
        return DotfilesConfig()

    if not isinstance(data, dict):
        return DotfilesConfig()

    config = DotfilesConfig()

    language = data.get("language")
    if isinstance(language, str) and language.lower() in LANGUAGES:
        config.language = language.lower()
    elif language is not None:
        logger.warning("Ignoring unsupported language %r in %s", language, CONFIG_FILENAME)

    config.tools = _parse_tools(data.get("tools"))

    codex_guide = data.get("codex_guide")
    if isinstance(codex_guide, bool):
        config.codex_guide = codex_guide

    migration = data.get("migration")
    if isinstance(migration, dict) and "default_action" in migration:
        try:
            config.default_action = MigrationAction.parse(str(migration["default_action"]))
        except ValueError as exc:
            logger.warning("%s in %s, using 'replace'", exc, CONFIG_FILENAME)

    return config
