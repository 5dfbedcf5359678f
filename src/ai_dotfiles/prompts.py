"""Interactive questions and their non-interactive counterparts.

Each question that can block on user input has a pure replacement used in
``--yes`` mode, so a non-interactive run still makes every decision
explicitly.
"""

from __future__ import annotations

from typing import Callable

from rich.console import Console
from rich.prompt import Confirm, Prompt

from ai_dotfiles.config import KNOWN_TOOLS
from ai_dotfiles.language import LANGUAGES
from ai_dotfiles.migration import ACTION_CHOICES, MigrationAction

# Receives a display name (``Claude Code``, ``.cursorrules``) and returns the
# action to apply to the existing configuration.
ActionChooser = Callable[[str], MigrationAction]

_console = Console(highlight=False)

_ACTION_DESCRIPTIONS: dict[MigrationAction, str] = {
    MigrationAction.REPLACE: "Replace with new setup",
    MigrationAction.MIGRATE_SUPERSEDE: "Migrate to {local} (your files supersede shared rules)",
    MigrationAction.MIGRATE_PRESERVE: "Migrate to {local} (preserved alongside shared rules)",
    MigrationAction.SKIP: "Skip - keep existing configuration as-is",
}


def confirm_language(language: str) -> bool:
    return Confirm.ask(f"Use {language} for this project?", default=True)


def select_language() -> str:
    return Prompt.ask(
        "What language is your project?",
        choices=list(LANGUAGES),
        default=LANGUAGES[0],
    )


def parse_tool_selection(answer: str) -> list[str]:
    """Turn a comma-separated answer into provider keys.

    ``all`` selects every provider, ``none`` selects nothing (Codex only).
    Raises ``ValueError`` on unknown names.
    """
    names = [part.strip().lower() for part in answer.replace(" ", ",").split(",") if part.strip()]
    if "all" in names:
        return list(KNOWN_TOOLS)
    if "none" in names or not names:
        return []
    unknown = [n for n in names if n not in KNOWN_TOOLS]
    if unknown:
        raise ValueError(f"Unknown tool(s): {', '.join(unknown)}")
    # Keep the canonical order regardless of how they were typed.
    return [tool for tool in KNOWN_TOOLS if tool in names]


def select_tools() -> list[str]:
    """Ask which providers to configure until the answer parses."""
    options = ", ".join((*KNOWN_TOOLS, "all", "none"))
    while True:
        answer = Prompt.ask(
            f"Which AI tools would you like to configure? ({options})",
            default="all",
        )
        try:
            return parse_tool_selection(answer)
        except ValueError as exc:
            _console.print(f"[red]{exc}[/red]")


def _ask_action(question: str, local_label: str) -> MigrationAction:
    for action in MigrationAction:
        description = _ACTION_DESCRIPTIONS[action].format(local=local_label)
        _console.print(f"    [bold]{action.value}[/bold]: {description}")
    answer = Prompt.ask(question, choices=list(ACTION_CHOICES), default=MigrationAction.REPLACE.value)
    return MigrationAction(answer)


def prompt_migration_action(display_name: str) -> MigrationAction:
    """Ask how to handle an existing provider config directory."""
    return _ask_action(f"  How would you like to handle existing {display_name} files?", ".local/")


def prompt_single_file_migration_action(filename: str) -> MigrationAction:
    """Ask how to handle an existing single-file config such as ``.cursorrules``."""
    return _ask_action(
        f"  How would you like to handle existing {filename} file?",
        f"{filename}.local",
    )


def default_action_chooser(action: MigrationAction = MigrationAction.REPLACE) -> ActionChooser:
    """Return a chooser that always answers *action* without prompting."""

    def choose(_display_name: str) -> MigrationAction:
        return action

    return choose


def confirm_overwrite(filename: str) -> bool:
    return Confirm.ask(f"  {filename} already exists. Overwrite?", default=False)
