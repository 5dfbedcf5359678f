"""Setup and update workflows.

Both commands run the same sequence; ``update`` only changes the wording
of the summary. Existing provider configuration is handled through the
migration actions before fresh templates are copied.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ai_dotfiles.config import DEFAULT_TOOLS, FALLBACK_LANGUAGE, DotfilesConfig, load_config
from ai_dotfiles.filesystem import default_fs
from ai_dotfiles.language import detect_language
from ai_dotfiles.prompts import confirm_language, default_action_chooser, select_language, select_tools
from ai_dotfiles.providers import setup_tool
from ai_dotfiles.reporting import resolve_log
from ai_dotfiles.templates import get_templates_dir
from ai_dotfiles.workspace import setup_centralized_rules, setup_codex_context, setup_dev_folder

if TYPE_CHECKING:
    from pathlib import Path

    from ai_dotfiles.filesystem import FileSystem
    from ai_dotfiles.providers import ProviderResult
    from ai_dotfiles.reporting import Log

logger = logging.getLogger(__name__)

TYPESCRIPT_CONFIG_FILES = (
    "tsconfig.json",
    "tsconfig.test.json",
    "tsconfig.eslint.json",
    ".eslintrc.json",
)

_TOOL_LABELS: dict[str, str] = {
    "claude": "Claude Code",
    "gemini": "Gemini CLI",
    "cursor": "Cursor",
    "kilo": "Kilo Code",
    "roo": "Roo Code",
}


@dataclass
class SetupSummary:
    """Outcome of a setup/update run."""

    language: str
    tools: list[str]
    results: list[ProviderResult] = field(default_factory=list)


def detect_and_confirm_language(
    project_root: Path,
    *,
    auto_yes: bool = False,
    configured: str | None = None,
    fs: FileSystem | None = None,
    log: Log | None = None,
) -> str:
    """Pick the project language.

    A language from ``.ai-dotfiles.yml`` is used as-is. Otherwise the
    detected one is confirmed (or accepted under ``--yes``); with nothing
    detected the user chooses, and ``--yes`` falls back to TypeScript.
    """
    log = resolve_log(log)
    if configured:
        log(f"[dim]Using configured language: {configured}\n[/dim]")
        return configured

    detected = detect_language(project_root, fs)
    language: str | None = None

    if detected:
        log(f"[dim]Detected language: {detected}\n[/dim]")
        if auto_yes:
            log(f"[dim]Using detected language: {detected}\n[/dim]")
            language = detected
        elif confirm_language(detected):
            language = detected

    if language is None:
        if auto_yes:
            log("[dim]No language detected, defaulting to TypeScript\n[/dim]")
            language = FALLBACK_LANGUAGE
        else:
            language = select_language()

    return language


def select_ai_tools(
    *,
    auto_yes: bool = False,
    configured: list[str] | None = None,
    log: Log | None = None,
) -> list[str]:
    log = resolve_log(log)
    if configured is not None:
        tools = list(configured)
        log(f"[dim]Using configured tools: {', '.join(tools) or 'none'}\n[/dim]")
        return tools

    if auto_yes:
        log("[dim]Defaulting to Claude Code\n[/dim]")
        return list(DEFAULT_TOOLS)

    tools = select_tools()
    if tools:
        log(f"[dim]\n  → Selected: {', '.join(tools)}[/dim]")
    else:
        log("[dim]\n  → No provider folders selected[/dim]")
    return tools


def _next_backup_path(dest: Path, fs: FileSystem) -> Path:
    """``<name>.bak``, then ``<name>.bak1``, ``<name>.bak2``, ..."""
    candidate = dest.with_name(f"{dest.name}.bak")
    number = 1
    while fs.exists(candidate):
        candidate = dest.with_name(f"{dest.name}.bak{number}")
        number += 1
    return candidate


def setup_typescript_config(
    project_root: Path,
    *,
    templates_dir: Path | None = None,
    fs: FileSystem | None = None,
    log: Log | None = None,
) -> list[Path]:
    """Install strict TypeScript/ESLint configs, backing up existing ones.

    Returns the backup paths that were written.
    """
    fs = fs or default_fs()
    log = resolve_log(log)
    source_dir = (templates_dir or get_templates_dir()) / "languages" / "typescript"
    backups: list[Path] = []

    log("[blue]\n📦 Setting up TypeScript configuration files...[/blue]")

    for name in TYPESCRIPT_CONFIG_FILES:
        source = source_dir / name
        dest = project_root / name

        if not fs.exists(source):
            log(f"[yellow]  ⚠ Template file {name} not found, skipping[/yellow]")
            continue

        if fs.exists(dest):
            backup = _next_backup_path(dest, fs)
            fs.copy_file(dest, backup)
            backups.append(backup)
            log(f"[yellow]  ⚠ Backed up existing {name} to {backup.name}[/yellow]")

        fs.copy_file(source, dest)
        log(f"[green]  ✓ Created {name}[/green]")

    log("[blue]  ℹ TypeScript configuration files provide strict type checking and linting[/blue]")
    return backups


def print_next_steps(
    tools: list[str],
    language: str,
    *,
    is_update: bool = False,
    log: Log | None = None,
) -> None:
    log = resolve_log(log)
    tool_summary = ", ".join(_TOOL_LABELS.get(t, t) for t in tools) or "none (Codex only)"

    if is_update:
        log("[bold]✨ Configuration Updated:\n[/bold]")
        log(f"[dim]Language: {language}[/dim]")
        log(f"[dim]Updated tools: {tool_summary}\n[/dim]")
        if not tools:
            log("[dim]No provider folders selected: Codex will load .dev context only.\n[/dim]")
        log("[green]Your AI coding assistants now have the latest templates and rules!\n[/green]")
        return

    log("[bold]📋 Next Steps:\n[/bold]")
    log(f"[dim]Language: {language}[/dim]")
    log(f"[dim]Configured tools: {tool_summary}\n[/dim]")

    if not tools:
        log("Codex (no provider folders):")
        log("[dim]  • .dev workspace copied for Codex session bootstrap\n[/dim]")
    if "claude" in tools:
        log("Claude Code:")
        log("[dim]  • Rules loaded from centralized .dev/rules/ (.local/ holds your custom rules)[/dim]")
        log("[dim]  • Commands are available as slash commands[/dim]")
        log("[dim]  • Session hooks: load .dev context and rules on session start\n[/dim]")
    if "gemini" in tools:
        log("Gemini CLI:")
        log("[dim]  • Session hooks: load rules on start, record completed todos on end[/dim]")
        log("[dim]  • Tool policy: tool-policy.json guides tool use\n[/dim]")
    if "cursor" in tools:
        log("Cursor:")
        log("[dim]  • Customize: edit .cursorrules.local\n[/dim]")

    if language == "typescript":
        log("[blue]💡 TypeScript configuration files added (existing ones backed up as .bak)[/blue]")
    log("[blue]💡 Run \"ai-dotfiles-manager update\" to get the latest templates[/blue]")


def execute_setup(
    project_root: Path,
    *,
    auto_yes: bool = False,
    codex_guide: bool | None = None,
    is_update: bool = False,
    config: DotfilesConfig | None = None,
    templates_dir: Path | None = None,
    home_dir: Path | None = None,
    fs: FileSystem | None = None,
    log: Log | None = None,
) -> SetupSummary:
    """Run the full setup workflow against *project_root*.

    Providers run one at a time in selection order. An exception from any
    of them aborts the run; providers already processed keep their changes.
    """
    fs = fs or default_fs()
    log = resolve_log(log)
    config = config or load_config(project_root)
    templates_dir = templates_dir or get_templates_dir()
    if codex_guide is None:
        codex_guide = config.codex_guide

    log("[bold blue]\n🤖 AI Dotfiles Manager Setup\n[/bold blue]")
    if auto_yes:
        log("[dim]Running in non-interactive mode (--yes flag)\n[/dim]")

    language = detect_and_confirm_language(
        project_root, auto_yes=auto_yes, configured=config.language, fs=fs, log=log
    )
    tools = select_ai_tools(auto_yes=auto_yes, configured=config.tools, log=log)
    summary = SetupSummary(language=language, tools=tools)

    log("[dim]Setting up with copied templates (customize via .local directories)...\n[/dim]")

    choose_action = default_action_chooser(config.default_action) if auto_yes else None
    for tool in tools:
        logger.debug("Setting up provider %s", tool)
        result = setup_tool(
            tool,
            project_root,
            templates_dir,
            auto_yes=auto_yes,
            choose_action=choose_action,
            fs=fs,
            log=log,
            home_dir=home_dir,
        )
        summary.results.append(result)

    setup_dev_folder(
        project_root, language, is_update=is_update, templates_dir=templates_dir, fs=fs, log=log
    )
    setup_centralized_rules(
        project_root, language, is_update=is_update, templates_dir=templates_dir, fs=fs, log=log
    )

    if codex_guide:
        setup_codex_context(project_root, language, templates_dir=templates_dir, fs=fs, log=log)

    if language == "typescript":
        setup_typescript_config(project_root, templates_dir=templates_dir, fs=fs, log=log)

    log("[bold green]\n✅ Setup complete!\n[/bold green]")
    print_next_steps(tools, language, is_update=is_update, log=log)
    return summary


def execute_update(project_root: Path, **options: object) -> SetupSummary:
    """Same flow as setup; existing configs go through the migration actions."""
    return execute_setup(project_root, is_update=True, **options)  # type: ignore[arg-type]
