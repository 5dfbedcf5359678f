"""ai-dotfiles-manager CLI entry point."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable

import click

from ai_dotfiles import __version__
from ai_dotfiles.language import LANGUAGES
from ai_dotfiles.reporting import set_quiet

if TYPE_CHECKING:
    from ai_dotfiles.doctor import Check


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="ai-dotfiles-manager")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output (debug logging).")
@click.option("--quiet", "-q", is_flag=True, help="Minimal output (errors and prompts only).")
@click.pass_context
def main(ctx: click.Context, *, verbose: bool, quiet: bool) -> None:
    """AI Dotfiles Manager - scaffold rules and configs for AI coding assistants.

    Runs `setup` when no command is given.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    set_quiet(quiet)

    if ctx.invoked_subcommand is None:
        ctx.invoke(setup)


_RUN_OPTIONS = (
    click.option("--yes", "-y", "auto_yes", is_flag=True, help="Accept all defaults, skip prompts."),
    click.option(
        "--no-codex-guide",
        is_flag=True,
        default=False,
        help="Skip the Codex manifest/index and the AGENTS.md guide block.",
    ),
    click.option(
        "--project",
        type=click.Path(exists=True, file_okay=False, path_type=Path),
        default=None,
        help="Project root (default: current directory).",
    ),
    click.option(
        "--templates",
        "templates_dir",
        type=click.Path(exists=True, file_okay=False, path_type=Path),
        default=None,
        hidden=True,
        help="Alternative templates directory.",
    ),
)


def _run_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Options shared by `setup` and `update`."""
    for option in reversed(_RUN_OPTIONS):
        func = option(func)
    return func


def _run(
    command: str,
    *,
    auto_yes: bool,
    no_codex_guide: bool,
    project: Path | None,
    templates_dir: Path | None,
) -> None:
    from ai_dotfiles.commands import execute_setup

    project_root = project or Path.cwd()
    try:
        execute_setup(
            project_root,
            auto_yes=auto_yes,
            codex_guide=False if no_codex_guide else None,
            is_update=command == "update",
            templates_dir=templates_dir,
        )
    except (OSError, ValueError) as exc:
        click.echo(f"Error during {command}: {exc}", err=True)
        sys.exit(1)
    except (EOFError, KeyboardInterrupt):
        # Closed stdin or Ctrl-C while a prompt was waiting for input.
        click.echo(f"Error during {command}: input aborted", err=True)
        sys.exit(1)


@main.command()
@_run_options
def setup(
    *,
    auto_yes: bool,
    no_codex_guide: bool,
    project: Path | None,
    templates_dir: Path | None,
) -> None:
    """Set up AI configuration in a project (default command).

    Existing provider configuration can be replaced, migrated into
    `.local` overrides, or skipped.
    """
    _run(
        "setup",
        auto_yes=auto_yes,
        no_codex_guide=no_codex_guide,
        project=project,
        templates_dir=templates_dir,
    )


main.add_command(setup, name="init")


@main.command()
@_run_options
def update(
    *,
    auto_yes: bool,
    no_codex_guide: bool,
    project: Path | None,
    templates_dir: Path | None,
) -> None:
    """Refresh an existing setup with the latest templates."""
    _run(
        "update",
        auto_yes=auto_yes,
        no_codex_guide=no_codex_guide,
        project=project,
        templates_dir=templates_dir,
    )


_PROJECT_OPTION = click.option(
    "--project",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Project root (default: current directory).",
)


def _echo_checks(checks: list[Check]) -> None:
    from ai_dotfiles.doctor import Severity

    icons = {
        Severity.OK: "[ok]",
        Severity.INFO: "[info]",
        Severity.WARNING: "[warn]",
        Severity.ERROR: "[ERR]",
    }
    for check in checks:
        click.echo(f"  {icons.get(check.severity, '[?]')} {check.description}")


@main.command()
@_PROJECT_OPTION
def doctor(*, project: Path | None) -> None:
    """Report the state of the Codex manifest, context index and AGENTS.md block."""
    from ai_dotfiles.doctor import check_codex_context

    project_root = project or Path.cwd()
    click.echo("Codex Doctor")
    try:
        checks = check_codex_context(project_root)
    except OSError as exc:
        click.echo(f"Error during doctor: {exc}", err=True)
        sys.exit(1)
    _echo_checks(checks)


@main.command()
@_PROJECT_OPTION
@click.option(
    "--language",
    type=click.Choice(LANGUAGES),
    default=None,
    help="Language rules to verify (default: configured or detected).",
)
@click.option(
    "--templates",
    "templates_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    hidden=True,
    help="Alternative templates directory.",
)
def verify(*, project: Path | None, language: str | None, templates_dir: Path | None) -> None:
    """Fail (exit 1) if the Codex manifest is broken or managed rules drifted.

    Managed copies in `.dev/rules/shared` and `.dev/rules/<language>` must
    match the packaged templates; customizations belong in `.dev/rules/.local`.
    """
    from ai_dotfiles.config import FALLBACK_LANGUAGE, load_config
    from ai_dotfiles.doctor import Severity, has_errors, verify_managed_copies, verify_manifest
    from ai_dotfiles.language import detect_language

    project_root = project or Path.cwd()
    language = (
        language
        or load_config(project_root).language
        or detect_language(project_root)
        or FALLBACK_LANGUAGE
    )

    try:
        checks = verify_manifest(project_root)
        checks += verify_managed_copies(project_root, language, templates_dir=templates_dir)
    except OSError as exc:
        click.echo(f"Error during verify: {exc}", err=True)
        sys.exit(1)

    _echo_checks(checks)
    if has_errors(checks):
        failures = sum(1 for c in checks if c.severity is Severity.ERROR)
        click.echo(f"Verification failed: {failures} problem(s).", err=True)
        sys.exit(1)
    click.echo("Verification passed.")
