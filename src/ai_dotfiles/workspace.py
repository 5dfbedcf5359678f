"""The ``.dev/`` developer workspace, centralized rules, and Codex context."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from ai_dotfiles.architecture import generate_architecture_doc
from ai_dotfiles.filesystem import default_fs, ensure_directory, write_file
from ai_dotfiles.reporting import resolve_log
from ai_dotfiles.templates import (
    DEV_DIR_NAME,
    TOOL_NAME,
    RuleFiles,
    copy_path,
    discover_rule_files,
    generate_centralized_rules_readme,
    generate_codex_manifest,
    generate_context_index,
    generate_dev_readme,
    generate_local_rules_readme,
    generate_todo_template,
    get_templates_dir,
    rules_language_dir,
)

if TYPE_CHECKING:
    from pathlib import Path

    from ai_dotfiles.filesystem import FileSystem
    from ai_dotfiles.reporting import Log

logger = logging.getLogger(__name__)

GUIDE_START_MARKER = f"<!-- {TOOL_NAME}:codex-guide:start -->"
GUIDE_END_MARKER = f"<!-- {TOOL_NAME}:codex-guide:end -->"

MANIFEST_FILENAME = "codex-manifest.json"
CONTEXT_INDEX_FILENAME = "context-index.md"


def setup_dev_folder(
    project_root: Path,
    language: str,
    *,
    is_update: bool = False,
    templates_dir: Path | None = None,
    fs: FileSystem | None = None,
    log: Log | None = None,
) -> None:
    """Create or refresh ``.dev/``.

    ``architecture.md``, ``DESIGNcode.md`` and ``lint/`` guides are
    regenerated every run; ``feature.md``, ``todo.md`` and ``README.md``
    are only seeded when missing.
    """
    fs = fs or default_fs()
    log = resolve_log(log)
    dev_dir = project_root / DEV_DIR_NAME
    dev_templates = (templates_dir or get_templates_dir()) / "dev"

    log("[blue]\n📦 Setting up .dev folder...[/blue]")

    created = not fs.exists(dev_dir)
    ensure_directory(dev_dir, fs)
    if created and not is_update:
        log("[green]  ✓ Created .dev/ directory[/green]")

    sections: list[str] = []
    arch_template = dev_templates / "architecture.md"
    if fs.exists(arch_template):
        template_content = fs.read_text(arch_template).strip()
        if template_content:
            sections.append(template_content)
    generated = generate_architecture_doc(project_root, language, fs).strip()
    if generated:
        sections.append(generated)
    content = "\n\n---\n\n".join(sections)
    write_file(dev_dir / "architecture.md", f"{content}\n" if content else "", fs)
    if len(sections) > 1:
        log("[green]  ✓ Synced architecture.md template with auto-generated overview[/green]")
    else:
        log("[green]  ✓ Generated architecture.md[/green]")

    feature_template = dev_templates / "feature.md"
    feature_path = dev_dir / "feature.md"
    if fs.exists(feature_template):
        if not fs.exists(feature_path):
            fs.copy_file(feature_template, feature_path)
            log("[green]  ✓ Created feature.md from template[/green]")
        else:
            log("[dim]  • Preserved existing feature.md[/dim]")

    todo_path = dev_dir / "todo.md"
    if not fs.exists(todo_path):
        write_file(todo_path, generate_todo_template(), fs)
        log("[green]  ✓ Created todo.md[/green]")
    else:
        log("[dim]  • Preserved existing todo.md[/dim]")

    readme_path = dev_dir / "README.md"
    if not fs.exists(readme_path):
        write_file(readme_path, generate_dev_readme(), fs)
        log("[green]  ✓ Created README.md[/green]")

    design_template = dev_templates / "DESIGNcode.md"
    if fs.exists(design_template):
        fs.copy_file(design_template, dev_dir / "DESIGNcode.md")
        log("[green]  ✓ Synced DESIGNcode.md Codex bootstrap[/green]")

    lint_templates = dev_templates / "lint"
    if fs.is_dir(lint_templates):
        lint_dir = dev_dir / "lint"
        ensure_directory(lint_dir, fs)
        lint_files = [n for n in fs.read_dir(lint_templates) if n.lower().endswith(".md")]
        for name in lint_files:
            fs.copy_file(lint_templates / name, lint_dir / name)
        if lint_files:
            log("[green]  ✓ Synced lint guides into .dev/lint/[/green]")

    log("[blue]  ℹ .dev/ is auto-loaded into AI context on every session[/blue]")


def setup_centralized_rules(
    project_root: Path,
    language: str,
    *,
    is_update: bool = False,
    templates_dir: Path | None = None,
    fs: FileSystem | None = None,
    log: Log | None = None,
) -> None:
    """Populate ``.dev/rules/`` with managed copies and the ``.local/`` overrides dir."""
    fs = fs or default_fs()
    log = resolve_log(log)
    templates_dir = templates_dir or get_templates_dir()
    rules_dir = project_root / DEV_DIR_NAME / "rules"

    log("[blue]\n📦 Setting up centralized rules...[/blue]")

    created = not fs.exists(rules_dir)
    ensure_directory(rules_dir, fs)
    if created and not is_update:
        log("[green]  ✓ Created .dev/rules/ directory[/green]")

    shared_source = templates_dir / "shared" / "rules"
    if fs.is_dir(shared_source):
        copy_path(shared_source, rules_dir / "shared", replace=True, fs=fs)
        log("[green]  ✓ Copied shared rules[/green]")
    else:
        logger.warning("Shared rules template missing: %s", shared_source)

    lang_dir = rules_language_dir(language)
    language_source = templates_dir / "languages" / lang_dir / "rules"
    if fs.is_dir(language_source):
        copy_path(language_source, rules_dir / lang_dir, replace=True, fs=fs)
        log(f"[green]  ✓ Copied {lang_dir} rules[/green]")
    else:
        log(f"[yellow]  ⚠ No {language} rules available, skipping[/yellow]")

    local_dir = rules_dir / ".local"
    if not fs.exists(local_dir):
        ensure_directory(local_dir, fs)
        log("[green]  ✓ Created .dev/rules/.local/ for custom rules[/green]")

    local_readme = local_dir / "README.md"
    if not fs.exists(local_readme):
        write_file(local_readme, generate_local_rules_readme(), fs)
        log("[green]  ✓ Created .local/README.md[/green]")

    rules_readme = rules_dir / "README.md"
    if not fs.exists(rules_readme):
        write_file(rules_readme, generate_centralized_rules_readme(), fs)
        log("[green]  ✓ Created .dev/rules/README.md[/green]")

    log("[green]  ✓ Centralized rules set up[/green]")


def write_codex_manifest_and_index(
    project_root: Path,
    language: str,
    files: RuleFiles,
    *,
    fs: FileSystem | None = None,
    log: Log | None = None,
) -> None:
    """Write ``.dev/codex-manifest.json`` and ``.dev/context-index.md``.

    A write failure is reported and skipped; it does not abort setup.
    """
    fs = fs or default_fs()
    log = resolve_log(log)
    dev_dir = project_root / DEV_DIR_NAME

    manifest = generate_codex_manifest(project_root, language, files, fs)
    index = generate_context_index(files)

    try:
        write_file(dev_dir / MANIFEST_FILENAME, json.dumps(manifest, indent=2), fs)
        write_file(dev_dir / CONTEXT_INDEX_FILENAME, index, fs)
    except OSError as exc:
        logger.warning("Cannot write Codex manifest: %s", exc)
        log(f"[yellow]  ⚠ Skipped manifest/index generation: {exc}[/yellow]")
        return
    log("[green]  ✓ Generated Codex manifest and context index[/green]")


def generate_codex_guide(language: str) -> str:
    """Render the managed Codex session guide block, markers included."""
    lang_dir = rules_language_dir(language)
    lines = [
        GUIDE_START_MARKER,
        "# Codex Session Guide",
        "",
        "On session start, load and keep the following files in working memory:",
        "",
        "- `.dev/architecture.md`",
        "- `.dev/todo.md` (if present)",
        "- `.dev/rules/shared/*.md`",
        f"- `.dev/rules/{lang_dir}/*.md` (if present)",
        "- `.dev/rules/.local/*.md` (project-specific overrides)",
        "",
        "Rules precedence: `.local` > language > shared.",
        "",
        "Assistant behavior:",
        "- Propose changes that align with loaded rules.",
        "- When generating files, mirror naming and folder conventions.",
        "- Surface any conflicts between `.local` and shared rules.",
        "",
        f"Note: This section is managed by {TOOL_NAME}. You may add content above or below; "
        "changes inside markers may be overwritten on update.",
        GUIDE_END_MARKER,
    ]
    return "\n".join(lines)


def find_guide_block(text: str) -> tuple[int, int] | None:
    """Return the ``(start, end)`` slice of the managed block, markers included.

    The block is the first end marker paired with the nearest start marker
    before it. A start marker with no end marker after it is ignored.
    """
    first_start = text.find(GUIDE_START_MARKER)
    if first_start == -1:
        return None
    end = text.find(GUIDE_END_MARKER, first_start + len(GUIDE_START_MARKER))
    if end == -1:
        return None
    start = text.rfind(GUIDE_START_MARKER, 0, end)
    return start, end + len(GUIDE_END_MARKER)


def apply_guide_block(current: str, guide_block: str) -> str:
    """Replace the managed block in *current*, or append it if absent."""
    span = find_guide_block(current)
    if span is not None:
        start, end = span
        return current[:start] + guide_block + current[end:]
    return current.rstrip() + "\n\n" + guide_block + "\n"


def setup_codex_guide(
    project_root: Path,
    language: str,
    *,
    fs: FileSystem | None = None,
    log: Log | None = None,
) -> None:
    """Insert or refresh the Codex guide block in ``AGENTS.md``."""
    fs = fs or default_fs()
    log = resolve_log(log)
    agents_path = project_root / "AGENTS.md"
    guide_block = generate_codex_guide(language)

    try:
        if fs.exists(agents_path):
            write_file(agents_path, apply_guide_block(fs.read_text(agents_path), guide_block), fs)
            log("[green]  ✓ Updated Codex session guide in AGENTS.md[/green]")
        else:
            write_file(agents_path, f"{guide_block}\n", fs)
            log("[green]  ✓ Created AGENTS.md with Codex session guide[/green]")
    except OSError as exc:
        logger.warning("Cannot update %s: %s", agents_path, exc)
        log(f"[yellow]  ⚠ Skipped Codex guide update: {exc}[/yellow]")


def ensure_agents_template(
    project_root: Path,
    *,
    templates_dir: Path | None = None,
    fs: FileSystem | None = None,
    log: Log | None = None,
) -> None:
    """Copy the default ``AGENTS.md`` into the project if it has none."""
    fs = fs or default_fs()
    log = resolve_log(log)
    template = (templates_dir or get_templates_dir()) / "AGENTS.md"
    dest = project_root / "AGENTS.md"

    if not fs.exists(template) or fs.exists(dest):
        return

    try:
        fs.copy_file(template, dest)
    except OSError as exc:
        logger.warning("Cannot copy AGENTS.md template: %s", exc)
        log(f"[yellow]  ⚠ Unable to copy AGENTS.md template: {exc}[/yellow]")
        return
    log("[green]  ✓ Copied default AGENTS.md template[/green]")


def setup_codex_context(
    project_root: Path,
    language: str,
    *,
    templates_dir: Path | None = None,
    fs: FileSystem | None = None,
    log: Log | None = None,
) -> RuleFiles:
    """AGENTS.md template, manifest/index, and guide block in one step."""
    fs = fs or default_fs()
    ensure_agents_template(project_root, templates_dir=templates_dir, fs=fs, log=log)
    files = discover_rule_files(project_root, language, fs)
    write_codex_manifest_and_index(project_root, language, files, fs=fs, log=log)
    setup_codex_guide(project_root, language, fs=fs, log=log)
    return files
