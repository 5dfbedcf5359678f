"""Doctor: checks for the Codex context and the managed rule copies.

``check_codex_context`` backs the informational ``doctor`` command.
``verify_manifest`` and ``verify_managed_copies`` back ``verify``, which
fails on any ERROR and is meant for CI.
"""

from __future__ import annotations

import enum
import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ai_dotfiles.filesystem import default_fs
from ai_dotfiles.templates import DEV_DIR_NAME, get_templates_dir, rules_language_dir
from ai_dotfiles.workspace import CONTEXT_INDEX_FILENAME, MANIFEST_FILENAME, find_guide_block

if TYPE_CHECKING:
    from pathlib import Path

    from ai_dotfiles.filesystem import FileSystem

logger = logging.getLogger(__name__)

# Manifest entries listed by ``doctor``.
_MAX_LISTED_ENTRIES = 10


class Severity(enum.Enum):
    """Severity level for a check result."""

    OK = "ok"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class Check:
    """Result of a single check."""

    name: str
    severity: Severity
    description: str


def has_errors(checks: list[Check]) -> bool:
    return any(check.severity is Severity.ERROR for check in checks)


def _load_manifest(project_root: Path, fs: FileSystem) -> tuple[Any, Check | None]:
    """Parse the manifest; on failure return an ERROR/WARNING check instead."""
    path = project_root / DEV_DIR_NAME / MANIFEST_FILENAME
    if not fs.exists(path):
        missing = f"Manifest missing ({DEV_DIR_NAME}/{MANIFEST_FILENAME})."
        return None, Check("manifest", Severity.WARNING, missing)
    try:
        return json.loads(fs.read_text(path)), None
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.debug("Cannot parse %s: %s", path, exc)
        return None, Check("manifest", Severity.ERROR, f"Manifest is not valid JSON: {exc}")


def _load_entries(manifest: Any) -> list[str] | None:
    if not isinstance(manifest, dict) or not isinstance(manifest.get("load"), list):
        return None
    return [str(entry) for entry in manifest["load"]]


def check_codex_context(project_root: Path, fs: FileSystem | None = None) -> list[Check]:
    """Report which Codex artifacts are present: manifest, index, AGENTS.md block."""
    fs = fs or default_fs()
    checks: list[Check] = []

    manifest, problem = _load_manifest(project_root, fs)
    if problem is not None:
        checks.append(problem)
    else:
        entries = _load_entries(manifest) or []
        checks.append(
            Check("manifest", Severity.OK, f"Manifest found ({len(entries)} load entries).")
        )
        checks.extend(
            Check("manifest_entry", Severity.INFO, entry)
            for entry in entries[:_MAX_LISTED_ENTRIES]
        )

    if fs.exists(project_root / DEV_DIR_NAME / CONTEXT_INDEX_FILENAME):
        checks.append(Check("index", Severity.OK, "Context index found."))
    else:
        checks.append(Check("index", Severity.WARNING, "Context index missing."))

    agents_path = project_root / "AGENTS.md"
    if not fs.exists(agents_path):
        checks.append(Check("agents", Severity.WARNING, "AGENTS.md missing."))
    elif find_guide_block(fs.read_text(agents_path)) is None:
        checks.append(Check("agents", Severity.WARNING, "AGENTS.md has no managed Codex block."))
    else:
        checks.append(Check("agents", Severity.OK, "AGENTS.md managed Codex block present."))

    return checks


def verify_manifest(project_root: Path, fs: FileSystem | None = None) -> list[Check]:
    """The manifest exists, parses, has a non-empty ``load`` list, and every entry exists."""
    fs = fs or default_fs()
    manifest, problem = _load_manifest(project_root, fs)
    if problem is not None:
        return [Check(problem.name, Severity.ERROR, problem.description)]

    entries = _load_entries(manifest)
    if not entries:
        return [Check("manifest", Severity.ERROR, 'Manifest has an empty or missing "load" list.')]

    missing = [entry for entry in entries if not fs.exists(project_root / entry)]
    if missing:
        return [
            Check("manifest", Severity.ERROR, f"Manifest references missing file: {entry}")
            for entry in missing
        ]
    return [Check("manifest", Severity.OK, f"Manifest valid ({len(entries)} load entries).")]


def _tree_files(root: Path, fs: FileSystem, prefix: str = "") -> dict[str, str]:
    """Map POSIX paths relative to *root* to file contents."""
    files: dict[str, str] = {}
    for name in fs.read_dir(root):
        path = root / name
        rel = f"{prefix}{name}"
        if fs.is_dir(path):
            files.update(_tree_files(path, fs, f"{rel}/"))
        else:
            files[rel] = fs.read_text(path)
    return files


def _compare_copy(label: str, source: Path, dest: Path, fs: FileSystem) -> list[Check]:
    rel_dest = f"{DEV_DIR_NAME}/rules/{label}"
    if not fs.is_dir(dest):
        return [Check("managed_copy", Severity.ERROR, f"{label} rules missing ({rel_dest}).")]

    expected = _tree_files(source, fs)
    actual = _tree_files(dest, fs)

    checks = [
        Check("managed_copy", Severity.ERROR, f"Drift in {rel_dest}: missing {name}")
        for name in sorted(expected.keys() - actual.keys())
    ]
    checks.extend(
        Check("managed_copy", Severity.ERROR, f"Drift in {rel_dest}: unexpected {name}")
        for name in sorted(actual.keys() - expected.keys())
    )
    checks.extend(
        Check("managed_copy", Severity.ERROR, f"Drift in {rel_dest}: modified {name}")
        for name in sorted(expected.keys() & actual.keys())
        if expected[name] != actual[name]
    )
    if not checks:
        checks.append(
            Check("managed_copy", Severity.OK, f"{rel_dest} matches the packaged templates.")
        )
    return checks


def verify_managed_copies(
    project_root: Path,
    language: str,
    *,
    templates_dir: Path | None = None,
    fs: FileSystem | None = None,
) -> list[Check]:
    """Compare ``.dev/rules/shared`` and ``.dev/rules/<lang>`` with the templates.

    Any missing, extra, or edited file is drift. Customizations belong in
    ``.dev/rules/.local``, which must exist.
    """
    fs = fs or default_fs()
    templates_dir = templates_dir or get_templates_dir()
    rules_dir = project_root / DEV_DIR_NAME / "rules"
    lang_dir = rules_language_dir(language)

    checks: list[Check] = []
    for label, source in (
        ("shared", templates_dir / "shared" / "rules"),
        (lang_dir, templates_dir / "languages" / lang_dir / "rules"),
    ):
        if not fs.is_dir(source):
            checks.append(Check("managed_copy", Severity.INFO, f"No {label} rules template."))
            continue
        checks.extend(_compare_copy(label, source, rules_dir / label, fs))

    if fs.is_dir(rules_dir / ".local"):
        checks.append(Check("local_dir", Severity.OK, f"{DEV_DIR_NAME}/rules/.local present."))
    else:
        checks.append(Check("local_dir", Severity.ERROR, f"{DEV_DIR_NAME}/rules/.local missing."))
    return checks
