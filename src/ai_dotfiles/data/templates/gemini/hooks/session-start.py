#!/usr/bin/env python3
"""Gemini CLI session-start hook.

Prints the project context (architecture, todo, rules) in the order given by
``.dev/codex-manifest.json``, so local overrides come last and win. Records
the todo list so the session-end hook can report completed tasks.
"""

from __future__ import annotations

import json
import sys
from datetime import datetime, timezone
from pathlib import Path

PROJECT_ROOT = Path.cwd()
DEV_DIR = PROJECT_ROOT / ".dev"
RULES_DIR = DEV_DIR / "rules"
MANIFEST_PATH = DEV_DIR / "codex-manifest.json"
TODO_PATH = DEV_DIR / "todo.md"
SESSION_STATE_PATH = DEV_DIR / ".session-state.json"
TOOL = "Gemini CLI"


def manifest_files() -> list[str]:
    """Files to load, in manifest order; falls back to scanning ``.dev/rules``."""
    try:
        manifest = json.loads(MANIFEST_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        manifest = None
    if isinstance(manifest, dict) and isinstance(manifest.get("load"), list):
        return [str(p) for p in manifest["load"]]

    files = [".dev/architecture.md", ".dev/todo.md"]
    rule_dirs = ["shared"]
    rule_dirs += sorted(
        d.name for d in RULES_DIR.iterdir() if d.is_dir() and d.name not in ("shared", ".local")
    )
    rule_dirs.append(".local")
    for name in rule_dirs:
        directory = RULES_DIR / name
        if directory.is_dir():
            files += sorted(f".dev/rules/{name}/{p.name}" for p in directory.glob("*.md"))
    return files


def save_session_state() -> None:
    if not TODO_PATH.is_file():
        return
    state = {
        "todoContent": TODO_PATH.read_text(encoding="utf-8"),
        "startTime": datetime.now(timezone.utc).isoformat(),
    }
    try:
        SESSION_STATE_PATH.write_text(json.dumps(state, indent=2), encoding="utf-8")
    except OSError:
        print("Warning: failed to save session state", file=sys.stderr)


def main() -> int:
    if not RULES_DIR.is_dir():
        print('Rules directory not found. Run "ai-dotfiles-manager setup" first.', file=sys.stderr)
        return 1

    loaded = 0
    for rel in manifest_files():
        path = PROJECT_ROOT / rel
        if not path.is_file() or path.name == "README.md":
            continue
        print(f"<!-- {rel} -->")
        print(path.read_text(encoding="utf-8").rstrip())
        print()
        loaded += 1

    save_session_state()
    print(f"<!-- {TOOL}: loaded {loaded} context files from .dev/ -->")
    return 0


if __name__ == "__main__":
    sys.exit(main())
