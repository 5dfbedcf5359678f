#!/usr/bin/env python3
"""Gemini CLI session-end hook.

Compares ``.dev/todo.md`` with the snapshot taken by the session-start hook,
reports tasks completed during the session, and appends them to
``.dev/.session-stats.json``.
"""

from __future__ import annotations

import json
import re
import sys
from datetime import datetime, timezone
from pathlib import Path

DEV_DIR = Path.cwd() / ".dev"
TODO_PATH = DEV_DIR / "todo.md"
SESSION_STATE_PATH = DEV_DIR / ".session-state.json"
SESSION_STATS_PATH = DEV_DIR / ".session-stats.json"

_PENDING = re.compile(r"^\s*- \[ \] (.+)$", re.MULTILINE)
_DONE = re.compile(r"^\s*- \[[xX]\] (.+)$", re.MULTILINE)


def _load_json(path: Path, default: dict) -> dict:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return default
    return data if isinstance(data, dict) else default


def completed_tasks(old_content: str, new_content: str) -> list[str]:
    """Tasks pending at session start and checked off now."""
    done = {task.strip() for task in _DONE.findall(new_content)}
    return [task.strip() for task in _PENDING.findall(old_content) if task.strip() in done]


def main() -> int:
    if not TODO_PATH.is_file():
        return 0

    state = _load_json(SESSION_STATE_PATH, {})
    completed = completed_tasks(state.get("todoContent", ""), TODO_PATH.read_text(encoding="utf-8"))

    if completed:
        print(f"Completed {len(completed)} task(s) this session:")
        for task in completed:
            print(f"  - {task}")
    else:
        print("No todo items completed this session.")

    stats = _load_json(SESSION_STATS_PATH, {"sessions": []})
    stats.setdefault("sessions", []).append(
        {
            "start": state.get("startTime"),
            "end": datetime.now(timezone.utc).isoformat(),
            "completed": completed,
        }
    )
    try:
        SESSION_STATS_PATH.write_text(json.dumps(stats, indent=2), encoding="utf-8")
        SESSION_STATE_PATH.unlink(missing_ok=True)
    except OSError:
        print("Warning: failed to update session stats", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
