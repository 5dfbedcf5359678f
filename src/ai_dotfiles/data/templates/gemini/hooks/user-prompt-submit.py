#!/usr/bin/env python3
"""Gemini CLI user-prompt-submit hook.

Reads the prompt (plain text, or JSON with a ``prompt`` key) from stdin and
prints warnings for destructive or context-free requests. Never blocks the
prompt: the exit status is always 0.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

DEV_DIR = Path.cwd() / ".dev"

_DESTRUCTIVE = ("delete all", "remove everything", "drop database")


def read_prompt(raw: str) -> str:
    try:
        payload = json.loads(raw)
    except ValueError:
        return raw
    if isinstance(payload, dict):
        return str(payload.get("prompt", ""))
    return raw


def review_prompt(prompt: str) -> list[str]:
    notes: list[str] = []
    lowered = prompt.lower()
    if any(phrase in lowered for phrase in _DESTRUCTIVE):
        notes.append("Destructive operation detected: please be specific about the target.")
    if len(prompt.strip()) < 10:
        notes.append("Very short prompt: consider adding more context.")
    if "architecture" in lowered and (DEV_DIR / "architecture.md").is_file():
        notes.append("See .dev/architecture.md for the current project overview.")
    return notes


def main() -> int:
    for note in review_prompt(read_prompt(sys.stdin.read())):
        print(note)
    return 0


if __name__ == "__main__":
    sys.exit(main())
