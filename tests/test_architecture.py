"""Tests for ai_dotfiles.architecture."""

from __future__ import annotations

import json
from datetime import date
from typing import TYPE_CHECKING

from ai_dotfiles.architecture import generate_architecture_doc

if TYPE_CHECKING:
    from pathlib import Path


class TestGenerateArchitectureDoc:
    def test_clean_architecture_project(self, project: Path) -> None:
        for layer in ("domain", "application", "infrastructure"):
            (project / "src" / layer).mkdir(parents=True)
        (project / "tests").mkdir()
        (project / "package.json").write_text(
            json.dumps({"dependencies": {"express": "4"}, "devDependencies": {"typescript": "5"}})
        )

        doc = generate_architecture_doc(project, "typescript", today=date(2026, 1, 2))

        assert doc.startswith("# project - Architecture Overview")
        assert "**Framework**: Express" in doc
        assert "Clean Architecture (3-layer)" in doc
        assert "**Last Updated**: 2026-01-02" in doc
        assert "│   ├── domain/" in doc
        assert "├── tests/" in doc
        assert "- express\n- typescript" in doc
        assert "Repository Pattern" in doc

    def test_custom_architecture(self, project: Path) -> None:
        (project / "src" / "utils").mkdir(parents=True)
        (project / "pyproject.toml").write_text('dependencies = ["flask"]\n')

        doc = generate_architecture_doc(project, "python")

        assert "**Architecture**: Custom" in doc
        assert "**Framework**: Flask" in doc
        assert "├── pyproject.toml" in doc
        assert "- (Add key technologies here)" in doc

    def test_technologies_capped(self, project: Path) -> None:
        deps = {f"dep{i:02d}": "1" for i in range(15)}
        (project / "package.json").write_text(json.dumps({"dependencies": deps}))

        doc = generate_architecture_doc(project, "javascript")

        assert "- dep09" in doc
        assert "- dep10" not in doc
