"""Tests for ai_dotfiles.workspace: .dev folder, centralized rules, Codex context."""

from __future__ import annotations

import json
from pathlib import Path

from ai_dotfiles.filesystem import LocalFileSystem
from ai_dotfiles.workspace import (
    GUIDE_END_MARKER,
    GUIDE_START_MARKER,
    apply_guide_block,
    find_guide_block,
    generate_codex_guide,
    setup_centralized_rules,
    setup_codex_context,
    setup_codex_guide,
    setup_dev_folder,
)

# ---------------------------------------------------------------------------
# .dev folder
# ---------------------------------------------------------------------------


class TestSetupDevFolder:
    def test_creates_workspace(
        self, project: Path, templates_dir: Path, messages: list[str]
    ) -> None:
        setup_dev_folder(project, "python", templates_dir=templates_dir, log=messages.append)

        dev = project / ".dev"
        architecture = (dev / "architecture.md").read_text()
        assert architecture.startswith("# Team notes\n\n---\n\n# project - Architecture Overview")
        assert "**Language**: python" in architecture
        assert (dev / "feature.md").read_text() == "# Feature\n"
        assert (dev / "todo.md").read_text().startswith("# Developer Todo List")
        assert (dev / "README.md").exists()
        assert (dev / "DESIGNcode.md").read_text() == "# Bootstrap\n"
        assert (dev / "lint" / "lint-guide.md").read_text() == "lint guide\n"

    def test_rerun_preserves_user_files(
        self, project: Path, templates_dir: Path, messages: list[str]
    ) -> None:
        dev = project / ".dev"
        dev.mkdir()
        (dev / "todo.md").write_text("my todo")
        (dev / "feature.md").write_text("my feature")
        (dev / "architecture.md").write_text("stale")
        (dev / "DESIGNcode.md").write_text("stale")

        setup_dev_folder(
            project, "python", is_update=True, templates_dir=templates_dir, log=messages.append
        )

        assert (dev / "todo.md").read_text() == "my todo"
        assert (dev / "feature.md").read_text() == "my feature"
        assert (dev / "architecture.md").read_text() != "stale"
        assert (dev / "DESIGNcode.md").read_text() == "# Bootstrap\n"


# ---------------------------------------------------------------------------
# Centralized rules
# ---------------------------------------------------------------------------


class TestSetupCentralizedRules:
    def test_copies_shared_and_language_rules(
        self, project: Path, templates_dir: Path, messages: list[str]
    ) -> None:
        setup_centralized_rules(project, "python", templates_dir=templates_dir, log=messages.append)

        rules = project / ".dev" / "rules"
        assert sorted(p.name for p in (rules / "shared").iterdir()) == [
            "architecture.md",
            "testing.md",
        ]
        assert (rules / "python" / "py-style.md").exists()
        assert (rules / ".local" / "README.md").exists()
        assert (rules / "README.md").exists()

    def test_javascript_gets_typescript_rules(
        self, project: Path, templates_dir: Path, messages: list[str]
    ) -> None:
        setup_centralized_rules(
            project, "javascript", templates_dir=templates_dir, log=messages.append
        )
        assert (project / ".dev" / "rules" / "typescript" / "ts-style.md").exists()

    def test_managed_copies_refreshed_local_kept(
        self, project: Path, templates_dir: Path, messages: list[str]
    ) -> None:
        rules = project / ".dev" / "rules"
        (rules / "shared").mkdir(parents=True)
        (rules / "shared" / "removed-upstream.md").write_text("old")
        (rules / ".local").mkdir()
        (rules / ".local" / "README.md").write_text("my readme")
        (rules / ".local" / "team.md").write_text("team rule")

        setup_centralized_rules(
            project, "python", is_update=True, templates_dir=templates_dir, log=messages.append
        )

        assert not (rules / "shared" / "removed-upstream.md").exists()
        assert (rules / ".local" / "README.md").read_text() == "my readme"
        assert (rules / ".local" / "team.md").read_text() == "team rule"

    def test_missing_language_rules_warns(
        self, project: Path, templates_dir: Path, messages: list[str]
    ) -> None:
        (templates_dir / "languages" / "python" / "rules" / "py-style.md").unlink()
        (templates_dir / "languages" / "python" / "rules").rmdir()

        setup_centralized_rules(project, "python", templates_dir=templates_dir, log=messages.append)

        assert any("No python rules available" in m for m in messages)


# ---------------------------------------------------------------------------
# Codex guide block
# ---------------------------------------------------------------------------


class TestGuideBlock:
    def test_block_is_delimited(self) -> None:
        block = generate_codex_guide("javascript")
        assert block.startswith(GUIDE_START_MARKER)
        assert block.endswith(GUIDE_END_MARKER)
        assert "`.dev/rules/typescript/*.md`" in block

    def test_appends_when_absent(self) -> None:
        updated = apply_guide_block("# Agents\n\nIntro\n\n", "BLOCK")
        assert updated == "# Agents\n\nIntro\n\nBLOCK\n"

    def test_replaces_in_place(self) -> None:
        current = f"before\n{GUIDE_START_MARKER}\nold guide\n{GUIDE_END_MARKER}\nafter\n"
        block = f"{GUIDE_START_MARKER}\nnew guide\n{GUIDE_END_MARKER}"

        updated = apply_guide_block(current, block)

        assert updated == f"before\n{block}\nafter\n"

    def test_rerun_does_not_duplicate(self, project: Path, messages: list[str]) -> None:
        (project / "AGENTS.md").write_text("# Team agents\n")

        setup_codex_guide(project, "python", log=messages.append)
        first = (project / "AGENTS.md").read_text()
        setup_codex_guide(project, "python", log=messages.append)
        second = (project / "AGENTS.md").read_text()

        assert first == second
        assert second.count(GUIDE_START_MARKER) == 1
        assert second.startswith("# Team agents\n")

    def test_find_ignores_unterminated_start(self) -> None:
        assert find_guide_block(f"intro\n{GUIDE_START_MARKER}\nuser notes\n") is None

    def test_find_pairs_end_with_nearest_start(self) -> None:
        text = f"{GUIDE_START_MARKER}\nnotes\n{GUIDE_START_MARKER}\nguide\n{GUIDE_END_MARKER}\n"
        start, end = find_guide_block(text)
        assert text[start:end] == f"{GUIDE_START_MARKER}\nguide\n{GUIDE_END_MARKER}"

    def test_unterminated_start_keeps_user_text(self, project: Path, messages: list[str]) -> None:
        agents = project / "AGENTS.md"
        agents.write_text(f"# Team\n{GUIDE_START_MARKER}\nuser notes\n")

        setup_codex_guide(project, "python", log=messages.append)
        first = agents.read_text()
        setup_codex_guide(project, "python", log=messages.append)
        second = agents.read_text()

        assert "user notes" in first
        assert first == second
        assert second.count(GUIDE_END_MARKER) == 1
        assert second.startswith(f"# Team\n{GUIDE_START_MARKER}\nuser notes\n")


# ---------------------------------------------------------------------------
# Codex context
# ---------------------------------------------------------------------------


class TestSetupCodexContext:
    def test_writes_manifest_index_and_agents(
        self, project: Path, templates_dir: Path, messages: list[str]
    ) -> None:
        setup_centralized_rules(project, "python", templates_dir=templates_dir, log=messages.append)

        files = setup_codex_context(
            project, "python", templates_dir=templates_dir, log=messages.append
        )

        dev = project / ".dev"
        manifest = json.loads((dev / "codex-manifest.json").read_text())
        assert manifest["load"] == files.shared + files.language + files.local
        assert ".dev/rules/python/py-style.md" in manifest["load"]
        assert (dev / "context-index.md").read_text().startswith("# Codex Context Index")
        agents = (project / "AGENTS.md").read_text()
        assert agents.startswith("# Agents\n")
        assert GUIDE_START_MARKER in agents

    def test_manifest_write_failure_is_not_fatal(
        self, project: Path, templates_dir: Path, messages: list[str]
    ) -> None:
        class ReadOnlyDev(LocalFileSystem):
            def write_text(self, path: Path, content: str) -> None:
                if path.name == "codex-manifest.json":
                    raise PermissionError("read-only")
                super().write_text(path, content)

        setup_codex_context(
            project, "python", templates_dir=templates_dir, fs=ReadOnlyDev(), log=messages.append
        )

        assert not (project / ".dev" / "codex-manifest.json").exists()
        assert any("Skipped manifest/index generation" in m for m in messages)
        assert GUIDE_START_MARKER in (project / "AGENTS.md").read_text()
