"""Tests for ai_dotfiles.commands: the setup/update workflow."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from ai_dotfiles.commands import (
    detect_and_confirm_language,
    execute_setup,
    execute_update,
    select_ai_tools,
    setup_typescript_config,
)
from ai_dotfiles.config import DotfilesConfig
from ai_dotfiles.filesystem import LocalFileSystem
from ai_dotfiles.migration import MigrationAction

_NO_PROMPTS = AssertionError("prompted in non-interactive mode")


class TestDetectAndConfirmLanguage:
    def test_configured_language_wins(self, project: Path, messages: list[str]) -> None:
        (project / "tsconfig.json").write_text("{}")
        assert (
            detect_and_confirm_language(project, configured="python", log=messages.append)
            == "python"
        )

    def test_detected_language_accepted_under_yes(
        self, project: Path, messages: list[str]
    ) -> None:
        (project / "requirements.txt").write_text("")
        with patch("rich.prompt.Confirm.ask", side_effect=_NO_PROMPTS):
            language = detect_and_confirm_language(project, auto_yes=True, log=messages.append)
        assert language == "python"

    def test_fallback_under_yes(self, project: Path, messages: list[str]) -> None:
        assert detect_and_confirm_language(project, auto_yes=True, log=messages.append) == (
            "typescript"
        )

    def test_rejected_detection_asks(self, project: Path, messages: list[str]) -> None:
        (project / "requirements.txt").write_text("")
        with (
            patch("rich.prompt.Confirm.ask", return_value=False),
            patch("rich.prompt.Prompt.ask", return_value="javascript"),
        ):
            language = detect_and_confirm_language(project, log=messages.append)
        assert language == "javascript"


class TestSelectAiTools:
    def test_configured(self, messages: list[str]) -> None:
        assert select_ai_tools(configured=["gemini"], log=messages.append) == ["gemini"]

    def test_yes_defaults_to_claude(self, messages: list[str]) -> None:
        assert select_ai_tools(auto_yes=True, log=messages.append) == ["claude"]

    def test_interactive(self, messages: list[str]) -> None:
        with patch("rich.prompt.Prompt.ask", return_value="none"):
            assert select_ai_tools(log=messages.append) == []


class TestSetupTypescriptConfig:
    def test_backups_are_numbered(
        self, project: Path, templates_dir: Path, messages: list[str]
    ) -> None:
        (project / "tsconfig.json").write_text("first")
        setup_typescript_config(project, templates_dir=templates_dir, log=messages.append)
        (project / "tsconfig.json").write_text("second")
        backups = setup_typescript_config(project, templates_dir=templates_dir, log=messages.append)

        assert (project / "tsconfig.json.bak").read_text() == "first"
        assert (project / "tsconfig.json.bak1").read_text() == "second"
        assert project / "tsconfig.json.bak1" in backups
        assert (project / ".eslintrc.json").read_text() == '{"template": ".eslintrc.json"}\n'


class TestExecuteSetup:
    def _run(
        self,
        project: Path,
        templates_dir: Path,
        home_dir: Path,
        messages: list[str],
        **options: object,
    ):
        return execute_setup(
            project,
            templates_dir=templates_dir,
            home_dir=home_dir,
            log=messages.append,
            **options,  # type: ignore[arg-type]
        )

    def test_non_interactive_full_run(
        self, project: Path, templates_dir: Path, home_dir: Path, messages: list[str]
    ) -> None:
        with (
            patch("rich.prompt.Prompt.ask", side_effect=_NO_PROMPTS),
            patch("rich.prompt.Confirm.ask", side_effect=_NO_PROMPTS),
        ):
            summary = self._run(
                project, templates_dir, home_dir, messages, auto_yes=True, config=DotfilesConfig()
            )

        assert summary.language == "typescript"
        assert summary.tools == ["claude"]
        assert [r.provider for r in summary.results] == ["claude"]
        assert (project / ".claude" / "settings.json").exists()
        assert (project / ".dev" / "rules" / "shared" / "architecture.md").exists()
        assert (project / ".dev" / "codex-manifest.json").exists()
        assert (project / "AGENTS.md").exists()
        assert (project / "tsconfig.json").exists()

    def test_yes_applies_default_action_to_existing_config(
        self, project: Path, templates_dir: Path, home_dir: Path, messages: list[str]
    ) -> None:
        (project / ".claude").mkdir()
        (project / ".claude" / "notes.md").write_text("notes")
        (project / ".cursorrules").write_text("cursor notes")

        with patch("rich.prompt.Prompt.ask", side_effect=_NO_PROMPTS):
            summary = self._run(
                project,
                templates_dir,
                home_dir,
                messages,
                auto_yes=True,
                config=DotfilesConfig(tools=["claude", "cursor"]),
            )

        assert [r.action for r in summary.results] == [
            MigrationAction.REPLACE,
            MigrationAction.REPLACE,
        ]
        assert not (project / ".claude" / "notes.md").exists()
        assert not (project / ".claude" / "rules" / ".local").exists()
        assert "cursor notes" not in (project / ".cursorrules.local").read_text()

    def test_configured_default_action(
        self, project: Path, templates_dir: Path, home_dir: Path, messages: list[str]
    ) -> None:
        (project / ".claude").mkdir()
        (project / ".claude" / "notes.md").write_text("notes")
        config = DotfilesConfig(
            language="python", tools=["claude"], default_action=MigrationAction.MIGRATE_PRESERVE
        )

        summary = self._run(project, templates_dir, home_dir, messages, auto_yes=True, config=config)

        assert summary.results[0].action is MigrationAction.MIGRATE_PRESERVE
        assert (project / ".claude" / "rules" / ".local" / "notes.md").read_text() == "notes"

    def test_codex_only_run(
        self, project: Path, templates_dir: Path, home_dir: Path, messages: list[str]
    ) -> None:
        summary = self._run(
            project,
            templates_dir,
            home_dir,
            messages,
            auto_yes=True,
            config=DotfilesConfig(language="python", tools=[]),
        )

        assert summary.results == []
        assert not (project / ".claude").exists()
        assert (project / ".dev" / "codex-manifest.json").exists()
        assert not (project / "tsconfig.json").exists()

    def test_no_codex_guide(
        self, project: Path, templates_dir: Path, home_dir: Path, messages: list[str]
    ) -> None:
        self._run(
            project,
            templates_dir,
            home_dir,
            messages,
            auto_yes=True,
            codex_guide=False,
            config=DotfilesConfig(language="python", tools=[]),
        )

        assert not (project / "AGENTS.md").exists()
        assert not (project / ".dev" / "codex-manifest.json").exists()
        assert (project / ".dev" / "rules" / "shared").is_dir()

    def test_first_provider_error_aborts(
        self, project: Path, templates_dir: Path, home_dir: Path, messages: list[str]
    ) -> None:
        class GeminiDenied(LocalFileSystem):
            def make_dirs(self, path: Path) -> None:
                if path.name == ".gemini":
                    raise PermissionError("denied")
                super().make_dirs(path)

        with pytest.raises(PermissionError):
            self._run(
                project,
                templates_dir,
                home_dir,
                messages,
                auto_yes=True,
                fs=GeminiDenied(),
                config=DotfilesConfig(language="python", tools=["claude", "gemini", "roo"]),
            )

        assert (project / ".claude" / "settings.json").exists()
        assert not (project / ".roo").exists()
        assert not (project / ".dev").exists()

    def test_update_wording(
        self, project: Path, templates_dir: Path, home_dir: Path, messages: list[str]
    ) -> None:
        execute_update(
            project,
            auto_yes=True,
            templates_dir=templates_dir,
            home_dir=home_dir,
            log=messages.append,
            config=DotfilesConfig(language="python", tools=["roo"]),
        )

        assert any("Configuration Updated" in m for m in messages)
        assert (project / ".roo" / "config.json").exists()
