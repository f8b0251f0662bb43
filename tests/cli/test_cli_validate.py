"""Tests for ``permgate validate`` CLI command."""

from __future__ import annotations

from typing import TYPE_CHECKING

from click.testing import CliRunner

from permgate.cli import main

if TYPE_CHECKING:
    from pathlib import Path


class TestValidateCommand:
    def test_valid(self, tmp_path: Path) -> None:
        f = tmp_path / "ok.yaml"
        f.write_text("allow: [ls, 'Bash(npm test*)']\ndeny: ['rm *']\n")

        runner = CliRunner()
        result = runner.invoke(main, ["validate", str(f)])

        assert result.exit_code == 0
        assert "OK" in result.output
        assert "3 pattern(s)" in result.output

    def test_reports_every_failure(self, tmp_path: Path) -> None:
        good = tmp_path / "good.yaml"
        good.write_text("allow: [ls]\n")
        bad_pattern = tmp_path / "pattern.yaml"
        bad_pattern.write_text("allow: ['a***']\n")
        bad_yaml = tmp_path / "syntax.yaml"
        bad_yaml.write_text("{{{{invalid")

        runner = CliRunner()
        result = runner.invoke(main, ["validate", str(good), str(bad_pattern), str(bad_yaml)])

        assert result.exit_code == 1
        assert result.output.count("FAIL") == 2
        assert "OK" in result.output

    def test_requires_paths(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["validate"])

        assert result.exit_code != 0

    def test_settings_file_with_ask(self, tmp_path: Path) -> None:
        f = tmp_path / "settings.json"
        f.write_text(
            '{"permissions": {"allow": ["Bash(git status)"], "deny": [],'
            ' "ask": ["Bash(git push*)"], "defaultMode": "acceptEdits"}}'
        )

        runner = CliRunner()
        result = runner.invoke(main, ["validate", str(f)])

        assert result.exit_code == 0
        assert "2 pattern(s)" in result.output

    def test_bad_ask_pattern_fails(self, tmp_path: Path) -> None:
        f = tmp_path / "settings.yaml"
        f.write_text("permissions:\n  ask: ['']\n")

        runner = CliRunner()
        result = runner.invoke(main, ["validate", str(f)])

        assert result.exit_code == 1
        assert "ask[0]" in result.output
