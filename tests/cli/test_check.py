"""Tests for ``artifactns check`` command.

Verifies:
    - Exit code 0 when every version satisfies the requirement.
    - Exit code 1 when any version does not.
    - Exit code 2 on a malformed requirement or version.
    - Default version display and JSON output.
"""

from __future__ import annotations

import json

from click.testing import CliRunner

from artifactns.cli.main import cli


class TestCheckCommand:
    """Tests for ``check``."""

    def test_all_satisfied_exits_0(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["check", ">=1.0 <2", "1.0", "1.9.9"])
        assert result.exit_code == 0
        assert "YES" in result.output
        assert "NO" not in result.output

    def test_some_unsatisfied_exits_1(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["check", ">=1.0 <2", "1.5", "2.0"])
        assert result.exit_code == 1
        assert "NO" in result.output

    def test_shows_default_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["check", "1 | 2 | 3", "3"])
        assert "Default version: 3" in result.output

    def test_no_default(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["check", ">1", "2"])
        assert "Default version: -" in result.output

    def test_invalid_requirement_exits_2(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["check", ">=1.0,<2", "1.5"])
        assert result.exit_code == 2
        assert "invalid character" in result.output

    def test_invalid_version_exits_2(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["check", ">=1.0", "abc"])
        assert result.exit_code == 2

    def test_requires_a_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["check", ">=1.0"])
        assert result.exit_code == 2

    def test_json_output(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["check", "~>1.5", "1.6", "2.0", "--format", "json"])
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["requirement"] == "~>1.5"
        assert data["default"] is None
        assert data["results"] == [
            {"version": "1.6", "satisfied": True},
            {"version": "2.0", "satisfied": False},
        ]

    def test_json_error(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["check", "(1.0", "1.0", "--format", "json"])
        assert result.exit_code == 2
        assert "Unmatched" in json.loads(result.output)["error"]
