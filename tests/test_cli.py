"""Tests for the verspan command-line interface.

Commands are exercised end to end through Click's ``CliRunner`` inside an
isolated working directory, so no configuration file is discovered unless
a test writes one.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Generator
from unittest.mock import patch

import click
import pytest
from click.testing import CliRunner

from verspan.__version__ import __version__
from verspan.cli import cli, main
from verspan.exceptions import ConfigError
from verspan.models.constraint import ALWAYS_MATCH, ConstraintSet
from verspan.utils.console import reconfigure_console
from verspan.utils.logger import disable_logging


@pytest.fixture(autouse=True)
def reset_output_state() -> Generator[None, None, None]:
    yield
    disable_logging()
    reconfigure_console()


@pytest.fixture
def runner(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> CliRunner:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("VERSPAN_CONFIG", raising=False)
    return CliRunner()


@pytest.mark.integration
class TestGlobalOptions:
    """Tests for the CLI group."""

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert f"verspan {__version__}" in result.output

    def test_help_lists_commands(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        for command in ("export", "requires", "sort"):
            assert command in result.output

    def test_invalid_config_exits_with_error(self, runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "verspan.toml").write_text("[verspan]\nbogus = true\n", encoding="utf-8")

        result = runner.invoke(cli, ["export", ">=1.0"])

        assert result.exit_code == 1
        assert "Unknown configuration keys" in result.output


@pytest.mark.integration
class TestExportCommand:
    """Tests for ``verspan export``."""

    def test_json_output(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["export", ">=1.0,!=1.5,<2", "--format", "json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {
            "specifier": ">=1.0,!=1.5,<2",
            "export": {"kind": "range", "allowed": "[1.0,2)", "rejects": ["[1.5,1.5]"]},
        }

    @pytest.mark.parametrize(
        "specifier,kind",
        [(">=2.0,<1.0", "never-match"), ("", "always-match")],
    )
    def test_sentinels(self, runner: CliRunner, specifier: str, kind: str) -> None:
        result = runner.invoke(cli, ["export", specifier, "-f", "json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["export"] == {"kind": kind}

    def test_table_output(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["export", "==1.2.*"])

        assert result.exit_code == 0
        assert "[1.2,1.3)" in result.output

    def test_invalid_specifier(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["export", "~=1"])

        assert result.exit_code == 1
        assert "[ERROR]" in result.output

    def test_widen_defaults_from_config(self, runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "verspan.toml").write_text(
            "[verspan]\nwiden_unrepresentable = true\n", encoding="utf-8"
        )

        with patch.object(ConstraintSet, "export", return_value=ALWAYS_MATCH) as mock_export:
            result = runner.invoke(cli, ["export", ">=1.0", "-f", "json"])

        assert result.exit_code == 0
        mock_export.assert_called_once_with(widen=True)

    def test_no_widen_flag_overrides_config(self, runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "verspan.toml").write_text(
            "[verspan]\nwiden_unrepresentable = true\n", encoding="utf-8"
        )

        with patch.object(ConstraintSet, "export", return_value=ALWAYS_MATCH) as mock_export:
            result = runner.invoke(cli, ["export", ">=1.0", "--no-widen", "-f", "json"])

        assert result.exit_code == 0
        mock_export.assert_called_once_with(widen=False)


@pytest.mark.integration
class TestRequiresCommand:
    """Tests for ``verspan requires``."""

    def test_lines_json(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli,
            [
                "requires",
                "--line",
                'foo (>=1.0,<2.0); sys_platform == "linux" and platform_machine == "x86_64"',
                "--line",
                'bar; extra == "test"',
                "--line",
                "baz",
                "-f",
                "json",
            ],
        )

        assert result.exit_code == 0
        assert json.loads(result.stdout) == [
            {
                "name": "foo",
                "os": "linux",
                "arch": "x86_64",
                "export": {"kind": "range", "allowed": "[1.0,2.0)", "rejects": []},
            },
            {"name": "baz", "export": {"kind": "always-match"}},
        ]

    def test_file_input_with_target_filter(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "requires.txt"
        path.write_text(
            "# dependencies\n"
            "numpy>=1.21\n"
            'pywin32; sys_platform == "win32"\n'
            'uvloop; sys_platform == "linux"\n',
            encoding="utf-8",
        )

        result = runner.invoke(cli, ["requires", str(path), "--os", "darwin", "-f", "json"])

        assert result.exit_code == 0
        assert [dep["name"] for dep in json.loads(result.stdout)] == ["numpy"]

    def test_table_output(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["requires", "-l", "foo!=1.5"])

        assert result.exit_code == 0
        assert "foo" in result.output
        assert "[1.5,1.5]" in result.output

    def test_requires_input(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["requires"])

        assert result.exit_code == 2
        assert "Provide a FILE" in result.output

    def test_unknown_target_os(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["requires", "-l", "foo", "--os", "plan9"])

        assert result.exit_code == 1
        assert "Unrecognized operating system" in result.output

    def test_malformed_line(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["requires", "-l", "foo (>=1.0"])

        assert result.exit_code == 1
        assert "Unclosed version spec" in result.output


@pytest.mark.integration
class TestSortCommand:
    """Tests for ``verspan sort``."""

    def test_sorts_versions(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["sort", "1.0", "1.0.post1", "1.0rc1", "1.0.dev0", "-f", "json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == ["1.0.dev0", "1.0rc1", "1.0", "1.0.post1"]

    def test_filters_and_reverses(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli, ["sort", "0.9", "1.0", "1.5", "1.9", "2.0", "--spec", ">=1.0,!=1.5,<2", "-r", "-f", "json"]
        )

        assert result.exit_code == 0
        assert json.loads(result.stdout) == ["1.9", "1.0"]

    def test_reads_listing_file(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "versions.txt"
        path.write_text("2.0\n# yanked: 1.5\n1.0\n", encoding="utf-8")

        result = runner.invoke(cli, ["sort", "--file", str(path), "0.5", "-f", "json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == ["0.5", "1.0", "2.0"]

    def test_table_output(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["sort", "2.0", "1.0rc1"])

        assert result.exit_code == 0
        assert result.output.index("1.0rc1") < result.output.index("2.0")

    def test_no_matches(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["sort", "1.0", "--spec", ">5"])

        assert result.exit_code == 0
        assert "No matching versions" in result.output

    def test_invalid_version_fails_when_configured(self, runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "verspan.toml").write_text(
            "[verspan]\nskip_invalid_versions = false\n", encoding="utf-8"
        )

        result = runner.invoke(cli, ["sort", "1.0", "banana"])

        assert result.exit_code == 1
        assert "Invalid version" in result.output


@pytest.mark.unit
class TestMain:
    """Tests for main() exit code mapping."""

    def test_success(self, runner: CliRunner) -> None:
        with patch.object(sys, "argv", ["verspan", "sort", "1.0", "-f", "json"]):
            assert main() == 0

    def test_click_exception(self) -> None:
        with patch("verspan.cli.cli", side_effect=click.UsageError("bad usage")):
            assert main() == 2

    def test_verspan_error(self) -> None:
        with patch("verspan.cli.cli", side_effect=ConfigError("broken")):
            with patch("verspan.cli.print_error") as mock_print:
                assert main() == 1

        mock_print.assert_called_once_with("broken")

    def test_keyboard_interrupt(self) -> None:
        with patch("verspan.cli.cli", side_effect=KeyboardInterrupt):
            with patch("verspan.cli.print_warning"):
                assert main() == 130

    def test_unexpected_error(self) -> None:
        with patch("verspan.cli.cli", side_effect=RuntimeError("boom")):
            with patch("verspan.cli.print_error") as mock_print:
                assert main() == 1

        mock_print.assert_called_once_with("Unexpected error: boom")
