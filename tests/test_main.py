from __future__ import annotations

import sys
from unittest.mock import MagicMock, patch

import pytest

from verspan.__main__ import _print_startup_error, main


@pytest.mark.unit
class TestMain:
    """Tests for the ``python -m verspan`` entry point."""

    @pytest.mark.parametrize(
        "exit_code",
        [0, 1, 2, 130],
        ids=["success", "error", "usage", "interrupted"],
    )
    def test_main_returns_cli_exit_code(self, exit_code: int) -> None:
        """Test main forwards the exit code from the CLI."""
        mock_cli_module = MagicMock()
        mock_cli_module.main = MagicMock(return_value=exit_code)

        with patch.dict("sys.modules", {"verspan.cli": mock_cli_module}):
            result = main()

        assert result == exit_code
        mock_cli_module.main.assert_called_once_with()

    def test_main_import_error_returns_one(self, capsys: pytest.CaptureFixture) -> None:
        """Test main returns 1 and reports when the CLI cannot be imported."""
        # A None entry makes the import machinery raise ImportError
        with patch.dict("sys.modules", {"verspan.cli": None}):
            result = main()

        assert result == 1
        captured = capsys.readouterr()
        assert "ImportError:" in captured.err
        assert "verspan.cli" in captured.err


@pytest.mark.unit
class TestPrintStartupError:
    """Tests for _print_startup_error helper function."""

    def test_includes_version(self, capsys: pytest.CaptureFixture) -> None:
        mock_version_module = MagicMock(__version__="9.8.7")

        with patch.dict(sys.modules, {"verspan.__version__": mock_version_module}):
            _print_startup_error(ImportError("Test error message"))

        captured = capsys.readouterr()
        assert "verspan version: 9.8.7" in captured.err
        assert "ImportError: Test error message" in captured.err

    def test_unknown_version_when_version_import_fails(
        self, capsys: pytest.CaptureFixture
    ) -> None:
        with patch.dict(sys.modules, {"verspan.__version__": None}):
            _print_startup_error(ImportError("Test error message"))

        captured = capsys.readouterr()
        assert "verspan version: <unknown>" in captured.err

    def test_writes_only_to_stderr(self, capsys: pytest.CaptureFixture) -> None:
        _print_startup_error(ImportError("Test error"))

        captured = capsys.readouterr()
        assert captured.out == ""
        lines = captured.err.split("\n")
        assert any(line.startswith("verspan version:") for line in lines)
        assert "" in lines
        assert "ImportError: Test error" in lines
