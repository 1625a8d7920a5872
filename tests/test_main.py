from __future__ import annotations

import sys
from unittest.mock import MagicMock, patch

import pytest

from modgate.__main__ import _print_startup_error, main


@pytest.mark.unit
class TestMain:
    """Tests for the ``python -m modgate`` entry point."""

    @pytest.mark.parametrize(
        "exit_code",
        [0, 1, 130],
        ids=["success", "error", "interrupted"],
    )
    def test_main_returns_cli_exit_code(self, exit_code: int) -> None:
        """main() passes through the CLI exit code."""
        mock_cli_module = MagicMock()
        mock_cli_module.main = MagicMock(return_value=exit_code)

        with patch.dict("sys.modules", {"modgate.cli": mock_cli_module}):
            result = main()

        assert result == exit_code
        mock_cli_module.main.assert_called_once_with()

    def test_main_import_error_returns_one(self, capsys: pytest.CaptureFixture) -> None:
        """main() returns 1 and explains itself when the CLI cannot be imported."""
        import_error = ImportError("No module named 'modgate.cli'")
        real_import = __import__

        def fake_import(name, *args, **kwargs):
            if name == "modgate.cli":
                raise import_error
            return real_import(name, *args, **kwargs)

        with patch("builtins.__import__", side_effect=fake_import):
            result = main()

        assert result == 1
        captured = capsys.readouterr()
        assert "ImportError: No module named 'modgate.cli'" in captured.err


@pytest.mark.unit
class TestPrintStartupError:
    """Tests for _print_startup_error."""

    def test_includes_version(self, capsys: pytest.CaptureFixture) -> None:
        mock_version_module = MagicMock(__version__="9.9.9")

        with patch.dict(sys.modules, {"modgate.__version__": mock_version_module}):
            _print_startup_error(ImportError("boom"))

        captured = capsys.readouterr()
        assert "modgate version: 9.9.9" in captured.err
        assert "ImportError: boom" in captured.err
        assert captured.out == ""

    def test_version_import_failure_is_tolerated(self, capsys: pytest.CaptureFixture) -> None:
        real_import = __import__

        def fake_import(name, *args, **kwargs):
            if name == "modgate.__version__":
                raise ImportError("Cannot import version")
            return real_import(name, *args, **kwargs)

        with patch("builtins.__import__", side_effect=fake_import):
            _print_startup_error(ImportError("boom"))

        captured = capsys.readouterr()
        assert "modgate version: <unknown>" in captured.err
        assert "ImportError: boom" in captured.err
