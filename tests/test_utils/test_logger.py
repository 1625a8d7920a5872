from __future__ import annotations

import io
import sys
import logging
import threading
from typing import Generator
from unittest.mock import patch

import pytest

import modgate.utils.logger as logger_module
from modgate.utils.logger import (
    ColoredFormatter,
    disable_logging,
    get_logger,
    is_logging_configured,
    level_for_verbosity,
    setup_logging,
)


@pytest.fixture
def clean_logger_state() -> Generator[None, None, None]:
    """Clear modgate logger handlers and the configured flag."""
    root_logger = logging.getLogger("modgate")
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)
    logger_module._logging_configured = False
    yield


@pytest.fixture
def captured_stream() -> io.StringIO:
    return io.StringIO()


def make_record(level: int = logging.INFO, message: str = "Loaded 3 mods") -> logging.LogRecord:
    return logging.LogRecord(
        name="modgate.loader",
        level=level,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )


@pytest.mark.unit
class TestColoredFormatter:
    """Tests for ColoredFormatter."""

    def test_colors_level_name(self) -> None:
        formatter = ColoredFormatter("%(levelname)s: %(message)s", use_color=True)

        with patch.object(ColoredFormatter, "_should_use_color", return_value=True):
            output = formatter.format(make_record(logging.ERROR))

        assert output == "\033[31mERROR\033[0m: Loaded 3 mods"

    def test_plain_when_disabled(self) -> None:
        formatter = ColoredFormatter("%(levelname)s: %(message)s", use_color=False)

        assert formatter.format(make_record(logging.WARNING)) == "WARNING: Loaded 3 mods"

    def test_record_is_restored(self) -> None:
        """The level name is restored so other handlers see it unchanged."""
        formatter = ColoredFormatter("%(levelname)s", use_color=True)
        record = make_record(logging.DEBUG)

        with patch.object(ColoredFormatter, "_should_use_color", return_value=True):
            formatter.format(record)

        assert record.levelname == "DEBUG"

    def test_should_use_color_respects_no_color(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NO_COLOR", "1")

        assert ColoredFormatter._should_use_color() is False

    def test_should_use_color_respects_ci(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("CI", "1")

        assert ColoredFormatter._should_use_color() is False

    def test_should_use_color_checks_stderr_tty(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("CI", raising=False)

        with patch.object(sys.stderr, "isatty", return_value=True):
            assert ColoredFormatter._should_use_color() is True
        with patch.object(sys.stderr, "isatty", side_effect=OSError):
            assert ColoredFormatter._should_use_color() is False


@pytest.mark.unit
class TestLevelForVerbosity:
    """Tests for level_for_verbosity."""

    @pytest.mark.parametrize(
        "verbose,level",
        [(-1, logging.WARNING), (0, logging.WARNING), (1, logging.INFO), (2, logging.DEBUG), (5, logging.DEBUG)],
    )
    def test_mapping(self, verbose: int, level: int) -> None:
        assert level_for_verbosity(verbose) == level


@pytest.mark.unit
class TestSetupLogging:
    """Tests for setup_logging."""

    def test_installs_single_handler(
        self, clean_logger_state: None, captured_stream: io.StringIO
    ) -> None:
        setup_logging(level=logging.DEBUG, stream=captured_stream)
        setup_logging(level=logging.INFO, stream=captured_stream)

        root_logger = logging.getLogger("modgate")
        assert len(root_logger.handlers) == 1
        assert root_logger.level == logging.INFO
        assert root_logger.propagate is False
        assert is_logging_configured()

    def test_default_format(
        self,
        clean_logger_state: None,
        captured_stream: io.StringIO,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("NO_COLOR", "1")
        setup_logging(level=logging.INFO, stream=captured_stream)

        get_logger("resolver").info("Resolved load order: %s", "Core, Maps")

        assert captured_stream.getvalue() == "INFO: Resolved load order: Core, Maps\n"

    def test_verbose_format_includes_logger_name(
        self,
        clean_logger_state: None,
        captured_stream: io.StringIO,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("NO_COLOR", "1")
        setup_logging(level=logging.DEBUG, verbose=True, stream=captured_stream)

        get_logger("sorter").debug("Ordered 2 of 2 mod(s)")

        output = captured_stream.getvalue()
        assert "modgate.sorter" in output
        assert "Ordered 2 of 2 mod(s)" in output

    def test_filters_below_level(
        self, clean_logger_state: None, captured_stream: io.StringIO
    ) -> None:
        setup_logging(level=logging.WARNING, stream=captured_stream)

        get_logger("loader").info("hidden")

        assert captured_stream.getvalue() == ""

    def test_thread_safe(self, clean_logger_state: None, captured_stream: io.StringIO) -> None:
        threads = [
            threading.Thread(target=setup_logging, kwargs={"stream": captured_stream})
            for _ in range(10)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(logging.getLogger("modgate").handlers) == 1


@pytest.mark.unit
class TestGetLogger:
    """Tests for get_logger."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            (None, "modgate"),
            ("", "modgate"),
            ("modgate", "modgate"),
            ("resolver", "modgate.resolver"),
            ("modgate.core.loader", "modgate.core.loader"),
        ],
    )
    def test_names(self, clean_logger_state: None, name: str, expected: str) -> None:
        assert get_logger(name).name == expected

    def test_adds_null_handler_before_setup(self, clean_logger_state: None) -> None:
        logger = get_logger("test_null_handler_child")

        assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)


@pytest.mark.unit
class TestDisableLogging:
    """Tests for disable_logging."""

    def test_silences_output(self, clean_logger_state: None, captured_stream: io.StringIO) -> None:
        setup_logging(level=logging.DEBUG, stream=captured_stream)

        disable_logging()
        get_logger("loader").error("should not appear")

        assert captured_stream.getvalue() == ""
        assert not is_logging_configured()

    def test_idempotent(self, clean_logger_state: None) -> None:
        disable_logging()
        disable_logging()

        handlers = logging.getLogger("modgate").handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.NullHandler)
