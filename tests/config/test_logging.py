"""Tests for the logging configuration module."""

import logging
from logging.handlers import RotatingFileHandler

import pytest
import structlog

import slugline.config as config_module
from slugline.config import (
    SluglineSettings,
    configure_logging,
    get_logger,
    reset_settings,
)
from slugline.config.logging import _build_formatter


@pytest.fixture(autouse=True)
def reset_logging_state():
    """Reset logging state before each test to ensure isolation."""
    root_logger = logging.getLogger()
    original_level = root_logger.level
    original_handlers = root_logger.handlers.copy()

    for handler in root_logger.handlers.copy():
        root_logger.removeHandler(handler)

    yield

    for handler in root_logger.handlers.copy():
        root_logger.removeHandler(handler)
        if handler not in original_handlers:
            handler.close()
    root_logger.setLevel(original_level)
    for handler in original_handlers:
        root_logger.addHandler(handler)


class TestConfigureLogging:
    """Test configure_logging."""

    def test_default_configuration(self):
        """Test the default WARNING level with one stderr handler."""
        configure_logging(SluglineSettings())
        root_logger = logging.getLogger()
        assert root_logger.level == logging.WARNING
        assert len(root_logger.handlers) == 1
        assert isinstance(root_logger.handlers[0], logging.StreamHandler)

    @pytest.mark.parametrize(
        ("level_str", "level_const"),
        [
            ("DEBUG", logging.DEBUG),
            ("info", logging.INFO),
            ("Warning", logging.WARNING),
            ("ERROR", logging.ERROR),
            ("CRITICAL", logging.CRITICAL),
        ],
    )
    def test_log_levels(self, level_str, level_const):
        """Test each level, in any case."""
        configure_logging(SluglineSettings(log_level=level_str))
        assert logging.getLogger().level == level_const

    def test_invalid_level(self):
        """Test that a level unknown to logging raises ValueError."""
        settings = SluglineSettings.model_construct(
            log_level="LOUD", log_format="console", debug=False, log_file=None
        )
        with pytest.raises(ValueError, match="Invalid log level 'LOUD'"):
            configure_logging(settings)

    def test_log_file(self, tmp_path):
        """Test that a rotating file handler is added."""
        log_file = tmp_path / "logs" / "slugline.log"
        configure_logging(SluglineSettings(log_file=log_file, log_level="INFO"))

        handlers = logging.getLogger().handlers
        file_handlers = [h for h in handlers if isinstance(h, RotatingFileHandler)]
        assert len(file_handlers) == 1
        assert file_handlers[0].maxBytes == 5 * 1024 * 1024
        assert file_handlers[0].backupCount == 3
        assert log_file.parent.is_dir()

        logging.getLogger("slugline.test").info("written to file")
        file_handlers[0].flush()
        assert "written to file" in log_file.read_text(encoding="utf-8")

    @pytest.mark.parametrize("log_format", ["console", "json", "structured"])
    def test_formats(self, log_format):
        """Test that every format configures without error."""
        configure_logging(SluglineSettings(log_format=log_format))
        handler = logging.getLogger().handlers[0]
        assert isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter)

    def test_debug_adds_callsite(self):
        """Test that debug mode records file and line of each event."""
        configure_logging(SluglineSettings(debug=True, log_level="DEBUG"))
        processors = structlog.get_config()["processors"]
        assert any(
            isinstance(p, structlog.processors.CallsiteParameterAdder)
            for p in processors
        )

    def test_events_reach_stdlib(self):
        """Test that structlog events are seen by stdlib handlers."""
        configure_logging(SluglineSettings(log_level="INFO"))
        handler = _ListHandler()
        logging.getLogger().addHandler(handler)

        structlog.get_logger("slugline.test").info("hello", scenes=3)
        structlog.get_logger("slugline.test").debug("hidden")

        messages = [str(record.msg) for record in handler.records]
        assert len(messages) == 1
        assert "hello" in messages[0]


class _ListHandler(logging.Handler):
    """Keep emitted records in memory."""

    def __init__(self) -> None:
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


class TestBuildFormatter:
    """Test the stdlib formatter used by handlers."""

    def test_json_renderer(self):
        """Test that foreign stdlib records are rendered as JSON."""
        formatter = _build_formatter("json")
        record = logging.LogRecord(
            "plain.logger", logging.WARNING, __file__, 1, "plain message", None, None
        )
        output = formatter.format(record)
        assert '"event": "plain message"' in output
        assert '"logger": "plain.logger"' in output

    def test_structured_renderer(self):
        """Test the key=value format."""
        formatter = _build_formatter("structured")
        record = logging.LogRecord(
            "plain.logger", logging.ERROR, __file__, 1, "boom", None, None
        )
        output = formatter.format(record)
        assert "event='boom'" in output
        assert "level='error'" in output


class TestGetLogger:
    """Test the cached logger factory."""

    def test_cached_per_name(self):
        """Test that the same logger is returned for a name."""
        assert get_logger("slugline.a") is get_logger("slugline.a")

    def test_configures_logging_once(self, monkeypatch):
        """Test that the first logger configures logging from settings."""
        calls = []
        monkeypatch.setattr(config_module, "configure_logging", calls.append)
        reset_settings()

        get_logger("slugline.first")
        get_logger("slugline.second")
        assert len(calls) == 1
        assert isinstance(calls[0], SluglineSettings)

    def test_reset_clears_cache(self):
        """Test that reset_settings forgets cached loggers."""
        get_logger("slugline.reset")
        reset_settings()
        assert "slugline.reset" not in config_module._logger_cache
