"""Tests for logging setup and configuration defaults."""

import logging
import sys

import pytest

from typemaths_pkg import config
from typemaths_pkg.logging_config import (
    StructuredFormatter,
    get_logger,
    level_number,
    parse_module_levels,
    setup_logging,
)


class TestLogging:
    """Test structured logging helpers."""

    def test_get_logger_namespace(self):
        assert get_logger("parsing").name == "typemaths.parsing"

    def test_setup_logging_replaces_handlers(self, tmp_path):
        log_file = tmp_path / "typemaths.log"
        logger = setup_logging("DEBUG", str(log_file))
        setup_logging("DEBUG", str(log_file))
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 2

        get_logger("test").debug("hello %s", "world")
        for handler in logger.handlers:
            handler.flush()
        text = log_file.read_text(encoding="utf-8")
        assert "[DEBUG] typemaths.test: hello world" in text

        for handler in logger.handlers:
            handler.close()
        setup_logging()

    def test_unknown_level_falls_back_to_warning(self):
        assert setup_logging("CHATTY").level == logging.WARNING

    def test_module_levels(self):
        logger = setup_logging("WARNING", module_levels={"parsing": "DEBUG"})
        assert logger.level == logging.WARNING
        assert get_logger("parsing").isEnabledFor(logging.DEBUG)
        assert not get_logger("api").isEnabledFor(logging.DEBUG)

        # a later call drops overrides it does not repeat
        setup_logging("WARNING", module_levels={})
        assert get_logger("parsing").level == logging.NOTSET
        assert not get_logger("parsing").isEnabledFor(logging.DEBUG)

    def test_module_levels_from_config(self, monkeypatch):
        monkeypatch.setattr(config, "LOG_LEVEL", "ERROR")
        monkeypatch.setattr(config, "LOG_MODULE_LEVELS", "numerical_analysis=info")
        logger = setup_logging()
        assert logger.level == logging.ERROR
        assert get_logger("numerical_analysis").level == logging.INFO
        setup_logging("WARNING", module_levels={})

    def test_parse_module_levels(self):
        assert parse_module_levels("parsing=DEBUG, api = info,") == {
            "parsing": logging.DEBUG,
            "api": logging.INFO,
        }
        assert parse_module_levels("") == {}
        with pytest.raises(ValueError):
            parse_module_levels("parsing")
        with pytest.raises(ValueError):
            parse_module_levels("parsing=LOUD")

    def test_level_number(self):
        assert level_number("warning") == logging.WARNING
        assert level_number(logging.ERROR) == logging.ERROR

    def test_formatter_includes_traceback(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = logging.LogRecord(
                "typemaths.x", logging.ERROR, __file__, 1, "failed", None, sys.exc_info()
            )
        out = StructuredFormatter().format(record)
        assert "[ERROR] typemaths.x: failed" in out
        assert "RuntimeError: boom" in out


class TestConfigDefaults:
    """Defaults used when no TYPEMATHS_* variables are set."""

    def test_numeric_defaults(self):
        assert config.DEFAULT_TOLERANCE > 0
        assert config.MAX_ITERATIONS > 0
        assert config.DEFAULT_ROOT_METHOD in ("newton", "secant", "bisection")

    def test_token_rules_order(self):
        assert list(config.EXPRESSION_TOKEN_RULES)[:3] == ["identifier", "number", "operator"]

    def test_assignment_pattern(self):
        assert config.VAR_ASSIGN_RE.match("y = 2*x").groups() == ("y", "2*x")
        assert config.VAR_ASSIGN_RE.match("2*x") is None
