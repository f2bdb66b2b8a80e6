"""
Unit tests for reaction_embeds.core.logging module
Task ID: R1 - Reaction embeds core
"""

import json
import logging

import pytest

from reaction_embeds.core.config import AppConfig
from reaction_embeds.core.errors import ConfigurationError
from reaction_embeds.core.logging import (
    PACKAGE_LOGGER, JSONFormatter, LogManager,
    get_logger, initialize_logging, shutdown_logging
)


def make_config(tmp_path, **logging_overrides) -> AppConfig:
    config = AppConfig()
    config.logging.log_directory = str(tmp_path / "logs")
    for key, value in logging_overrides.items():
        setattr(config.logging, key, value)
    return config


class TestJSONFormatter:
    """Test the JSON formatter"""

    def test_format_basic_record(self):
        """Test formatting a record as JSON"""
        record = logging.LogRecord(
            "reaction_embeds.test", logging.INFO, __file__, 10, "page %s", (2,), None
        )
        record.message_id = 1000

        data = json.loads(JSONFormatter().format(record))

        assert data["level"] == "INFO"
        assert data["logger"] == "reaction_embeds.test"
        assert data["message"] == "page 2"
        assert data["message_id"] == 1000

    def test_format_without_extra(self):
        """Test extra fields can be excluded"""
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
        record.message_id = 1000

        data = json.loads(JSONFormatter(include_extra=False).format(record))

        assert "message_id" not in data


class TestLogManager:
    """Test the LogManager class"""

    def test_console_handler_attached_to_package_logger(self, tmp_path):
        """Test console handler installation"""
        manager = LogManager(make_config(tmp_path))
        manager.initialize()

        package_logger = logging.getLogger(PACKAGE_LOGGER)
        try:
            assert len(manager.handlers) == 1
            assert manager.handlers[0] in package_logger.handlers
            assert package_logger.level == logging.INFO
        finally:
            manager.shutdown()

        assert manager.handlers == []

    def test_file_handler_writes_json(self, tmp_path):
        """Test rotating file handler with JSON output"""
        config = make_config(
            tmp_path,
            console_handler_enabled=False,
            file_handler_enabled=True,
            json_format=True
        )
        manager = LogManager(config)
        manager.initialize()

        try:
            manager.get_logger("panels").warning("無法附加反應")
            for handler in manager.handlers:
                handler.flush()

            log_file = tmp_path / "logs" / "reaction_embeds.log"
            line = log_file.read_text(encoding="utf-8").strip().splitlines()[-1]
            data = json.loads(line)
        finally:
            manager.shutdown()

        assert data["logger"] == "reaction_embeds.panels"
        assert data["message"] == "無法附加反應"

    def test_get_logger_prefix(self, tmp_path):
        """Test logger names are placed below the package logger"""
        manager = LogManager(make_config(tmp_path, console_handler_enabled=False))

        try:
            assert manager.get_logger("collector").name == "reaction_embeds.collector"
            assert manager.get_logger("reaction_embeds.panels").name == "reaction_embeds.panels"
        finally:
            manager.shutdown()

    def test_invalid_level(self, tmp_path):
        """Test unknown level raises configuration error"""
        manager = LogManager(make_config(tmp_path, level="LOUD"))

        with pytest.raises(ConfigurationError):
            manager.initialize()


class TestGlobalLogging:
    """Test the global logging functions"""

    def test_initialize_and_shutdown(self, tmp_path):
        """Test global initialization replaces previous handlers"""
        package_logger = logging.getLogger(PACKAGE_LOGGER)
        before = len(package_logger.handlers)

        initialize_logging(make_config(tmp_path))
        initialize_logging(make_config(tmp_path))
        assert len(package_logger.handlers) == before + 1

        shutdown_logging()
        assert len(package_logger.handlers) == before

    def test_get_logger_loads_global_config(self):
        """Test get_logger initializes logging from global config"""
        logger = get_logger("events")

        assert logger.name == "reaction_embeds.events"
