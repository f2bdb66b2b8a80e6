"""
Library Logging System
Task ID: R1 - Reaction embeds core

This module configures the ``reaction_embeds`` package logger.
Library modules log through ``logging.getLogger(__name__)``; nothing is
printed until the host calls :func:`initialize_logging`.
"""

import logging
import logging.handlers
import sys
import json
from typing import Optional, Dict
from pathlib import Path
from datetime import datetime, timezone

from .config import AppConfig, load_config
from .errors import ConfigurationError

PACKAGE_LOGGER = "reaction_embeds"

# LogRecord attributes that are never copied into JSON output
_RESERVED_ATTRS = frozenset([
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename',
    'module', 'lineno', 'funcName', 'created', 'msecs', 'relativeCreated',
    'thread', 'threadName', 'processName', 'process', 'exc_info', 'exc_text',
    'stack_info', 'taskName', 'message',
])


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging
    """

    def __init__(self, include_extra: bool = True):
        """
        Initialize JSON formatter

        Args:
            include_extra: Whether to include extra fields in JSON output
        """
        super().__init__()
        self.include_extra = include_extra

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as JSON

        Args:
            record: Log record to format

        Returns:
            JSON formatted log string
        """
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        if self.include_extra:
            for key, value in record.__dict__.items():
                if key not in _RESERVED_ATTRS:
                    log_data[key] = value

        return json.dumps(log_data, default=str, ensure_ascii=False)


class LogManager:
    """
    Logging manager for the library

    Attaches console and rotating file handlers to the package logger so
    every ``reaction_embeds.*`` module logger propagates into them.
    """

    def __init__(self, config: Optional[AppConfig] = None):
        """
        Initialize the logging manager

        Args:
            config: Library configuration (loads the global config if not provided)
        """
        self.config = config or load_config()
        self.loggers: Dict[str, logging.Logger] = {}
        self.handlers = []
        self._initialized = False

    def initialize(self) -> None:
        """Initialize the logging system"""
        if self._initialized:
            return

        settings = self.config.logging
        try:
            package_logger = logging.getLogger(PACKAGE_LOGGER)
            package_logger.setLevel(getattr(logging, settings.level.upper()))

            if settings.console_handler_enabled:
                console_handler = logging.StreamHandler(sys.stdout)
                console_handler.setFormatter(self._build_formatter())
                self._attach(package_logger, console_handler)

            if settings.file_handler_enabled:
                log_dir = Path(settings.log_directory)
                log_dir.mkdir(parents=True, exist_ok=True)

                file_handler = logging.handlers.RotatingFileHandler(
                    log_dir / settings.log_file,
                    maxBytes=settings.max_file_size,
                    backupCount=settings.backup_count,
                    encoding='utf-8'
                )
                file_handler.setFormatter(self._build_formatter())
                self._attach(package_logger, file_handler)

            self._initialized = True

        except (OSError, AttributeError) as e:
            raise ConfigurationError(
                "logging_initialization",
                f"Failed to initialize logging system: {str(e)}",
                cause=e
            )

    def _build_formatter(self) -> logging.Formatter:
        if self.config.logging.json_format:
            return JSONFormatter()
        return logging.Formatter(self.config.logging.format)

    def _attach(self, logger: logging.Logger, handler: logging.Handler) -> None:
        logger.addHandler(handler)
        self.handlers.append(handler)

    def get_logger(self, name: str) -> logging.Logger:
        """
        Get a logger below the package logger

        Args:
            name: Logger name, with or without the package prefix

        Returns:
            Logger instance
        """
        if not self._initialized:
            self.initialize()

        if not name.startswith(PACKAGE_LOGGER):
            name = f"{PACKAGE_LOGGER}.{name}"

        if name not in self.loggers:
            self.loggers[name] = logging.getLogger(name)

        return self.loggers[name]

    def shutdown(self) -> None:
        """Detach and close every handler this manager installed"""
        package_logger = logging.getLogger(PACKAGE_LOGGER)
        for handler in self.handlers:
            package_logger.removeHandler(handler)
            handler.close()

        self.handlers.clear()
        self.loggers.clear()
        self._initialized = False


# Global logging manager instance
_log_manager: Optional[LogManager] = None


def get_log_manager() -> LogManager:
    """Get the global logging manager instance"""
    global _log_manager
    if _log_manager is None:
        _log_manager = LogManager()
        _log_manager.initialize()
    return _log_manager


def get_logger(name: str) -> logging.Logger:
    """Get a logger by name"""
    return get_log_manager().get_logger(name)


def initialize_logging(config: Optional[AppConfig] = None) -> None:
    """Initialize the logging system"""
    global _log_manager
    if _log_manager is not None:
        _log_manager.shutdown()
    _log_manager = LogManager(config)
    _log_manager.initialize()


def shutdown_logging() -> None:
    """Shutdown the logging system"""
    global _log_manager
    if _log_manager:
        _log_manager.shutdown()
        _log_manager = None
