"""
Core module for reaction_embeds
Task ID: R1

This module provides the infrastructure shared by the panels:
- Error handling system
- Configuration management
- Logging system
- Named event emitter and reaction collector
"""

from .errors import AppError, ValidationError, ConfigurationError
from .config import AppConfig, InteractionConfig, LoggingConfig, get_config, load_config
from .logging import get_logger, initialize_logging, shutdown_logging
from .events import EventEmitter
from .collector import CollectorEndReason, ReactionCollector

__all__ = [
    # Error handling
    'AppError',
    'ValidationError',
    'ConfigurationError',

    # Configuration
    'AppConfig',
    'InteractionConfig',
    'LoggingConfig',
    'get_config',
    'load_config',

    # Logging
    'get_logger',
    'initialize_logging',
    'shutdown_logging',

    # Events
    'EventEmitter',
    'CollectorEndReason',
    'ReactionCollector',
]
