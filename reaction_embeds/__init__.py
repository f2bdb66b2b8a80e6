"""
reaction_embeds
Task ID: R2

Interactive Discord embeds driven by message reactions:

- panels/: InteractiveEmbed and PaginatedEmbed
- core/: reaction collector, event emitter, errors, config and logging
"""

from .core import (
    AppConfig,
    AppError,
    CollectorEndReason,
    ConfigurationError,
    EventEmitter,
    InteractionConfig,
    ReactionCollector,
    ValidationError,
    get_config,
    get_logger,
    initialize_logging,
    load_config,
)
from .panels import InteractiveEmbed, PaginatedEmbed

__version__ = "1.0.0"

__all__ = [
    # Panels
    'InteractiveEmbed',
    'PaginatedEmbed',

    # Collector and events
    'ReactionCollector',
    'CollectorEndReason',
    'EventEmitter',

    # Configuration
    'AppConfig',
    'InteractionConfig',
    'get_config',
    'load_config',

    # Logging
    'get_logger',
    'initialize_logging',

    # Errors
    'AppError',
    'ValidationError',
    'ConfigurationError',
]
