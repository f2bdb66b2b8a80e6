"""
Configuration Management System
Task ID: R1 - Reaction embeds core

This module provides centralized configuration for the reaction_embeds library.
It supports environment variables, configuration files, and environment-specific settings.
"""

import os
import json
import yaml
from typing import Any, Dict, Optional
from pathlib import Path
from dataclasses import dataclass, field
from enum import Enum

from .errors import ConfigurationError


class Environment(Enum):
    """Host application environment types"""
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


@dataclass
class InteractionConfig:
    """Reaction collector and pagination settings"""
    idle_timeout: float = 60.0  # seconds since last qualifying reaction
    time_limit: float = 180.0  # seconds since the collector was armed
    strict_emoji_filter: bool = False
    previous_emoji: str = "⬅"
    next_emoji: str = "➡"
    page_separator: str = " • "


@dataclass
class LoggingConfig:
    """Logging configuration settings"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    console_handler_enabled: bool = True
    file_handler_enabled: bool = False
    log_directory: str = "logs"
    log_file: str = "reaction_embeds.log"
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5
    json_format: bool = False


@dataclass
class AppConfig:
    """Main library configuration"""
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = False
    version: str = "1.0.0"

    interaction: InteractionConfig = field(default_factory=InteractionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


class ConfigManager:
    """
    Configuration manager for loading and managing library settings

    Supports multiple configuration sources in order of precedence:
    1. Environment variables
    2. Configuration files (JSON/YAML)
    3. Default values
    """

    def __init__(self,
                 config_dir: Optional[Path] = None,
                 env_prefix: str = "REACTION_EMBEDS_"):
        """
        Initialize the configuration manager

        Args:
            config_dir: Directory containing configuration files
            env_prefix: Prefix for environment variables
        """
        self.config_dir = config_dir or Path.cwd()
        self.env_prefix = env_prefix
        self._config: Optional[AppConfig] = None

    def load_config(self,
                    environment: Optional[str] = None,
                    config_file: Optional[str] = None) -> AppConfig:
        """
        Load configuration from all sources

        Args:
            environment: Target environment (development, testing, production)
            config_file: Specific configuration file to load

        Returns:
            Loaded configuration
        """
        if self._config is not None:
            return self._config

        try:
            config = AppConfig()

            env_name = (environment or
                        os.getenv(f"{self.env_prefix}ENVIRONMENT", "development"))

            try:
                config.environment = Environment(env_name.lower())
            except ValueError:
                raise ConfigurationError(
                    "environment",
                    f"Invalid environment: {env_name}"
                )

            config_file_path = self._find_config_file(config_file, config.environment)
            if config_file_path:
                file_config = self._load_config_file(config_file_path)
                config = self._merge_config(config, file_config)

            config = self._load_from_environment(config)

            self._validate_config(config)

            self._config = config

            return config

        except Exception as e:
            if isinstance(e, ConfigurationError):
                raise
            raise ConfigurationError(
                "config_loading",
                f"Failed to load configuration: {str(e)}",
                cause=e
            )

    def _find_config_file(self,
                          config_file: Optional[str],
                          environment: Environment) -> Optional[Path]:
        """Find the appropriate configuration file"""
        if config_file:
            path = Path(config_file)
            if not path.is_absolute():
                path = self.config_dir / path
            return path if path.exists() else None

        possible_files = [
            f"reaction_embeds.{environment.value}.json",
            f"reaction_embeds.{environment.value}.yml",
            f"reaction_embeds.{environment.value}.yaml",
            "reaction_embeds.json",
            "reaction_embeds.yml",
            "reaction_embeds.yaml",
        ]

        for filename in possible_files:
            path = self.config_dir / filename
            if path.exists():
                return path

        return None

    def _load_config_file(self, config_file: Path) -> Dict[str, Any]:
        """Load configuration from a file"""
        suffix = config_file.suffix.lower()
        if suffix not in ('.yml', '.yaml', '.json'):
            raise ConfigurationError(
                "config_file_format",
                f"Unsupported configuration file format: {config_file.suffix}"
            )

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                if suffix == '.json':
                    return json.load(f) or {}
                return yaml.safe_load(f) or {}
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigurationError(
                "config_file_read",
                f"Failed to read configuration file {config_file}: {str(e)}",
                cause=e
            )

    def _merge_config(self, base_config: AppConfig, file_config: Dict[str, Any]) -> AppConfig:
        """Merge file configuration into base configuration"""
        for key, value in file_config.items():
            if not hasattr(base_config, key):
                continue
            if key == "environment":
                continue
            if isinstance(value, dict) and hasattr(getattr(base_config, key), '__dict__'):
                nested_config = getattr(base_config, key)
                for nested_key, nested_value in value.items():
                    if hasattr(nested_config, nested_key):
                        setattr(nested_config, nested_key, nested_value)
            else:
                setattr(base_config, key, value)

        return base_config

    def _load_from_environment(self, config: AppConfig) -> AppConfig:
        """Load configuration values from environment variables"""
        env_mappings = {
            # Interaction configuration
            f"{self.env_prefix}IDLE_TIMEOUT": ("interaction", "idle_timeout", float),
            f"{self.env_prefix}TIME_LIMIT": ("interaction", "time_limit", float),
            f"{self.env_prefix}STRICT_EMOJI_FILTER": ("interaction", "strict_emoji_filter", bool),
            f"{self.env_prefix}PREVIOUS_EMOJI": ("interaction", "previous_emoji"),
            f"{self.env_prefix}NEXT_EMOJI": ("interaction", "next_emoji"),

            # Logging configuration
            f"{self.env_prefix}LOG_LEVEL": ("logging", "level"),
            f"{self.env_prefix}LOG_DIRECTORY": ("logging", "log_directory"),
            f"{self.env_prefix}LOG_FILE_ENABLED": ("logging", "file_handler_enabled", bool),
            f"{self.env_prefix}LOG_CONSOLE_ENABLED": ("logging", "console_handler_enabled", bool),
            f"{self.env_prefix}LOG_JSON": ("logging", "json_format", bool),

            # General settings
            f"{self.env_prefix}DEBUG": ("debug", None, bool),
        }

        for env_var, mapping in env_mappings.items():
            value = os.getenv(env_var)
            if value is None:
                continue
            try:
                if len(mapping) == 2:
                    section, attr = mapping
                    converter = str
                else:
                    section, attr, converter = mapping

                if converter == bool:
                    converted_value = value.lower() in ('true', '1', 'yes', 'on')
                elif converter == float:
                    converted_value = float(value)
                else:
                    converted_value = value

                if attr is None:
                    setattr(config, section, converted_value)
                else:
                    nested_config = getattr(config, section)
                    setattr(nested_config, attr, converted_value)

            except (ValueError, AttributeError) as e:
                raise ConfigurationError(
                    env_var,
                    f"Invalid value for environment variable {env_var}: {value}",
                    cause=e
                )

        return config

    def _validate_config(self, config: AppConfig) -> None:
        """Validate the loaded configuration"""
        validate_interaction_config(config.interaction)

        if config.logging.level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ConfigurationError(
                "logging.level",
                f"Unknown log level: {config.logging.level}"
            )

    def get_config(self) -> AppConfig:
        """Get the current configuration"""
        if self._config is None:
            raise ConfigurationError(
                "config_not_loaded",
                "Configuration not loaded. Call load_config() first."
            )
        return self._config

    def reload_config(self) -> AppConfig:
        """Reload configuration from sources"""
        self._config = None
        return self.load_config()


def validate_interaction_config(interaction: InteractionConfig) -> None:
    """Reject timeouts and emojis the collector cannot work with"""
    validations = [
        (
            interaction.idle_timeout <= 0,
            "interaction.idle_timeout",
            f"Idle timeout must be positive, got {interaction.idle_timeout}"
        ),
        (
            interaction.time_limit <= 0,
            "interaction.time_limit",
            f"Time limit must be positive, got {interaction.time_limit}"
        ),
        (
            not interaction.previous_emoji or not interaction.next_emoji,
            "interaction.previous_emoji",
            "Navigation emojis must not be empty"
        ),
        (
            interaction.previous_emoji == interaction.next_emoji,
            "interaction.next_emoji",
            "Navigation emojis must differ"
        ),
    ]

    for condition, field_name, message in validations:
        if condition:
            raise ConfigurationError(field_name, message)


# Global configuration manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance"""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def get_config() -> AppConfig:
    """Get the current configuration"""
    return get_config_manager().get_config()


def load_config(**kwargs) -> AppConfig:
    """Load configuration with optional parameters"""
    return get_config_manager().load_config(**kwargs)


def reset_config() -> None:
    """Drop the cached global configuration"""
    global _config_manager
    _config_manager = None
