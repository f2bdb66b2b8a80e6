"""
Unit tests for reaction_embeds.core.errors module
Task ID: R1 - Reaction embeds core
"""

from datetime import datetime

from reaction_embeds.core.errors import AppError, ValidationError, ConfigurationError


class TestAppError:
    """Test the base AppError class"""

    def test_basic_initialization(self):
        """Test basic error initialization"""
        error = AppError("Test message")

        assert error.message == "Test message"
        assert error.error_code == "APPERROR"
        assert error.details == {}
        assert error.cause is None
        assert isinstance(error.timestamp, datetime)
        assert str(error) == "Test message (Code: APPERROR)"

    def test_to_dict(self):
        """Test error dictionary conversion"""
        cause = ValueError("Original error")
        error = AppError("Test message", error_code="TEST_001", details={"key": "value"}, cause=cause)

        error_dict = error.to_dict()

        assert error_dict["error_type"] == "AppError"
        assert error_dict["error_code"] == "TEST_001"
        assert error_dict["details"] == {"key": "value"}
        assert error_dict["cause"] == "Original error"


class TestValidationError:
    """Test the ValidationError class"""

    def test_default_message(self):
        """Test validation error default message and details"""
        error = ValidationError("embeds", [], "non-empty sequence required")

        assert isinstance(error, AppError)
        assert error.error_code == "VALIDATION_ERROR"
        assert error.field == "embeds"
        assert error.value == "[]"
        assert error.message == "Validation failed for field 'embeds': non-empty sequence required"
        assert error.details["validation_rule"] == "non-empty sequence required"

    def test_value_truncated(self):
        """Test long values are truncated"""
        error = ValidationError("emojis", "x" * 500, "too long")

        assert len(error.value) == 100

    def test_custom_message(self):
        """Test custom message overrides the default"""
        error = ValidationError("embeds", None, "required", message="At least 1 Embed")

        assert error.message == "At least 1 Embed"
        assert error.value is None


class TestConfigurationError:
    """Test the ConfigurationError class"""

    def test_initialization(self):
        """Test configuration error"""
        cause = KeyError("idle")
        error = ConfigurationError("interaction.idle_timeout", "must be positive", cause=cause)

        assert error.config_key == "interaction.idle_timeout"
        assert error.error_code == "CONFIG_ERROR"
        assert error.message == "Configuration error for 'interaction.idle_timeout': must be positive"
        assert error.cause is cause
