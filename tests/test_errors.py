"""Tests for error classes."""

from tier_pricing.errors import (
    ConfigFileNotFoundError,
    ConfigurationError,
    InvalidConfigFormatError,
    LastTierError,
    PricingError,
    TierNotFoundError,
    TierValidationError,
)


class TestErrorClasses:
    """Tests for all error classes."""

    def test_pricing_error(self) -> None:
        """Test PricingError base class."""
        error = PricingError("Base error message")
        assert str(error) == "Base error message"

    def test_configuration_error(self) -> None:
        """Test ConfigurationError."""
        error = ConfigurationError("Bad config", path="/tmp/pricing.json")
        assert error.message == "Bad config"
        assert error.path == "/tmp/pricing.json"
        assert isinstance(error, PricingError)

    def test_config_file_not_found_error(self) -> None:
        """Test ConfigFileNotFoundError."""
        error = ConfigFileNotFoundError("Missing", path="missing.json")
        assert isinstance(error, ConfigurationError)
        assert error.path == "missing.json"

    def test_invalid_config_format_error(self) -> None:
        """Test InvalidConfigFormatError."""
        error = InvalidConfigFormatError("Wrong type", expected_type="list")
        assert isinstance(error, ConfigurationError)
        assert error.expected_type == "list"
        assert error.path is None

    def test_last_tier_error(self) -> None:
        """Test LastTierError."""
        assert isinstance(LastTierError("Keep one"), ConfigurationError)

    def test_tier_validation_error(self) -> None:
        """Test TierValidationError."""
        error = TierValidationError("Too many free units", field="free_units", value=150, sequence=2)
        assert str(error) == "Too many free units"
        assert error.field == "free_units"
        assert error.value == 150
        assert error.sequence == 2
        assert isinstance(error, PricingError)
        assert isinstance(error, ValueError)

    def test_tier_not_found_error(self) -> None:
        """Test TierNotFoundError."""
        error = TierNotFoundError("No tier at index 7", index=7)
        assert str(error) == "No tier at index 7"
        assert error.index == 7
        assert isinstance(error, PricingError)
