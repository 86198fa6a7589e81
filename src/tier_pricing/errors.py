"""Error types for the tier pricing visualizer.

This module defines the error types raised while building, loading and
editing pricing configurations. The calculation engine itself never raises
for a structurally valid configuration.
"""

from typing import Any, Optional


class PricingError(Exception):
    """Base class for all pricing-related errors.

    This is the parent class for all package-specific exceptions.
    """

    pass


class ConfigurationError(PricingError):
    """Base class for configuration-related errors.

    This is raised for errors related to configuration values, loading,
    parsing, or editing.
    """

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        """Initialize configuration error.

        Args:
            message: Error message
            path: Optional path to the configuration file that caused the error
        """
        super().__init__(message)
        self.message = message
        self.path = path


class ConfigFileNotFoundError(ConfigurationError):
    """Raised when a requested configuration file is not found.

    Examples:
        >>> try:
        ...     load_config("missing.json")
        ... except ConfigFileNotFoundError as e:
        ...     print(f"Config file not found: {e.path}")
    """

    pass


class InvalidConfigFormatError(ConfigurationError):
    """Raised when a configuration document has an invalid format.

    Examples:
        >>> try:
        ...     loads("[1, 2, 3]")
        ... except InvalidConfigFormatError as e:
        ...     print(f"Invalid config format: {e}")
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        expected_type: str = "dict",
    ) -> None:
        """Initialize invalid format error.

        Args:
            message: Error message
            path: Optional path to the configuration file
            expected_type: Expected type of the document
        """
        super().__init__(message, path)
        self.expected_type = expected_type


class LastTierError(ConfigurationError):
    """Raised when an edit would leave a configuration without tiers."""

    pass


class TierValidationError(PricingError, ValueError):
    """Raised when a tier field holds an out-of-range value.

    Examples:
        >>> try:
        ...     Tier(sequence=1, units=100, free_units=150)
        ... except TierValidationError as e:
        ...     print(f"{e.field} rejected: {e.value}")
    """

    def __init__(
        self,
        message: str,
        field: str,
        value: Any,
        sequence: Optional[int] = None,
    ) -> None:
        """Initialize tier validation error.

        Args:
            message: Error message
            field: The name of the offending field
            value: The value that failed validation
            sequence: Optional sequence number of the tier for context
        """
        super().__init__(message)
        self.message = message
        self.field = field
        self.value = value
        self.sequence = sequence


class TierNotFoundError(PricingError):
    """Raised when a tier index does not exist in a configuration.

    Examples:
        >>> try:
        ...     config.remove_tier(7)
        ... except TierNotFoundError as e:
        ...     print(f"No tier at index {e.index}")
    """

    def __init__(self, message: str, index: int) -> None:
        """Initialize tier not found error.

        Args:
            message: Error message
            index: The index that was requested
        """
        super().__init__(message)
        self.message = message
        self.index = index

    def __str__(self) -> str:
        """Return string representation of the error.

        Returns:
            Error message
        """
        return self.message
