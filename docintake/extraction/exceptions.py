class ExtractionError(Exception):
    """Raised when structured extraction fails."""


class ExtractionValidationError(ExtractionError):
    """Raised when the provider response does not describe valid fields."""


class ExtractionNetworkError(ExtractionError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
