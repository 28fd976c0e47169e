"""Custom exceptions for the yard billing system."""


class YardBillingException(Exception):
    """Base exception for yard billing errors."""
    pass


class InvalidWindowError(YardBillingException):
    """Raised when a billing window ends before it starts."""
    pass


class ValidationError(YardBillingException):
    """Raised when data validation fails."""
    pass


class ClientNotFoundError(YardBillingException):
    """Raised when client is not found."""
    pass


class ConfigurationError(YardBillingException):
    """Raised when configuration is invalid or missing."""
    pass


class StorageFailureError(YardBillingException):
    """Raised when the movement, rate or audit store cannot be reached."""
    pass
