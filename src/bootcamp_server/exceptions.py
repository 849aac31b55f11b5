"""
Custom exception hierarchy for the bootcamp server.

Each exception carries a context dict for structured logging.
"""


class BootcampServerError(Exception):
    """Base exception for all bootcamp server errors."""

    def __init__(self, message: str, context: dict = None):
        self.context = context or {}
        super().__init__(message)


class ConfigurationError(BootcampServerError):
    """Raised when configuration is invalid."""
    pass


class BindError(BootcampServerError):
    """Raised when the HTTP listener cannot bind its address."""
    pass
