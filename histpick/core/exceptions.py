"""Custom exceptions for histpick."""


class HistPickError(Exception):
    """Base class for histpick errors."""


class ConfigurationError(HistPickError):
    """Raised when configuration refers to something the host does not provide."""

    def __init__(self, message: str, name: str | None = None):
        self.name = name
        super().__init__(message)
