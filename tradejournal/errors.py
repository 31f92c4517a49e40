"""Error types for TradeJournal."""

from typing import Literal, Optional


class JournalError(Exception):
    """Base class for all TradeJournal errors."""

    def __init__(self, message: str, code: str = "JOURNAL_ERROR", recoverable: bool = True):
        super().__init__(message)
        self.message = message
        self.code = code
        self.recoverable = recoverable


class ValidationError(JournalError, ValueError):
    """Raised when a trade or its inputs fail validation.

    Args:
        message: Human readable reason.
        field: Name of the offending field, if known.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, code="VALIDATION_ERROR", recoverable=True)
        self.field = field


class StorageError(JournalError):
    """Raised when a trade snapshot cannot be read or written."""

    def __init__(self, message: str, operation: Literal["read", "write", "delete"]):
        super().__init__(message, code="STORAGE_ERROR", recoverable=True)
        self.operation = operation


class ConfigError(JournalError):
    """Raised when the configuration file is unreadable or invalid."""

    def __init__(self, message: str):
        super().__init__(message, code="CONFIG_ERROR", recoverable=False)


def user_message(error: BaseException) -> str:
    """Translate an error into a message suitable for the user.

    Args:
        error: Any exception raised while running a command.

    Returns:
        A short sentence describing what went wrong.
    """
    if isinstance(error, ValidationError):
        return error.message

    if isinstance(error, StorageError):
        if error.operation == "read":
            return f"Failed to load trades. {error.message}"
        if error.operation == "write":
            return f"Failed to save trades. {error.message}"
        return f"Failed to delete trades. {error.message}"

    if isinstance(error, ConfigError):
        return f"Invalid configuration. {error.message}"

    if isinstance(error, JournalError):
        if error.recoverable:
            return "Something went wrong. Please try again."
        return "A critical error occurred."

    return "An unexpected error occurred."
