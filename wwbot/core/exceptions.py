"""Custom exceptions for wwbot."""

from typing import Optional


class WWBotException(Exception):
    """Base exception for all wwbot errors."""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self):
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ReadOnlyError(WWBotException):
    """Raised when trying to assign a read-only property."""

    def __init__(self, prop_name: Optional[str] = None, custom_msg: Optional[str] = None):
        self.prop_name = prop_name
        if prop_name:
            message = f"'{prop_name}' is a read-only property."
        else:
            message = custom_msg or "Read-only property."
        super().__init__(message)


class InvalidArgumentsError(WWBotException):
    """Raised when an operation receives structurally invalid arguments."""

    pass


class IncompatibleConfigurationError(WWBotException):
    """Raised when something doesn't work with the current configuration."""

    pass


class EventsSupportError(IncompatibleConfigurationError):
    """Raised when events are necessary but not supported."""

    def __init__(self, custom_msg: Optional[str] = None):
        super().__init__(custom_msg or "Events are not supported.")


class ConfigurationError(WWBotException):
    """Raised when game configuration is invalid."""

    pass


class InvalidActionError(WWBotException):
    """Raised when an invalid game action is attempted."""

    pass


class InvalidStateError(WWBotException):
    """Raised when the game is used in the wrong phase or is inconsistent."""

    pass


class ChatError(WWBotException):
    """Raised when the chat surface cannot resolve or reach a user."""

    pass
