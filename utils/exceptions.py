"""
Custom exceptions with user-friendly error messages.
"""

class RankedBotError(Exception):
    """Base exception for errors that are reported back to the requester."""
    kind = 'error'

    def __init__(self, message: str, user_message: str = None):
        super().__init__(message)
        self.user_message = user_message or message


class NotFoundError(RankedBotError):
    """Raised when there is no active room or no configured channel."""
    kind = 'not_found'


class ForbiddenError(RankedBotError):
    """Raised when the requester lacks the required authority."""
    kind = 'forbidden'


class ConfigurationError(RankedBotError):
    """Raised when a required guild setting is missing."""
    kind = 'configuration'


class ExternalCallFailure(RankedBotError):
    """Raised when a Discord call (channel, permission or message) fails."""
    kind = 'external_call'

    def __init__(self, operation: str, details: str = None, user_message: str = None):
        super().__init__(
            f"Discord call failed during {operation}: {details}",
            user_message or f"Failed to {operation}. Please try again or contact an administrator."
        )
        self.operation = operation
