"""
Domain exceptions - Semantic error types for the waitlist.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
The API layer maps each type onto an HTTP status code.
"""


class WaitlistError(Exception):
    """Base class for waitlist domain errors."""

    pass


class ValidationError(WaitlistError):
    """Input is missing or malformed."""

    pass


class ConflictError(WaitlistError):
    """Email or wallet address is already registered."""

    pass


class NotFoundError(WaitlistError):
    """Email, token or registration record does not exist."""

    pass


class AuthError(WaitlistError):
    """Admin credential is missing or invalid."""

    pass


class StoreError(WaitlistError):
    """Key-value store operation failed."""

    pass


class NotifierError(WaitlistError):
    """Email notification could not be delivered."""

    pass
