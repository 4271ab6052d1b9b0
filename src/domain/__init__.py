"""
Domain layer - Waitlist business logic with zero web framework imports.

This package contains the core registration, verification and admin
query logic. It defines its own port interfaces for infrastructure
abstraction, ensuring true hexagonal architecture decoupling.
"""

from .admin import AdminService
from .exceptions import (
    AuthError,
    ConflictError,
    NotFoundError,
    NotifierError,
    StoreError,
    ValidationError,
    WaitlistError,
)
from .models import Registration, RegistrationResult, VerificationResult
from .notifications import NotificationDispatcher
from .ports import EmailMessage, EmailNotifier, KeyValueStore, ListingOrder, NotificationPolicy
from .records import WaitlistRecords
from .registration import RegistrationService
from .verification import VerificationService

__all__ = [
    "AdminService",
    "AuthError",
    "ConflictError",
    "EmailMessage",
    "EmailNotifier",
    "KeyValueStore",
    "ListingOrder",
    "NotFoundError",
    "NotificationDispatcher",
    "NotificationPolicy",
    "NotifierError",
    "Registration",
    "RegistrationResult",
    "RegistrationService",
    "StoreError",
    "ValidationError",
    "VerificationResult",
    "VerificationService",
    "WaitlistError",
    "WaitlistRecords",
]
