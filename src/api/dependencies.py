"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.config.settings import Settings, get_settings
from src.domain.admin import AdminService
from src.domain.notifications import NotificationDispatcher
from src.domain.ports import EmailNotifier, KeyValueStore, NotificationPolicy
from src.domain.records import WaitlistRecords
from src.domain.registration import RegistrationService
from src.domain.verification import VerificationService


def get_store(request: Request) -> KeyValueStore:
    """
    Get key-value store from app state.

    The store is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.store


def get_notifier(request: Request) -> EmailNotifier:
    """Get email notifier from app state."""
    return request.app.state.notifier


def get_records(store: KeyValueStore = Depends(get_store)) -> WaitlistRecords:
    return WaitlistRecords(store)


def get_dispatcher(
    notifier: EmailNotifier = Depends(get_notifier),
    settings: Settings = Depends(get_settings),
) -> NotificationDispatcher:
    """Wrap the notifier with the configured failure policy."""
    return NotificationDispatcher(
        notifier=notifier,
        policy=NotificationPolicy(settings.notification_failure_policy),
    )


def get_registration_service(
    records: WaitlistRecords = Depends(get_records),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
    settings: Settings = Depends(get_settings),
) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Wires together the records, notifier and link base URL for the domain service.
    """
    return RegistrationService(
        records=records,
        notifications=dispatcher,
        public_base_url=settings.public_base_url,
    )


def get_verification_service(
    records: WaitlistRecords = Depends(get_records),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> VerificationService:
    return VerificationService(records=records, notifications=dispatcher)


def get_admin_service(
    records: WaitlistRecords = Depends(get_records),
    settings: Settings = Depends(get_settings),
) -> AdminService:
    return AdminService(
        records=records,
        admin_password=settings.admin_password,
        session_ttl_seconds=settings.admin_session_ttl_seconds,
    )


# Bearer security scheme for OpenAPI documentation.
# auto_error is off so a missing header reaches the domain as AuthError (401).
http_bearer = HTTPBearer(auto_error=False)


def get_bearer_credential(
    credentials: HTTPAuthorizationCredentials | None = Depends(http_bearer),
) -> str | None:
    """
    Extract the credential from an "Authorization: Bearer <value>" header.

    The value is either the admin secret or a session token from login.
    Returns None when the header is missing or uses another scheme.
    """
    if credentials is None:
        return None
    return credentials.credentials
