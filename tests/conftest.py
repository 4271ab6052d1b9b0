"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- In-memory key-value store and typed records
- Recording email notifier
- Domain services wired together
"""

import pytest

from src.adapters.store.memory import InMemoryKeyValueStore
from src.domain.admin import AdminService
from src.domain.notifications import NotificationDispatcher
from src.domain.records import WaitlistRecords
from src.domain.registration import RegistrationService
from src.domain.verification import VerificationService
from tests.factories import ADMIN_PASSWORD, FIXED_NOW, RecordingNotifier


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def records(store: InMemoryKeyValueStore) -> WaitlistRecords:
    return WaitlistRecords(store)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def dispatcher(notifier: RecordingNotifier) -> NotificationDispatcher:
    return NotificationDispatcher(notifier=notifier)


@pytest.fixture
def registration_service(
    records: WaitlistRecords, dispatcher: NotificationDispatcher
) -> RegistrationService:
    return RegistrationService(
        records=records,
        notifications=dispatcher,
        public_base_url="https://waitlist.example.com",
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def verification_service(
    records: WaitlistRecords, dispatcher: NotificationDispatcher
) -> VerificationService:
    return VerificationService(records=records, notifications=dispatcher)


@pytest.fixture
def admin_service(records: WaitlistRecords) -> AdminService:
    return AdminService(records=records, admin_password=ADMIN_PASSWORD, session_ttl_seconds=60)
