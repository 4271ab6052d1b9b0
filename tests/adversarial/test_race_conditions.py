"""
Adversarial tests for race conditions.

Verifies that concurrent operations keep the waitlist consistent:
- Concurrent registrations never share or skip a position
- Concurrent registrations of the same email produce one record
- A verification token succeeds exactly once under concurrent use

Runs the domain services against the in-memory store from many
threads, as FastAPI does when serving concurrent requests.
"""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from src.adapters.store.memory import InMemoryKeyValueStore
from src.domain.exceptions import ConflictError, NotFoundError
from src.domain.notifications import NotificationDispatcher
from src.domain.records import WaitlistRecords
from src.domain.registration import RegistrationService
from src.domain.verification import VerificationService
from tests.factories import RecordingNotifier, signature, wallet

# Apply adversarial marker to all tests in this module
pytestmark = pytest.mark.adversarial


class SlowListingStore(InMemoryKeyValueStore):
    """
    Store that pauses after listing keys.

    Widens the window between counting positions and claiming one, so
    that concurrent registrations reliably read the same count.
    """

    def list_keys(self, prefix: str = "") -> list[str]:
        keys = super().list_keys(prefix)
        threading.Event().wait(0.01)
        return keys


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return SlowListingStore()


@pytest.fixture
def services(store: InMemoryKeyValueStore) -> tuple[RegistrationService, VerificationService]:
    records = WaitlistRecords(store)
    dispatcher = NotificationDispatcher(RecordingNotifier())
    return (
        RegistrationService(records=records, notifications=dispatcher),
        VerificationService(records=records, notifications=dispatcher),
    )


class TestConcurrentRegistration:
    def test_positions_unique_and_dense(
        self,
        services: tuple[RegistrationService, VerificationService],
        store: InMemoryKeyValueStore,
    ) -> None:
        """
        Attack scenario: a burst of sign-ups all read the same position count.

        Expected defense: the put_if_absent claim loop hands out 1..N with
        no duplicates and no gaps.
        """
        registration, _ = services
        num_users = 40

        with ThreadPoolExecutor(max_workers=20) as executor:
            results = list(
                executor.map(
                    lambda i: registration.register(f"user{i}@x.com", wallet(i + 1), signature()),
                    range(num_users),
                )
            )

        positions = sorted(result.position for result in results)
        assert positions == list(range(1, num_users + 1)), f"Duplicate or missing positions: {positions}"

        # Every position index points at the email that owns it
        for result in results:
            assert store.get(f"position:{result.position}") == result.email

    def test_same_email_registered_once(
        self,
        services: tuple[RegistrationService, VerificationService],
        store: InMemoryKeyValueStore,
    ) -> None:
        """
        Attack scenario: the same email is submitted many times at once with
        different wallets, so every request passes the duplicate lookup.

        Expected defense: the atomic email claim lets exactly one win; the
        losers release their positions and leave no wallet copies behind.
        """
        registration, _ = services
        outcomes: list[str] = []
        outcomes_lock = threading.Lock()

        def attempt(i: int) -> None:
            try:
                registration.register("dup@x.com", wallet(i + 1), signature())
                outcome = "ok"
            except ConflictError:
                outcome = "conflict"
            with outcomes_lock:
                outcomes.append(outcome)

        with ThreadPoolExecutor(max_workers=10) as executor:
            list(executor.map(attempt, range(10)))

        assert outcomes.count("ok") == 1
        assert outcomes.count("conflict") == 9
        assert len(store.list_keys("position:")) == 1
        assert len(store.list_keys("wallet:")) == 1
        assert len(store.list_keys("verify:")) == 1

    def test_naive_count_then_write_would_collide(self, store: InMemoryKeyValueStore) -> None:
        """
        Demonstrates the race the claim loop fixes: concurrent callers that
        count positions at the same time all compute the same next value.
        """
        records = WaitlistRecords(store)
        barrier = threading.Barrier(5)

        def naive_next_position(_: int) -> int:
            barrier.wait()
            return records.count_positions() + 1

        with ThreadPoolExecutor(max_workers=5) as executor:
            naive = list(executor.map(naive_next_position, range(5)))

        assert set(naive) == {1}


class TestConcurrentVerification:
    def test_token_succeeds_exactly_once(
        self,
        services: tuple[RegistrationService, VerificationService],
        store: InMemoryKeyValueStore,
    ) -> None:
        """
        Attack scenario: the same verification link is opened many times at once.

        Expected defense: the token is consumed atomically; one call wins,
        all others get NotFound.
        """
        registration, verification = services
        registration.register("a@x.com", wallet(1), signature())
        token = WaitlistRecords(store).get_by_email("a@x.com").verification_token

        outcomes: list[str] = []
        outcomes_lock = threading.Lock()

        def attempt(_: int) -> None:
            try:
                verification.verify(token)
                outcome = "ok"
            except NotFoundError:
                outcome = "not_found"
            with outcomes_lock:
                outcomes.append(outcome)

        with ThreadPoolExecutor(max_workers=10) as executor:
            list(executor.map(attempt, range(10)))

        assert outcomes.count("ok") == 1
        assert outcomes.count("not_found") == 9
        assert WaitlistRecords(store).get_by_email("a@x.com").verified is True
