"""
Waitlist records - Data access over the key-value store port.

Wraps the raw string store with the waitlist key layout: the
registration record is duplicated under its email and wallet keys,
positions and verification tokens are index keys pointing at the email.
"""

import logging
from dataclasses import dataclass

from .exceptions import ConflictError
from .models import (
    POSITION_PREFIX,
    Registration,
    is_user_key,
    position_key,
    verify_key,
    wallet_key,
)
from .ports import KeyValueStore

logger = logging.getLogger(__name__)


@dataclass
class WaitlistRecords:
    """Typed access to registrations and their index keys."""

    store: KeyValueStore

    def load(self, key: str) -> Registration | None:
        raw = self.store.get(key)
        if raw is None:
            return None
        return Registration.from_json(raw)

    def get_by_email(self, email: str) -> Registration | None:
        return self.load(email)

    def get_by_wallet(self, wallet_address: str) -> Registration | None:
        return self.load(wallet_key(wallet_address))

    def save(self, registration: Registration) -> None:
        """
        Write both copies of a registration.

        The two writes are not atomic: a failure between them leaves the
        copies diverged until the next successful save.
        """
        payload = registration.to_json()
        self.store.put(registration.email, payload)
        self.store.put(wallet_key(registration.wallet_address), payload)

    def insert(self, registration: Registration) -> None:
        """
        Write both copies of a new registration, claiming each key atomically.

        The email key is claimed first, then the wallet key. If the wallet
        key is taken the email claim is undone.

        Raises:
            ConflictError: If either key already holds a registration
        """
        payload = registration.to_json()
        if not self.store.put_if_absent(registration.email, payload):
            raise ConflictError("Email already registered")
        if not self.store.put_if_absent(wallet_key(registration.wallet_address), payload):
            self.store.delete(registration.email)
            raise ConflictError("Wallet address already registered")

    def count_positions(self) -> int:
        return len(self.store.list_keys(POSITION_PREFIX))

    def claim_position(self, email: str) -> int:
        """
        Assign the next free position to email.

        Starts from the current position count and claims position:<n>
        with put_if_absent, moving on to n + 1 whenever another
        registration got there first. Positions stay unique and dense
        under concurrent callers.
        """
        position = self.count_positions() + 1
        while not self.store.put_if_absent(position_key(position), email):
            logger.debug("Position %d already taken, retrying with %d", position, position + 1)
            position += 1
        return position

    def release_position(self, position: int) -> None:
        self.store.delete(position_key(position))

    def put_token(self, token: str, email: str) -> None:
        self.store.put(verify_key(token), email)

    def take_token(self, token: str) -> str | None:
        """Consume a verification token, returning its email (None if unknown or used)."""
        return self.store.pop(verify_key(token))

    def user_keys(self) -> list[str]:
        """Primary record keys, sorted lexically (by email)."""
        return sorted(key for key in self.store.list_keys() if is_user_key(key))

    def all_users(self) -> list[Registration]:
        users = []
        for key in self.user_keys():
            registration = self.load(key)
            if registration is not None:
                users.append(registration)
        return users
