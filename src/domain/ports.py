"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class NotificationPolicy(str, Enum):
    """
    What happens when an email notification cannot be delivered.

    SWALLOW: log the failure, the business operation still succeeds
    PROPAGATE: raise NotifierError to the caller
    """

    SWALLOW = "swallow"
    PROPAGATE = "propagate"


class ListingOrder(str, Enum):
    """
    Ordering contract for the admin user listing.

    EMAIL: pages are cut from the lexically sorted email keys, then each
    page is re-sorted by position for display
    POSITION: pages are cut from the registrations sorted by position
    (join order)
    """

    EMAIL = "email"
    POSITION = "position"


@dataclass(frozen=True)
class EmailMessage:
    """Rendered email content."""

    subject: str
    html: str
    text: str


class KeyValueStore(Protocol):
    """
    Port interface for string key-value persistence.

    Single-key operations are atomic. There are no multi-key
    transactions. Failures raise StoreError.
    """

    def get(self, key: str) -> str | None:
        """Return the value for key, or None if absent."""
        ...

    def put(self, key: str, value: str) -> None:
        """Create or overwrite key."""
        ...

    def put_if_absent(self, key: str, value: str) -> bool:
        """
        Atomically create key if it does not exist.

        Returns:
            True if the key was created, False if it already existed
        """
        ...

    def delete(self, key: str) -> bool:
        """
        Delete key.

        Returns:
            True if the key existed
        """
        ...

    def pop(self, key: str) -> str | None:
        """Atomically delete key and return its previous value (None if absent)."""
        ...

    def list_keys(self, prefix: str = "") -> list[str]:
        """Return all keys starting with prefix, sorted lexically."""
        ...


class EmailNotifier(Protocol):
    """Port interface for email delivery."""

    def send(self, recipient: str, message: EmailMessage) -> None:
        """
        Deliver a rendered email.

        Args:
            recipient: Recipient email address
            message: Rendered subject, HTML and text content

        Raises:
            NotifierError: If delivery fails
        """
        ...
