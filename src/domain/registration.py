"""
Registration domain service - Waitlist sign-up.

Registration Flow
=================

1. Validate email, wallet address and signature format
2. Reject duplicates: email first, then wallet address
3. Claim the next free position (put_if_absent loop on position:<n>)
4. Generate a single-use verification token
5. Claim the email and wallet keys with put_if_absent, then the token index
6. Send the verification email (best-effort)

Concurrency note: step 2 only rejects duplicates early. Two concurrent
registrations of the same email or wallet can both pass it, and the
atomic claims in step 5 then let exactly one win. The loser releases
its position, which leaves a gap if a later position was claimed in
between.
"""

import logging
import secrets
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from .emails import VERIFICATION
from .exceptions import ConflictError, NotFoundError
from .models import Registration, RegistrationResult, utcnow
from .notifications import NotificationDispatcher
from .records import WaitlistRecords
from .validation import format_address, normalize_email, normalize_network, validate_registration

logger = logging.getLogger(__name__)


@dataclass
class RegistrationService:
    """
    Domain service for waitlist registration.

    Orchestrates the registration flow: validation, duplicate checks,
    position assignment, token generation and persistence.
    """

    records: WaitlistRecords
    notifications: NotificationDispatcher
    public_base_url: str = "http://localhost:5173"
    clock: Callable[[], datetime] = field(default=utcnow)

    def register(
        self,
        email: str,
        wallet_address: str,
        signature: str,
        network: str | None = None,
    ) -> RegistrationResult:
        """
        Register a new waitlist entry.

        Args:
            email: User's email address (will be normalized)
            wallet_address: 0x-prefixed 40 hex character address
            signature: 0x-prefixed 130 hex character signature
            network: Network label or hex chain id

        Returns:
            RegistrationResult with the assigned position

        Raises:
            ValidationError: If any field is missing or malformed
            ConflictError: If the email or wallet is already registered
            StoreError: If the store fails
        """
        validate_registration(email, wallet_address, signature)
        normalized_email = normalize_email(email)

        if self.records.get_by_email(normalized_email) is not None:
            raise ConflictError("Email already registered")
        if self.records.get_by_wallet(wallet_address) is not None:
            raise ConflictError("Wallet address already registered")

        position = self.records.claim_position(normalized_email)
        token = self._generate_verification_token()

        registration = Registration(
            email=normalized_email,
            wallet_address=wallet_address,
            signature=signature,
            network=normalize_network(network),
            joined_at=self.clock(),
            position=position,
            verified=False,
            verification_token=token,
        )
        try:
            self.records.insert(registration)
        except ConflictError:
            # Lost a race with a concurrent registration of the same identity
            self.records.release_position(position)
            raise
        self.records.put_token(token, normalized_email)

        logger.info(
            "Registered %s (wallet %s) at position %d",
            normalized_email,
            format_address(wallet_address),
            position,
        )

        self.notifications.dispatch(
            normalized_email,
            VERIFICATION,
            {
                "VERIFICATION_LINK": self.verification_link(token),
                "EMAIL_ADDRESS": normalized_email,
            },
        )

        return RegistrationResult(
            position=position,
            email=normalized_email,
            wallet_address=wallet_address,
        )

    def lookup(self, email: str) -> Registration:
        """
        Fetch a registration by email.

        Raises:
            NotFoundError: If no registration exists for the email
        """
        registration = self.records.get_by_email(normalize_email(email))
        if registration is None:
            raise NotFoundError("Email not found")
        return registration

    def count(self) -> int:
        """Number of assigned positions."""
        return self.records.count_positions()

    def verification_link(self, token: str) -> str:
        return f"{self.public_base_url.rstrip('/')}/verify?token={token}"

    def _generate_verification_token(self) -> str:
        """
        Generate an unguessable single-use verification token.

        256 bits from the secrets module, URL-safe.
        """
        return secrets.token_urlsafe(32)
