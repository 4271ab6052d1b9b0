"""
Verification domain service - Consumes email verification tokens.

The token index key is consumed with an atomic pop before the record
is updated, so two concurrent calls with the same token cannot both
succeed. If reading or writing the record fails with a StoreError, the
token is put back and the caller can retry.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from .emails import WELCOME
from .exceptions import NotFoundError, StoreError, ValidationError
from .models import VerificationResult, utcnow
from .notifications import NotificationDispatcher
from .records import WaitlistRecords

logger = logging.getLogger(__name__)


@dataclass
class VerificationService:
    """Domain service for email verification."""

    records: WaitlistRecords
    notifications: NotificationDispatcher
    clock: Callable[[], datetime] = field(default=utcnow)

    def verify(self, token: str | None) -> VerificationResult:
        """
        Mark the registration owning token as verified.

        Raises:
            ValidationError: If token is missing
            NotFoundError: If the token is unknown or already used, or its
                registration record is missing
            StoreError: If the store fails
        """
        if not token or not token.strip():
            raise ValidationError("Verification token is required")

        email = self.records.take_token(token)
        if email is None:
            raise NotFoundError("Invalid or expired verification token")

        try:
            registration = self.records.get_by_email(email)
            if registration is None:
                logger.error("Verification token points at missing record for %s", email)
                raise NotFoundError("Registration not found")

            verified = registration.mark_verified(self.clock())
            self.records.save(verified)
        except StoreError:
            self.records.put_token(token, email)
            raise

        logger.info("Verified %s at position %d", email, verified.position)

        self.notifications.dispatch(
            email,
            WELCOME,
            {
                "POSITION": str(verified.position),
                "EMAIL_ADDRESS": email,
            },
        )

        return VerificationResult(position=verified.position, email=email)
