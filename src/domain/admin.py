"""
Admin query service - Operator authentication, listing and statistics.

Authentication Model
====================

A single shared secret is configured. Operators either present it
directly as a Bearer credential or exchange it at login for a
short-lived signed session token (HS256 JWT). All secret comparisons
are constant-time.

Listings and statistics are computed by a full key scan on every call.
"""

import hashlib
import math
import secrets
from collections import Counter
from dataclasses import dataclass
from datetime import timedelta

import jwt

from .exceptions import AuthError, ValidationError
from .models import UserPage, WaitlistStats, utcnow
from .ports import ListingOrder
from .records import WaitlistRecords

MAX_PAGE_LIMIT = 100

_SESSION_SUBJECT = "waitlist-admin"
_SESSION_ALGORITHM = "HS256"


@dataclass
class AdminService:
    """Domain service for the administrative views."""

    records: WaitlistRecords
    admin_password: str
    session_ttl_seconds: int = 3600

    def login(self, password: str) -> bool:
        """Check password against the configured secret (constant-time)."""
        if not self.admin_password or not password:
            return False
        return secrets.compare_digest(password.encode(), self.admin_password.encode())

    def issue_session_token(self) -> str:
        """Create a signed session token valid for session_ttl_seconds."""
        now = utcnow()
        claims = {
            "sub": _SESSION_SUBJECT,
            "iat": now,
            "exp": now + timedelta(seconds=self.session_ttl_seconds),
        }
        return jwt.encode(claims, self._signing_key(), algorithm=_SESSION_ALGORITHM)

    def authenticate(self, credential: str | None) -> None:
        """
        Accept the shared secret or a valid session token.

        Raises:
            AuthError: If the credential is missing or invalid
        """
        if not credential or not self.admin_password:
            raise AuthError("Unauthorized")
        if self.login(credential):
            return
        try:
            claims = jwt.decode(
                credential,
                self._signing_key(),
                algorithms=[_SESSION_ALGORITHM],
                options={"require": ["exp", "sub"]},
            )
        except jwt.InvalidTokenError as e:
            raise AuthError("Unauthorized") from e
        if claims.get("sub") != _SESSION_SUBJECT:
            raise AuthError("Unauthorized")

    def list_users(
        self,
        page: int,
        limit: int,
        credential: str | None,
        order: ListingOrder = ListingOrder.EMAIL,
    ) -> UserPage:
        """
        Return one page of registrations.

        With ListingOrder.EMAIL the page window is cut from the lexically
        sorted email keys and the page is then sorted by position. With
        ListingOrder.POSITION the window is cut from all registrations
        sorted by position.

        Raises:
            AuthError: If the credential is invalid
            ValidationError: If page < 1 or limit outside 1..MAX_PAGE_LIMIT
        """
        self.authenticate(credential)
        if page < 1:
            raise ValidationError("Page must be at least 1")
        if limit < 1 or limit > MAX_PAGE_LIMIT:
            raise ValidationError(f"Limit must be between 1 and {MAX_PAGE_LIMIT}")

        start = (page - 1) * limit

        if order == ListingOrder.POSITION:
            registrations = sorted(self.records.all_users(), key=lambda r: r.position)
            total = len(registrations)
            users = registrations[start : start + limit]
        else:
            keys = self.records.user_keys()
            total = len(keys)
            users = []
            for key in keys[start : start + limit]:
                registration = self.records.load(key)
                if registration is not None:
                    users.append(registration)
            users.sort(key=lambda r: r.position)

        return UserPage(
            users=users,
            total=total,
            page=page,
            limit=limit,
            total_pages=math.ceil(total / limit),
        )

    def stats(self, credential: str | None) -> WaitlistStats:
        """
        Aggregate counters over all registrations.

        Raises:
            AuthError: If the credential is invalid
        """
        self.authenticate(credential)

        registrations = self.records.all_users()
        verified = sum(1 for r in registrations if r.verified)
        networks = Counter(r.network for r in registrations)

        return WaitlistStats(
            total_users=len(registrations),
            verified_users=verified,
            unverified_users=len(registrations) - verified,
            network_stats=dict(networks),
        )

    def _signing_key(self) -> str:
        # Rotating the admin password invalidates outstanding sessions.
        return hashlib.sha256(f"{_SESSION_SUBJECT}:{self.admin_password}".encode()).hexdigest()
