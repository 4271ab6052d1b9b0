"""
Domain models - Registration record and operation results.

A Registration is stored as JSON with camelCase field names so that
records written by earlier deployments remain readable.

Storage layout
==============

    {email}                 -> Registration JSON
    wallet:{walletaddress}  -> Registration JSON (duplicate of the above,
                               keyed on the lowercased address)
    position:{n}            -> email
    verify:{token}          -> email (deleted on successful verification)
"""

import json
from dataclasses import dataclass, replace
from datetime import datetime, timezone

from .exceptions import StoreError

WALLET_PREFIX = "wallet:"
POSITION_PREFIX = "position:"
VERIFY_PREFIX = "verify:"

INDEX_PREFIXES = (POSITION_PREFIX, VERIFY_PREFIX, WALLET_PREFIX)


def wallet_key(wallet_address: str) -> str:
    # Hex addresses are case-insensitive (mixed case is only a checksum)
    return f"{WALLET_PREFIX}{wallet_address.lower()}"


def position_key(position: int) -> str:
    return f"{POSITION_PREFIX}{position}"


def verify_key(token: str) -> str:
    return f"{VERIFY_PREFIX}{token}"


def is_user_key(key: str) -> bool:
    """Return True if the key holds a primary (email-keyed) record."""
    return "@" in key and not key.startswith(INDEX_PREFIXES)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _format_timestamp(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.isoformat().replace("+00:00", "Z")


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@dataclass(frozen=True)
class Registration:
    """A single waitlist entry."""

    email: str
    wallet_address: str
    signature: str
    network: str
    joined_at: datetime
    position: int
    verified: bool = False
    verification_token: str | None = None
    verified_at: datetime | None = None

    def mark_verified(self, at: datetime) -> "Registration":
        """
        Return a verified copy of this registration.

        verified_at is clamped so it never precedes joined_at, and the
        consumed token is dropped from the record.
        """
        return replace(
            self,
            verified=True,
            verified_at=max(at, self.joined_at),
            verification_token=None,
        )

    def to_dict(self) -> dict:
        data = {
            "email": self.email,
            "walletAddress": self.wallet_address,
            "signature": self.signature,
            "network": self.network,
            "joinedAt": _format_timestamp(self.joined_at),
            "position": self.position,
            "verified": self.verified,
        }
        if self.verification_token is not None:
            data["verificationToken"] = self.verification_token
        if self.verified_at is not None:
            data["verifiedAt"] = _format_timestamp(self.verified_at)
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, raw: str) -> "Registration":
        """
        Parse a stored record.

        Raises:
            StoreError: If the stored value is not a valid record
        """
        try:
            data = json.loads(raw)
            return cls(
                email=data["email"],
                wallet_address=data["walletAddress"],
                signature=data.get("signature", ""),
                network=data.get("network") or "unknown",
                joined_at=_parse_timestamp(data["joinedAt"]),
                position=int(data["position"]),
                verified=bool(data.get("verified", False)),
                verification_token=data.get("verificationToken"),
                verified_at=_parse_timestamp(data.get("verifiedAt")),
            )
        except (ValueError, KeyError, TypeError) as e:
            raise StoreError(f"Corrupt registration record: {e}") from e


@dataclass(frozen=True)
class RegistrationResult:
    """Outcome of a successful registration."""

    position: int
    email: str
    wallet_address: str
    verified: bool = False
    needs_verification: bool = True


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of a successful verification."""

    position: int
    email: str


@dataclass(frozen=True)
class UserPage:
    """One page of the admin user listing."""

    users: list[Registration]
    total: int
    page: int
    limit: int
    total_pages: int


@dataclass(frozen=True)
class WaitlistStats:
    """Aggregate counters over all registrations."""

    total_users: int
    verified_users: int
    unverified_users: int
    network_stats: dict[str, int]
