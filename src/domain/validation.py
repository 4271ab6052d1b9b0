"""
Input validation and normalization helpers.

Wallet addresses and signatures are checked for format only. Signatures
are never verified cryptographically.
"""

import re

from .exceptions import ValidationError

WALLET_ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")
SIGNATURE_PATTERN = re.compile(r"^0x[0-9a-fA-F]{130}$")

UNKNOWN_NETWORK = "unknown"

# chain id (lowercase hex) -> network label
KNOWN_NETWORKS = {
    "0xaa36a7": "sepolia",
    "0x5": "goerli",
    "0x13881": "mumbai",
    "0xa": "optimism",
}


def is_valid_wallet_address(value: str) -> bool:
    return bool(WALLET_ADDRESS_PATTERN.fullmatch(value))


def is_valid_signature(value: str) -> bool:
    return bool(SIGNATURE_PATTERN.fullmatch(value))


def normalize_email(email: str) -> str:
    """
    Normalize email address for consistent storage and lookup.

    Applies: strip whitespace + lowercase
    """
    return email.strip().lower()


def normalize_network(network: str | None) -> str:
    """
    Resolve a network label or hex chain id to the stored label.

    Known chain ids map to their network name, blank values become
    "unknown" and any other value is kept as given.
    """
    if network is None:
        return UNKNOWN_NETWORK
    value = network.strip()
    if not value:
        return UNKNOWN_NETWORK
    return KNOWN_NETWORKS.get(value.lower(), value)


def format_address(address: str) -> str:
    """Shorten a wallet address for log output: 0x1234...abcd"""
    if not address:
        return ""
    return f"{address[:6]}...{address[-4:]}"


def validate_registration(email: str | None, wallet_address: str | None, signature: str | None) -> None:
    """
    Check registration input.

    Raises:
        ValidationError: On the first missing or malformed field
    """
    if not email or not email.strip():
        raise ValidationError("Email is required")
    if "@" not in email:
        raise ValidationError("Invalid email address")
    if not wallet_address:
        raise ValidationError("Wallet address is required")
    if not signature:
        raise ValidationError("Signature is required")
    if not is_valid_wallet_address(wallet_address):
        raise ValidationError("Invalid wallet address format")
    if not is_valid_signature(signature):
        raise ValidationError("Invalid signature format")
