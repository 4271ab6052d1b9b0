"""
Unit tests for input validation and normalization helpers.
"""

import pytest

from src.domain.exceptions import ValidationError
from src.domain.validation import (
    format_address,
    is_valid_signature,
    is_valid_wallet_address,
    normalize_email,
    normalize_network,
    validate_registration,
)
from tests.factories import signature, wallet


class TestWalletAddressFormat:
    """Wallet address must be 0x followed by exactly 40 hex characters."""

    def test_accepts_lowercase_hex(self) -> None:
        assert is_valid_wallet_address("0x" + "ab" * 20)

    def test_accepts_mixed_case_hex(self) -> None:
        assert is_valid_wallet_address("0x" + "aBcDeF0123" * 4)

    def test_rejects_39_characters(self) -> None:
        assert not is_valid_wallet_address("0x" + "a" * 39)

    def test_rejects_41_characters(self) -> None:
        assert not is_valid_wallet_address("0x" + "a" * 41)

    def test_rejects_missing_prefix(self) -> None:
        assert not is_valid_wallet_address("a" * 42)

    def test_rejects_non_hex(self) -> None:
        assert not is_valid_wallet_address("0x" + "g" * 40)

    def test_rejects_trailing_newline(self) -> None:
        assert not is_valid_wallet_address(wallet(1) + "\n")


class TestSignatureFormat:
    """Signature must be 0x followed by exactly 130 hex characters."""

    def test_accepts_valid_signature(self) -> None:
        assert is_valid_signature(signature(42))

    def test_rejects_129_characters(self) -> None:
        assert not is_valid_signature("0x" + "f" * 129)

    def test_rejects_131_characters(self) -> None:
        assert not is_valid_signature("0x" + "f" * 131)

    def test_rejects_uppercase_prefix(self) -> None:
        assert not is_valid_signature("0X" + "f" * 130)


class TestNormalization:
    def test_normalize_email_strips_and_lowercases(self) -> None:
        assert normalize_email("  User@Example.COM  ") == "user@example.com"

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank_network_is_unknown(self, value: str | None) -> None:
        assert normalize_network(value) == "unknown"

    def test_known_chain_id_maps_to_label(self) -> None:
        assert normalize_network("0xaa36a7") == "sepolia"
        assert normalize_network("0xA") == "optimism"

    def test_label_is_kept(self) -> None:
        assert normalize_network(" sepolia ") == "sepolia"
        assert normalize_network("base") == "base"

    def test_format_address(self) -> None:
        assert format_address("0x1234567890abcdef1234567890abcdef12345678") == "0x1234...5678"
        assert format_address("") == ""


class TestValidateRegistration:
    def test_valid_input_passes(self) -> None:
        validate_registration("a@x.com", wallet(1), signature())

    @pytest.mark.parametrize(
        ("email", "address", "sig", "message"),
        [
            ("", wallet(1), signature(), "Email is required"),
            ("   ", wallet(1), signature(), "Email is required"),
            ("no-at-sign", wallet(1), signature(), "Invalid email address"),
            ("a@x.com", "", signature(), "Wallet address is required"),
            ("a@x.com", wallet(1), "", "Signature is required"),
            ("a@x.com", "0x123", signature(), "Invalid wallet address format"),
            ("a@x.com", wallet(1), "0x123", "Invalid signature format"),
        ],
    )
    def test_invalid_input_raises(self, email: str, address: str, sig: str, message: str) -> None:
        with pytest.raises(ValidationError, match=message):
            validate_registration(email, address, sig)
