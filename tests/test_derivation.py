"""Tests for DerivationService (PBKDF2 digest derivation).

Covers:
  - Default parameters
  - Salt generation
  - Agreement with an independent PBKDF2 implementation
  - Error wrapping for primitive and random-source failures
  - Hex encoding helpers and constant-time comparison
"""

import hashlib
from unittest.mock import patch

import pytest

from passkeep.credentials.derivation import (
    DEFAULT_PARAMS,
    DerivationParams,
    DerivationService,
)
from passkeep.credentials.exceptions import DerivationError


class TestDerivationParams:

    def test_defaults(self):
        assert DEFAULT_PARAMS.iterations == 100_000
        assert DEFAULT_PARAMS.algorithm == "sha256"
        assert DEFAULT_PARAMS.key_length == 16
        assert DEFAULT_PARAMS.salt_length == 8

    def test_with_iterations_keeps_other_fields(self):
        params = DEFAULT_PARAMS.with_iterations(5)
        assert params.iterations == 5
        assert params.key_length == DEFAULT_PARAMS.key_length
        assert params.salt_length == DEFAULT_PARAMS.salt_length
        assert DEFAULT_PARAMS.iterations == 100_000


class TestDeriveKey:

    @pytest.fixture
    def service(self):
        return DerivationService()

    def test_salt_length(self, service):
        assert len(service.generate_salt()) == 8

    def test_salts_differ(self, service):
        assert service.generate_salt() != service.generate_salt()

    def test_digest_length(self, service):
        assert len(service.derive_key(b"correct-horse", b"\x00" * 8)) == 16

    def test_matches_hashlib_pbkdf2(self, service):
        salt = bytes.fromhex("0011223344556677")
        expected = hashlib.pbkdf2_hmac("sha256", b"correct-horse", salt, 100_000, dklen=16)
        assert service.derive_key(b"correct-horse", salt) == expected

    def test_text_secret_is_utf8_encoded(self, service):
        salt = b"saltsalt"
        assert service.derive_key("pässword", salt) == service.derive_key("pässword".encode("utf-8"), salt)

    def test_deterministic_for_same_inputs(self, service):
        salt = service.generate_salt()
        assert service.derive_key(b"secret", salt) == service.derive_key(b"secret", salt)

    def test_different_salt_changes_digest(self, service):
        assert service.derive_key(b"secret", b"aaaaaaaa") != service.derive_key(b"secret", b"bbbbbbbb")

    def test_other_algorithm(self):
        service = DerivationService(DerivationParams(iterations=10, algorithm="sha512", key_length=32))
        expected = hashlib.pbkdf2_hmac("sha512", b"secret", b"saltsalt", 10, dklen=32)
        assert service.derive_key(b"secret", b"saltsalt") == expected


class TestDerivationFailures:

    def test_unknown_algorithm_raises(self):
        service = DerivationService(DerivationParams(algorithm="nosuchhash"))
        with pytest.raises(DerivationError, match="Unsupported hash algorithm"):
            service.derive_key(b"secret", b"saltsalt")

    def test_non_bytes_salt_raises(self):
        service = DerivationService()
        with pytest.raises(DerivationError):
            service.derive_key(b"secret", "saltsalt")

    def test_primitive_error_is_wrapped(self):
        service = DerivationService()
        with patch(
            "passkeep.credentials.derivation.PBKDF2HMAC",
            side_effect=RuntimeError("engine failure"),
        ):
            with pytest.raises(DerivationError) as exc_info:
                service.derive_key(b"secret", b"saltsalt")
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_random_source_failure_is_wrapped(self):
        service = DerivationService()
        with patch("passkeep.credentials.derivation.os.urandom", side_effect=OSError("no entropy")):
            with pytest.raises(DerivationError, match="Random source unavailable"):
                service.generate_salt()


class TestEncodingAndComparison:

    def test_encode_is_lowercase_hex(self):
        assert DerivationService.encode_for_storage(b"\xab\xcd\x01") == "abcd01"

    def test_decode_hex(self):
        assert DerivationService.decode_from_storage("ABcd01") == b"\xab\xcd\x01"

    def test_decode_invalid_hex_raises(self):
        with pytest.raises(DerivationError, match="Invalid hex"):
            DerivationService.decode_from_storage("not-hex")

    def test_keys_match(self):
        assert DerivationService.keys_match(b"\x01\x02", b"\x01\x02") is True
        assert DerivationService.keys_match(b"\x01\x02", b"\x01\x03") is False

    def test_keys_match_length_mismatch(self):
        assert DerivationService.keys_match(b"\x01\x02", b"\x01") is False
