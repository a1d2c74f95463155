# Credentials - Derivation Service
#
# Secret → Digest (PBKDF2-HMAC-SHA256)
# Per-derivation random salt
# Constant-time digest comparison

import os
import secrets
from dataclasses import dataclass, replace
from typing import Union

from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from .exceptions import DerivationError

Secret = Union[bytes, str]


@dataclass(frozen=True)
class DerivationParams:
    """Fixed PBKDF2 parameters.

    Changing any of these invalidates previously stored digests but not the
    record layout ({hash, salt} hex fields).
    """

    iterations: int = 100_000
    algorithm: str = "sha256"
    key_length: int = 16  # 128-bit digest
    salt_length: int = 8  # 64-bit salt

    def with_iterations(self, iterations: int) -> "DerivationParams":
        return replace(self, iterations=iterations)


DEFAULT_PARAMS = DerivationParams()


def _hash_algorithm(name: str) -> hashes.HashAlgorithm:
    algorithm = getattr(hashes, name.upper(), None)
    if algorithm is None or not isinstance(algorithm, type):
        raise DerivationError(f"Unsupported hash algorithm: {name}")
    return algorithm()


class DerivationService:
    """
    Derives and compares password digests.

    Flow:
    1. generate_salt() draws salt_length bytes from the OS CSPRNG
    2. derive_key() stretches (secret, salt) with PBKDF2-HMAC
    3. keys_match() compares two digests in constant time

    All methods are synchronous and CPU-bound; CredentialManager moves
    them off the event loop.
    """

    def __init__(self, params: DerivationParams = DEFAULT_PARAMS):
        self.params = params

    def generate_salt(self) -> bytes:
        """Generate cryptographically random salt."""
        try:
            return os.urandom(self.params.salt_length)
        except (OSError, NotImplementedError) as exc:
            raise DerivationError(f"Random source unavailable: {exc}") from exc

    def derive_key(self, secret: Secret, salt: bytes) -> bytes:
        """
        Derive a digest from a secret using PBKDF2.

        Args:
            secret: Password as bytes, or text (UTF-8 encoded)
            salt: Salt bytes (generated or decoded from a stored record)

        Returns:
            key_length-byte digest

        Raises:
            DerivationError: If the primitive rejects its inputs or fails
        """
        if isinstance(secret, str):
            secret = secret.encode("utf-8")

        try:
            kdf = PBKDF2HMAC(
                algorithm=_hash_algorithm(self.params.algorithm),
                length=self.params.key_length,
                salt=salt,
                iterations=self.params.iterations,
                backend=default_backend(),
            )
            return kdf.derive(secret)
        except DerivationError:
            raise
        except Exception as exc:
            raise DerivationError(f"PBKDF2 derivation failed: {exc}") from exc

    @staticmethod
    def keys_match(derived: bytes, expected: bytes) -> bool:
        """Constant-time comparison to prevent timing attacks."""
        return secrets.compare_digest(derived, expected)

    @staticmethod
    def encode_for_storage(data: bytes) -> str:
        """Encode binary data as lowercase hex for the key-value store."""
        return data.hex()

    @staticmethod
    def decode_from_storage(data: str) -> bytes:
        """Decode hex data read from the key-value store."""
        try:
            return bytes.fromhex(data)
        except (TypeError, ValueError) as exc:
            raise DerivationError(f"Invalid hex encoding: {exc}") from exc
