# Credentials - Credential Manager
#
# Store path:  secret → derive (PBKDF2, fresh salt) → "{account}:password"
# Check path:  "{account}:password" → record → re-derive with stored salt
#              → constant-time compare
#
# Derivation runs in a worker thread; the key/value store is called
# synchronously and owns per-key consistency.

import asyncio
from typing import Optional

from .derivation import DEFAULT_PARAMS, DerivationParams, DerivationService, Secret
from .models import CredentialRecord, is_absent, storage_key
from ..core import AuditLogger, EventSeverity, EventType, KeyValueStore, get_audit_logger


class CredentialManager:
    """
    Derives, persists and verifies account passwords.

    Security:
    - Secrets are never stored, only a salted PBKDF2-HMAC-SHA256 digest
    - A fresh salt is drawn for every derivation
    - Digests are compared in constant time
    - Outcomes are audit-logged by account; secret material never is

    Usage::

        manager = CredentialManager(MemoryStore())
        await manager.store("correct-horse", "0xabc")
        assert await manager.check_account_secret("correct-horse", "0xabc")
    """

    # Derivation parameters (record layout does not depend on them)
    PBKDF2_ITERATIONS = DEFAULT_PARAMS.iterations
    HASH_ALGORITHM = DEFAULT_PARAMS.algorithm
    DIGEST_LENGTH = DEFAULT_PARAMS.key_length
    SALT_LENGTH = DEFAULT_PARAMS.salt_length

    def __init__(
        self,
        store: KeyValueStore,
        derivation: Optional[DerivationService] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        """
        Initialize credential manager.

        Args:
            store: Key/value store shared with the host application
            derivation: Derivation service. If None, built from the
                configured parameters (PASSKEEP_PBKDF2_ITERATIONS).
            audit_logger: If None, uses the global audit logger
        """
        if derivation is None:
            from ..config import get_settings

            derivation = DerivationService(get_settings().derivation)

        self.kv_store = store
        self.derivation = derivation
        self.logger = audit_logger or get_audit_logger()

    @property
    def params(self) -> DerivationParams:
        return self.derivation.params

    # ── Derive / verify ──────────────────────────────────────────────

    def _derive_sync(self, secret: Secret) -> CredentialRecord:
        salt = self.derivation.generate_salt()
        digest = self.derivation.derive_key(secret, salt)
        return CredentialRecord(
            digest=self.derivation.encode_for_storage(digest),
            salt=self.derivation.encode_for_storage(salt),
        )

    def _verify_sync(self, secret: Secret, digest_hex: str, salt_hex: str) -> bool:
        salt = self.derivation.decode_from_storage(salt_hex)
        expected = self.derivation.decode_from_storage(digest_hex)
        derived = self.derivation.derive_key(secret, salt)
        return self.derivation.keys_match(derived, expected)

    async def derive(self, secret: Secret) -> CredentialRecord:
        """
        Derive a salted digest from a secret.

        Returns:
            CredentialRecord with hex digest and hex salt

        Raises:
            DerivationError: If the random source or PBKDF2 fails
        """
        return await asyncio.to_thread(self._derive_sync, secret)

    async def verify(self, secret: Secret, digest_hex: str, salt_hex: str) -> bool:
        """
        Check a secret against a stored digest and salt.

        Returns:
            True if the secret re-derives to the digest, False otherwise

        Raises:
            DerivationError: If either hex value cannot be decoded or
                PBKDF2 fails
        """
        return await asyncio.to_thread(self._verify_sync, secret, digest_hex, salt_hex)

    # ── Account operations ───────────────────────────────────────────

    async def store(self, secret: Secret, account: str) -> None:
        """
        Derive and persist a secret for an account.

        Overwrites any existing record. Store errors propagate unchanged.
        """
        record = await self.derive(secret)
        self.kv_store.set(storage_key(account), record.to_json())

        self.logger.log_event(
            event_type=EventType.CREDENTIAL_STORED,
            severity=EventSeverity.INFO,
            message="Credential stored",
            account=account,
        )

    async def check_account_secret(self, secret: Secret, account: str) -> bool:
        """
        Verify a secret against the account's stored record.

        Returns:
            False if the account has no record (missing, empty or JSON
            null), else the verify() result

        Raises:
            MalformedRecordError: If the stored record cannot be parsed
            DerivationError: If PBKDF2 fails
        """
        key = storage_key(account)
        raw = self.kv_store.get(key)
        if is_absent(raw):
            self.logger.log_event(
                event_type=EventType.CREDENTIAL_ABSENT,
                severity=EventSeverity.INFO,
                message="No credential stored for account",
                account=account,
            )
            return False

        record = CredentialRecord.from_json(raw, key=key)

        matched = await self.verify(secret, record.digest, record.salt)
        if matched:
            self.logger.log_event(
                event_type=EventType.CREDENTIAL_VERIFIED,
                severity=EventSeverity.INFO,
                message="Credential verified",
                account=account,
            )
        else:
            self.logger.log_event(
                event_type=EventType.CREDENTIAL_VERIFY_FAILED,
                severity=EventSeverity.INVESTIGATE,
                message="Credential rejected",
                account=account,
            )
        return matched

    def has_account_secret(self, account: str) -> bool:
        """Whether any record is stored for the account."""
        return not is_absent(self.kv_store.get(storage_key(account)))
