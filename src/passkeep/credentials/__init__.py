# Credentials Module - Password Derivation, Storage and Verification
#
# Salted PBKDF2-HMAC-SHA256 digests stored per account as
# {"hash": hex, "salt": hex} under "{account}:password"

from .derivation import DEFAULT_PARAMS, DerivationParams, DerivationService
from .exceptions import (
    ConfigurationError,
    CredentialError,
    DerivationError,
    MalformedRecordError,
)
from .manager import CredentialManager
from .models import CredentialRecord, is_absent, storage_key

__all__ = [
    "CredentialManager",
    "CredentialRecord",
    "storage_key",
    "is_absent",
    "DerivationService",
    "DerivationParams",
    "DEFAULT_PARAMS",
    # Errors
    "CredentialError",
    "DerivationError",
    "MalformedRecordError",
    "ConfigurationError",
]
