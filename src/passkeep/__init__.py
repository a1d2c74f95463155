# passkeep - Password Credential Manager
#
# Derives salted PBKDF2 digests from account passwords, keeps them in a
# key/value store and verifies presented passwords against them.

__version__ = "0.1.0"
__author__ = "passkeep contributors"
__description__ = "Salted PBKDF2 password storage and verification"

from .core import (
    EventSeverity,
    EventType,
    KeyValueStore,
    MemoryStore,
    get_audit_logger,
)
from .credentials import (
    CredentialError,
    CredentialManager,
    CredentialRecord,
    DerivationError,
    MalformedRecordError,
)

__all__ = [
    "__version__",
    "CredentialManager",
    "CredentialRecord",
    "CredentialError",
    "DerivationError",
    "MalformedRecordError",
    "KeyValueStore",
    "MemoryStore",
    "EventType",
    "EventSeverity",
    "get_audit_logger",
]
