"""
Credential Exception Classes
"""


class CredentialError(Exception):
    """Base exception for credential operations"""
    pass


class DerivationError(CredentialError):
    """Raised when the key-derivation primitive or the random source fails"""
    pass


class MalformedRecordError(CredentialError):
    """Raised when a stored credential record cannot be deserialized"""

    def __init__(self, key: str, reason: str):
        super().__init__(f"Malformed credential record at {key!r}: {reason}")
        self.key = key
        self.reason = reason


class ConfigurationError(CredentialError):
    """Raised when credential settings are invalid"""
    pass
