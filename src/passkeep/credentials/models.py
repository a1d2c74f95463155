"""
Credential Data Models
"""

import json
import string
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .exceptions import MalformedRecordError

_HEX_DIGITS = set(string.hexdigits)


def storage_key(account: str) -> str:
    """Key under which an account's credential record is stored."""
    return f"{account}:password"


def is_absent(raw: Optional[str]) -> bool:
    """A missing, empty or JSON null value means no stored secret."""
    return not raw or raw.strip() == "null"


def _is_hex(value: Any) -> bool:
    return (
        isinstance(value, str)
        and len(value) % 2 == 0
        and all(c in _HEX_DIGITS for c in value)
    )


@dataclass(frozen=True)
class CredentialRecord:
    """Persisted {digest, salt} pair for one account, both lowercase hex."""
    digest: str
    salt: str

    def to_dict(self) -> Dict[str, str]:
        # Wire field names; "hash" is the digest.
        return {"hash": self.digest, "salt": self.salt}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, raw: str, key: str = "") -> "CredentialRecord":
        """Parse a stored value.

        Raises:
            MalformedRecordError: If the value is not a JSON object holding
                hex strings under "hash" and "salt"
        """
        try:
            data = json.loads(raw)
        except (TypeError, ValueError) as exc:
            raise MalformedRecordError(key, f"invalid JSON ({exc})") from exc

        if not isinstance(data, dict):
            raise MalformedRecordError(key, "expected a JSON object")

        digest = data.get("hash")
        salt = data.get("salt")
        if not _is_hex(digest) or not _is_hex(salt) or not digest or not salt:
            raise MalformedRecordError(key, "missing or non-hex 'hash'/'salt' fields")

        return cls(digest=digest.lower(), salt=salt.lower())
