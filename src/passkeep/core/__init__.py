# Core Module - Shared Utilities
#
# - Audit logging
# - Key/value store contract the credential manager persists into

from .audit_log import (
    AuditLogger,
    EventSeverity,
    EventType,
    get_audit_logger,
    set_audit_logger,
)
from .kv_store import KeyValueStore, MemoryStore

__all__ = [
    # Audit Logging
    "AuditLogger",
    "EventType",
    "EventSeverity",
    "get_audit_logger",
    "set_audit_logger",
    # Stores
    "KeyValueStore",
    "MemoryStore",
]
