# Core - Credential Audit Logging
#
# Structured record of credential outcomes: stored, verified, rejected
# and absent.
# Events carry the account id only; secrets, digests and salts are never
# logged. Failures are raised to the caller, not logged here.

import logging
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional
from uuid import uuid4

import structlog


class EventType(str, Enum):
    """Types of credential events that can be logged."""
    CREDENTIAL_STORED = "credential.stored"
    CREDENTIAL_VERIFIED = "credential.verified"
    CREDENTIAL_VERIFY_FAILED = "credential.verify.failed"
    CREDENTIAL_ABSENT = "credential.absent"


class EventSeverity(str, Enum):
    """
    Severity levels for credential events.

    - INFO: Normal activity
    - INVESTIGATE: Rejected secret, worth a look if repeated
    """
    INFO = "info"
    INVESTIGATE = "investigate"


class AuditLogger:
    """
    Structured audit logger for credential events.

    Features:
    - JSON rendering via structlog over the stdlib logging tree
    - Automatic timestamp and event ID
    - Optional daily log file when a log directory is configured
    """

    def __init__(self, log_dir: Optional[Path] = None):
        """
        Initialize audit logger.

        Args:
            log_dir: Directory for daily audit files. None keeps events on
                whatever handlers the host application installed.
        """
        self.log_dir = Path(log_dir) if log_dir else None

        structlog.configure(
            processors=[
                structlog.stdlib.add_log_level,
                structlog.stdlib.add_logger_name,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer()
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )

        self._file_handler: Optional[logging.Handler] = None
        if self.log_dir is not None:
            self._setup_file_handler()

        self.logger = structlog.get_logger("passkeep.audit")

    def _setup_file_handler(self):
        """Attach a daily file handler to the passkeep.audit logger."""
        self.log_dir.mkdir(parents=True, exist_ok=True)
        today = datetime.now().strftime("%Y-%m-%d")
        log_file = self.log_dir / f"audit_{today}.log"

        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(logging.Formatter('%(message)s'))  # structlog handles formatting

        audit_logger = logging.getLogger("passkeep.audit")
        audit_logger.addHandler(file_handler)
        audit_logger.setLevel(logging.INFO)
        self._file_handler = file_handler

    def close(self):
        """Detach and close the file handler, if any."""
        if self._file_handler is not None:
            logging.getLogger("passkeep.audit").removeHandler(self._file_handler)
            self._file_handler.close()
            self._file_handler = None

    def log_event(
        self,
        event_type: EventType,
        severity: EventSeverity,
        message: str,
        account: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Log a credential event.

        Args:
            event_type: Type of event (from EventType enum)
            severity: Severity level (from EventSeverity enum)
            message: Human-readable event description
            account: Account identifier the event concerns
            details: Additional non-secret details

        Returns:
            str: Event ID (UUID) for reference
        """
        event_id = str(uuid4())
        self.logger.info(
            "credential_event",
            event_id=event_id,
            event_type=event_type.value,
            severity=severity.value,
            message=message,
            account=account,
            details=details or {},
        )
        return event_id


# ── Singleton ────────────────────────────────────────────────────────

_audit_logger: Optional[AuditLogger] = None


def get_audit_logger() -> AuditLogger:
    """Get or create the global audit logger from the configured settings."""
    global _audit_logger
    if _audit_logger is None:
        from ..config import get_settings

        _audit_logger = AuditLogger(log_dir=get_settings().audit_log_dir)
    return _audit_logger


def set_audit_logger(logger: Optional[AuditLogger]) -> None:
    """Replace the singleton (for testing)."""
    global _audit_logger
    _audit_logger = logger
