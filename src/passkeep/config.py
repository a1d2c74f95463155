# Configuration
# Explicit argument, else environment variable, else module default.
#
#   PASSKEEP_AUDIT_LOG_DIR      directory for daily audit log files (optional)
#   PASSKEEP_PBKDF2_ITERATIONS  iteration count override (optional)

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .credentials.derivation import DEFAULT_PARAMS, DerivationParams
from .credentials.exceptions import ConfigurationError


@dataclass(frozen=True)
class Settings:
    audit_log_dir: Optional[Path] = None
    derivation: DerivationParams = DEFAULT_PARAMS

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables.

        Raises:
            ConfigurationError: If PASSKEEP_PBKDF2_ITERATIONS is not a
                positive integer
        """
        env = os.environ if environ is None else environ

        log_dir = env.get("PASSKEEP_AUDIT_LOG_DIR", "")

        derivation = DEFAULT_PARAMS
        raw_iterations = env.get("PASSKEEP_PBKDF2_ITERATIONS", "").strip()
        if raw_iterations:
            try:
                iterations = int(raw_iterations)
            except ValueError:
                raise ConfigurationError(
                    f"PASSKEEP_PBKDF2_ITERATIONS must be an integer, got {raw_iterations!r}"
                ) from None
            if iterations <= 0:
                raise ConfigurationError(
                    f"PASSKEEP_PBKDF2_ITERATIONS must be positive, got {iterations}"
                )
            derivation = DEFAULT_PARAMS.with_iterations(iterations)

        return cls(
            audit_log_dir=Path(log_dir) if log_dir else None,
            derivation=derivation,
        )


# ── Singleton ────────────────────────────────────────────────────────

_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the process-wide settings from the environment."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def set_settings(settings: Optional[Settings]) -> None:
    """Replace the singleton (for testing)."""
    global _settings
    _settings = settings
