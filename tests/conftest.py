"""
Shared pytest fixtures for the passkeep test suite.

Autouse fixtures below isolate tests from process-wide state:
  - Audit logger -> fresh instance, no log file
  - Settings     -> defaults, independent of the caller's environment
"""

import pytest

from passkeep.core import MemoryStore
from passkeep.credentials import CredentialManager, DerivationParams, DerivationService


@pytest.fixture(autouse=True)
def _isolate_audit_logger():
    """Give every test its own AuditLogger with no file handler.

    Without this, the first test to touch get_audit_logger() would create
    a logger from whatever PASSKEEP_AUDIT_LOG_DIR the developer has set.
    """
    import passkeep.core.audit_log as audit_mod

    old_logger = audit_mod._audit_logger
    audit_mod.set_audit_logger(audit_mod.AuditLogger())

    yield

    audit_mod.set_audit_logger(old_logger)


@pytest.fixture(autouse=True)
def _isolate_settings():
    """Pin settings to defaults, independent of PASSKEEP_* variables."""
    import passkeep.config as config_mod

    old_settings = config_mod._settings
    config_mod.set_settings(config_mod.Settings())

    yield

    config_mod.set_settings(old_settings)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def manager(store):
    """Manager with the production derivation parameters."""
    return CredentialManager(store)


@pytest.fixture
def fast_manager(store):
    """Manager with a low iteration count, for tests that derive many times."""
    params = DerivationParams(iterations=1_000)
    return CredentialManager(store, derivation=DerivationService(params))
