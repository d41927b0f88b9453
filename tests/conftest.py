"""
Shared fixtures.

Async code is driven with `run()`, the test-side twin of the
Streamlit `run_async` helper, so no async pytest plugin is needed.
"""

import asyncio
import random

import pytest

from anthaathi.audit import AuditLogger
from anthaathi.navigation import Navigator
from anthaathi.orchestrator import create_app_components
from anthaathi.services.storage import InMemoryStorage
from anthaathi.stores import ExpenseStore, LanguageStore, SessionStore


def run(coro):
    """Run a coroutine to completion on a fresh event loop."""
    return asyncio.run(coro)


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def audit_logger():
    return AuditLogger()


@pytest.fixture
def session_store(storage, audit_logger):
    return SessionStore(storage, key="user", audit_logger=audit_logger)


@pytest.fixture
def language_store(storage, audit_logger):
    return LanguageStore(storage, key="language", audit_logger=audit_logger)


@pytest.fixture
def expense_store(storage, audit_logger):
    return ExpenseStore(storage, key="expenses", audit_logger=audit_logger)


@pytest.fixture
def navigator(session_store):
    return Navigator(session_store, splash_delay=0)


@pytest.fixture
def app(storage):
    """A fully wired app on in-memory storage with no delays."""
    return create_app_components(
        storage=storage,
        rng=random.Random(7),
        instant=True,
    )
