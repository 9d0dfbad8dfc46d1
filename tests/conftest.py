# tests/conftest.py
import os

# Keep the app's ledger off disk for the whole test session
os.environ.setdefault("DEALDESK_STORE_BACKEND", "memory")

import pytest
from fastapi.testclient import TestClient

from dealdesk.adapters.memory_store import InMemoryKeyValueStore
from dealdesk.api.http import app  # ensures imports resolve; run tests from repo root
from dealdesk.services.underwriting_ledger import UnderwritingLedger


@pytest.fixture(scope="session")
def client():
    return TestClient(app)


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def ledger(store):
    return UnderwritingLedger(store)
