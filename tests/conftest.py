# tests/conftest.py
import os
import tempfile

# Keep the app's default database out of the working tree
os.environ.setdefault(
    "DATABASE_URL", f"sqlite:///{os.path.join(tempfile.gettempdir(), 'codeleap_test.db')}"
)

import pytest

from backend.app.core.orchestrator import SessionOrchestrator
from tests.fakes import FakeGateway


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def session(gateway):
    return SessionOrchestrator(gateway, timeout=1.0)
