import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from user_directory_api.app.core.config import Settings
from user_directory_api.app.main import create_app
from user_directory_api.app.services.user_service import UserService


class FakeClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start=None):
        self.current = start or datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self):
        value = self.current
        self.current = self.current + timedelta(seconds=1)
        return value


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def service(clock):
    return UserService(clock=clock)


@pytest.fixture
def settings():
    return Settings(api_prefix="/api", seed_sample_users=False, log_level="WARNING")


@pytest.fixture
def client(settings, service):
    app = create_app(settings, service=service)
    with TestClient(app) as test_client:
        yield test_client
