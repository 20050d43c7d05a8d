"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Provide reusable test fixtures (storages, session store, API client)
  - Replace the network with httpx.MockTransport
  - Configure test environment (no .env, markers)

Collaborators:
  - pytest: Test framework
  - httpx.MockTransport: transport-level test double
  - erp_client: package under test

Notes:
  - Fixtures are auto-discovered by pytest
  - Every fixture is function-scoped (per-test isolation)
"""

import os
import sys
from pathlib import Path
from typing import Callable

import httpx
import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from erp_client.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None
app_config.get_settings.cache_clear()

from erp_client.application.session_store import SessionStore  # noqa: E402
from erp_client.infrastructure.http import ApiClient, ErrorInterceptor  # noqa: E402
from erp_client.infrastructure.notifications import (  # noqa: E402
    InMemoryNotifier,
    RecordingNavigator,
)
from erp_client.infrastructure.storage import SessionStorage  # noqa: E402

os.environ.setdefault("ERP_APP_ENV", "test")

BASE_URL = "http://erp.test/api"
AUTH_PATHS = ["/auth/login", "/auth/register", "/auth/forgot-password", "/auth/reset-password"]

Handler = Callable[[httpx.Request], httpx.Response]


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: End-to-end tests against a fake ERP API"
    )


# ============================================================================
# Session fixtures
# ============================================================================


@pytest.fixture
def durable() -> SessionStorage:
    """R: Durable medium double (stands in for the cookie jar)."""
    return SessionStorage()


@pytest.fixture
def session_scoped() -> SessionStorage:
    """R: Session-scoped medium."""
    return SessionStorage()


@pytest.fixture
def store(durable: SessionStorage, session_scoped: SessionStorage) -> SessionStore:
    return SessionStore(durable, session_scoped)


@pytest.fixture
def sample_user() -> dict:
    return {"id": 1, "nome": "Ana", "email": "a@x.com", "empresaId": 7}


# ============================================================================
# HTTP fixtures
# ============================================================================


@pytest.fixture
def notifier() -> InMemoryNotifier:
    return InMemoryNotifier()


@pytest.fixture
def navigator() -> RecordingNavigator:
    return RecordingNavigator()


@pytest.fixture
def interceptor(
    store: SessionStore, notifier: InMemoryNotifier, navigator: RecordingNavigator
) -> ErrorInterceptor:
    return ErrorInterceptor(store, notifier, navigator, auth_public_paths=AUTH_PATHS)


@pytest.fixture
def make_api(store: SessionStore, interceptor: ErrorInterceptor):
    """Factory: ApiClient whose transport is the given handler."""
    clients = []

    def _make(handler: Handler) -> ApiClient:
        client = ApiClient(
            store,
            interceptor,
            base_url=BASE_URL,
            transport=httpx.MockTransport(handler),
        )
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.close()


class RecordingHandler:
    """MockTransport handler that replies with a fixed response and keeps requests."""

    def __init__(self, status: int = 200, json=None, content: bytes | None = None):
        self.status = status
        self.json = json
        self.content = content
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.content is not None:
            return httpx.Response(self.status, content=self.content)
        return httpx.Response(self.status, json=self.json)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def recording_handler():
    return RecordingHandler
