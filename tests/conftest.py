import os
import sys

# Ensure Python path includes project root for `import scheduler_bridge`
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# Test environment: must be set before settings are imported
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SESSION_SECRET_KEY", "test-secret")
os.environ.setdefault("CALENDAR_PROVIDER", "noop")
os.environ.setdefault("REASONING_BACKEND_URL", "http://backend.test")

import pytest
from fastapi.testclient import TestClient

from scheduler_bridge.main import app
from scheduler_bridge.core.auth.codec import encode_session
from scheduler_bridge.core.auth.schemas import Credential, SessionArtifact


@pytest.fixture
def artifact() -> SessionArtifact:
    return SessionArtifact(
        identity="ada@example.com",
        credential=Credential(access_token="at-1", id_token="id-1", refresh_token="rt-1", scope="calendar"),
        calendar_handle="ada@example.com",
    )


@pytest.fixture
def session_token(artifact) -> str:
    return encode_session(artifact)


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def auth_client(client, session_token):
    client.cookies.set("session", session_token)
    return client
