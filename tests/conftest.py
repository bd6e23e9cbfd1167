from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest
from fastapi.testclient import TestClient
from loguru import logger
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from mission_control.app.db.database import Base, get_db
from mission_control.app.main import app
from mission_control.app.models import agent as _models  # noqa: F401  registers tables
from mission_control.app.services.store import StatusStore
from mission_control.status.client import RelayClient, set_client


class RecordingClient(RelayClient):
    """Relay client that remembers every (action, args) it sends."""

    def __init__(self, inner: RelayClient):
        self.inner = inner
        self.url = inner.url
        self.http = inner.http
        self.calls: List[Tuple[str, Dict[str, Any]]] = []

    def call(self, action: str, args: Optional[Dict[str, Any]] = None) -> httpx.Response:
        self.calls.append((action, dict(args or {})))
        return self.inner.call(action, args)


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def store(session_factory):
    db = session_factory()
    yield StatusStore(db)
    db.close()


@pytest.fixture
def http(session_factory):
    """TestClient wired to the in-memory store."""
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def relay_client(http):
    client = RecordingClient(RelayClient("/api/relay", http=http))
    set_client(client)
    yield client
    set_client(None)


@pytest.fixture
def failing_client():
    """Relay client whose transport rejects every request."""
    transport = httpx.MockTransport(lambda request: httpx.Response(503))
    http = httpx.Client(transport=transport, base_url="http://relay.test")
    client = RecordingClient(RelayClient("/api/relay", http=http))
    yield client
    http.close()


@pytest.fixture
def agent_id(store):
    return store.create_agent(name="Codesmith", role="Developer Agent", avatar="💻")


@pytest.fixture
def log_records():
    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)


@pytest.fixture
def read_agent(store):
    """Fetch an agent record as currently committed."""
    def read(agent_id: str) -> Optional[Dict[str, Any]]:
        # Drop cached rows; the relay writes through its own session
        store.db.expire_all()
        return store.get_agent_status(agent_id)
    return read


@pytest.fixture
def read_tasks(store):
    def read(agent_id: str) -> List[Dict[str, Any]]:
        store.db.expire_all()
        return store.get_agent_tasks(agent_id)
    return read
