"""
Shared fixtures: in-memory SQLite store, in-process store, local cart locks,
a recording payment gateway and a FastAPI test client wired to all of them.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import dishcart.data.models  # noqa: F401
from dishcart.api.deps import get_gateway, get_lock_service
from dishcart.data.database import Base, get_db
from dishcart.domain.entities import DISH, USER, PaymentAuthorization
from dishcart.main import app
from dishcart.repos.memory_store import MemoryEntityStore
from dishcart.repos.sql_store import SqlEntityStore
from dishcart.services.lock_service import LocalLockService


class FakeGateway:
    """Records authorization requests; raises ``error`` when set."""

    def __init__(self, secret="pi_123_secret_abc", error=None):
        self.secret = secret
        self.error = error
        self.calls = []

    def create_authorization(self, amount_minor_units, currency, metadata):
        self.calls.append(
            {"amount": amount_minor_units, "currency": currency, "metadata": dict(metadata)}
        )
        if self.error is not None:
            raise self.error
        return PaymentAuthorization(id="pi_123", client_secret=self.secret)


def seed(store):
    """Two users and three dishes (ids 1..3) in any EntityStore."""
    store.create(USER, {"id": 1, "name": "Ana"})
    store.create(USER, {"id": 2, "name": "Marko"})
    for name in ("Burek", "Cevapi", "Pljeskavica"):
        store.create(DISH, {"name": name, "price": 450, "restaurant": None})
    return store


# ── Database ─────────────────────────────────────────────────────────


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    session = sessionmaker(bind=engine, autoflush=False)()
    yield session
    session.close()


@pytest.fixture
def sql_store(db_session):
    return seed(SqlEntityStore(db_session))


@pytest.fixture
def memory_store():
    return seed(MemoryEntityStore())


@pytest.fixture(params=["memory", "sql"])
def store(request):
    """Runs a test against both store implementations."""
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture
def locks():
    return LocalLockService(wait=2)


@pytest.fixture
def gateway():
    return FakeGateway()


# ── HTTP ─────────────────────────────────────────────────────────────


@pytest.fixture
def client(db_session, sql_store, locks):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_lock_service] = lambda: locks
    app.dependency_overrides[get_gateway] = lambda: None

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def auth():
    return {"X-User-Id": "1"}
