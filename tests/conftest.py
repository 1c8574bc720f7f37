import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from bloom.db import Base, get_db, make_engine
from bloom.main import create_app
from bloom.store.memory import InMemoryStore
import bloom.models  # noqa: F401

PASSWORD = "secret123"

@pytest.fixture()
def engine():
    eng = make_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=eng)
    try:
        yield eng
    finally:
        Base.metadata.drop_all(bind=eng)
        eng.dispose()

@pytest.fixture()
def db_session(engine) -> Session:
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    session: Session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()

@pytest.fixture()
def client(db_session: Session) -> TestClient:
    app = create_app()

    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    return TestClient(app)

@pytest.fixture()
def mem_store() -> InMemoryStore:
    return InMemoryStore()

def uniq(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:8]}"

def register(client, username: str) -> dict:
    r = client.post(
        "/api/auth/register",
        json={"username": username, "email": f"{username}@example.com", "password": PASSWORD},
    )
    assert r.status_code == 201, r.text
    return r.json()

def auth(jwt: str) -> dict[str, str]:
    return {"authorization": f"bearer {jwt}"}

class Caller:
    def __init__(self, client, username: str):
        body = register(client, username)
        self.username = username
        self.id = body["user"]["id"]
        self.headers = auth(body["token"])

@pytest.fixture()
def make_user(client):
    def _make(prefix: str = "user") -> Caller:
        return Caller(client, uniq(prefix))

    return _make
