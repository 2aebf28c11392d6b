import os
import sys
from pathlib import Path

# Must be set before taskboard.db.session builds its engine.
os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.pop("DB_SSLMODE", None)

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, SQLModel  # noqa: E402

from taskboard.core.jwt import create_access_token  # noqa: E402
from taskboard.db import base as _models  # noqa: E402,F401
from taskboard.db import session as db_session  # noqa: E402
from taskboard.models.user import User  # noqa: E402


@pytest.fixture
def engine():
    # resolved per test: test_session_url reloads the module
    eng = db_session.engine
    SQLModel.metadata.create_all(eng)
    yield eng
    SQLModel.metadata.drop_all(eng)


@pytest.fixture
def db(engine):
    with Session(engine) as s:
        yield s


def _make_user(db: Session, name: str) -> User:
    user = User(name=name, email=f"{name.lower()}@example.com", email_verified=True)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def alice(db) -> User:
    return _make_user(db, "Alice")


@pytest.fixture
def bob(db) -> User:
    return _make_user(db, "Bob")


@pytest.fixture
def app(engine):
    from taskboard.main import app as fastapi_app

    return fastapi_app


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_headers():
    def _headers(user: User) -> dict:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _headers
