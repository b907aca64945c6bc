import itertools
import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from storerating.main import app
from storerating.lib.db_con import get_session
from storerating.api.core.security import create_access_token, hash_password
from storerating.api.models import Rating, Store, User, UserRoleEnum

PASSWORD = "Secret@123"
_password_hash = None


def password_hash():
    # bcrypt is slow; hash the shared test password once
    global _password_hash
    if _password_hash is None:
        _password_hash = hash_password(PASSWORD)
    return _password_hash


@pytest.fixture(name="engine")
def engine_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(name="session")
def session_fixture(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session):
    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(session):
    counter = itertools.count(1)

    def _make(role=UserRoleEnum.user, name=None, email=None, address=None):
        n = next(counter)
        user = User(
            name=name or f"Test Account Holder Number {n:03d}",
            email=email or f"{role.value}{n}@example.com",
            password=password_hash(),
            address=address or f"{n} Market Street, Springfield",
            role=role,
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make


@pytest.fixture
def make_store(session):
    counter = itertools.count(1)

    def _make(name=None, email=None, address=None, owner=None):
        n = next(counter)
        store = Store(
            name=name or f"Store {n}",
            email=email or f"store{n}@example.com",
            address=address or f"{n} High Street, Springfield",
            owner_id=owner.id if owner else None,
        )
        session.add(store)
        session.commit()
        session.refresh(store)
        return store

    return _make


@pytest.fixture
def add_rating(session):
    def _add(user, store, value):
        rating = Rating(user_id=user.id, store_id=store.id, rating=value)
        session.add(rating)
        session.commit()
        session.refresh(rating)
        return rating

    return _add


@pytest.fixture
def admin(make_user):
    return make_user(role=UserRoleEnum.admin)


@pytest.fixture
def normal_user(make_user):
    return make_user(role=UserRoleEnum.user)


@pytest.fixture
def store_owner(make_user):
    return make_user(role=UserRoleEnum.store_owner)


def auth_header(user: User) -> dict:
    token = create_access_token(user.token_claims())
    return {"Authorization": f"Bearer {token}"}
