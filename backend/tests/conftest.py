"""Pytest configuration and fixtures."""

import os

# Keep the application's own engine off the filesystem
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from biolink.core.security import create_access_token
from biolink.database import Base, get_db
from biolink.main import app
from biolink.store import SqlStore, StoreError

TEST_USER_ID = "00000000-0000-0000-0000-000000000001"
TEST_USER_EMAIL = "tester@example.com"
OTHER_USER_ID = "00000000-0000-0000-0000-000000000002"

test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


@event.listens_for(test_engine, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


class RecordingStore(SqlStore):
    """SqlStore that records row updates and fails the ones listed in fail_ids."""

    def __init__(self, db, fail_ids=()):
        super().__init__(db)
        self.calls = []
        self.fail_ids = set(fail_ids)

    def update_link(self, link_id, **fields):
        self.calls.append(("links", link_id, fields))
        if link_id in self.fail_ids:
            raise StoreError("simulated network failure")
        return super().update_link(link_id, **fields)

    def update_collection(self, collection_id, **fields):
        self.calls.append(("collections", collection_id, fields))
        if collection_id in self.fail_ids:
            raise StoreError("simulated network failure")
        return super().update_collection(collection_id, **fields)

    def ungroup_links(self, collection_id):
        self.calls.append(("ungroup", collection_id, {}))
        if collection_id in self.fail_ids:
            raise StoreError("simulated network failure")
        return super().ungroup_links(collection_id)


@pytest.fixture
def db_session():
    """Fresh database for each test."""
    Base.metadata.create_all(bind=test_engine)
    session = TestSessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def store(db_session):
    return SqlStore(db_session)


@pytest.fixture
def recording_store(db_session):
    """Factory for a RecordingStore sharing the test session."""
    def make(fail_ids=()):
        return RecordingStore(db_session, fail_ids=fail_ids)
    return make


@pytest.fixture
def profile(store):
    return store.create_profile(
        id=TEST_USER_ID,
        username="tester",
        display_name="Test User",
        bio="Links I like",
        theme="default",
        is_public=True,
    )


@pytest.fixture
def other_profile(store):
    return store.create_profile(id=OTHER_USER_ID, username="someone", is_public=True)


@pytest.fixture
def make_collection(store, profile):
    def make(title, position=None, owner_id=None, is_active=True):
        owner_id = owner_id or profile.id
        if position is None:
            position = store.next_collection_position(owner_id)
        return store.insert_collection(
            user_id=owner_id, title=title, position=position, is_active=is_active
        )
    return make


@pytest.fixture
def make_link(store, profile):
    def make(title, collection=None, position=None, owner_id=None, is_active=True):
        owner_id = owner_id or profile.id
        collection_id = collection.id if collection is not None else None
        if position is None:
            position = store.next_link_position(owner_id, collection_id)
        return store.insert_link(
            user_id=owner_id,
            collection_id=collection_id,
            title=title,
            url=f"https://example.com/{title.lower()}",
            position=position,
            is_active=is_active,
        )
    return make


@pytest.fixture
def auth_token():
    return create_access_token({"sub": TEST_USER_ID, "email": TEST_USER_EMAIL})


@pytest.fixture
def auth_headers(auth_token):
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def client(db_session):
    """Test client with the database dependency pointed at the test session."""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
