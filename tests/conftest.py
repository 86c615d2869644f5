"""Shared test fixtures for the EnerTrack Device History Service tests.

Provides a test database (in-memory SQLite), a signed-cookie session store
with a test key, and a FastAPI test client with both dependencies
overridden.
"""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.models import Kategori, RiwayatPerangkat, User
from app.sessions import SignedCookieSessionStore, get_session_store

# Use in-memory SQLite for tests
TEST_DATABASE_URL = "sqlite:///:memory:"
TEST_SECRET_KEY = "test-secret-key"
SESSION_COOKIE_NAME = "elektronik_rumah_session"


@pytest.fixture()
def test_engine():
    """Create a test database engine with in-memory SQLite.

    Uses StaticPool so a single connection is shared across threads,
    which is required because TestClient dispatches requests in a
    separate thread while the test runs on the main thread.
    """
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def test_session(test_engine):
    """Create a test database session."""
    TestSession = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSession()
    yield session
    session.close()


@pytest.fixture()
def session_store():
    """A signed-cookie session store using the test secret key."""
    return SignedCookieSessionStore(
        secret_key=TEST_SECRET_KEY,
        cookie_name=SESSION_COOKIE_NAME,
        max_age=3600,
    )


@pytest.fixture()
def client(test_session, session_store):
    """Create a FastAPI test client with the test database and session store injected."""

    def override_get_db():
        yield test_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_store] = lambda: session_store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def login(client, session_store):
    """Return a helper that attaches a session cookie for the given values."""

    def _login(**values):
        client.cookies.set(SESSION_COOKIE_NAME, session_store.encode(values))
        return client

    return _login


@pytest.fixture()
def sample_data(test_session):
    """Insert users, categories, and device history into the test database.

    Users:
        - budi: three entries across two categories
        - siti: one entry
        - andi: no entries

    One of budi's entries points at a category id that does not exist.
    """
    users = [
        User(user_id=1, username="budi"),
        User(user_id=2, username="siti"),
        User(user_id=3, username="andi"),
    ]
    categories = [
        Kategori(kategori_id=1, nama_kategori="Dapur"),
        Kategori(kategori_id=2, nama_kategori="Penerangan"),
    ]
    records = [
        RiwayatPerangkat(
            id=10,
            user_id=1,
            nama_perangkat="Kulkas",
            merek="Sharp",
            daya=150.5,
            durasi=24.0,
            tanggal_input=datetime(2025, 5, 1, 8, 30, 0),
            kategori_id=1,
        ),
        RiwayatPerangkat(
            id=11,
            user_id=1,
            nama_perangkat="Lampu Teras",
            merek="Philips",
            daya=12.0,
            durasi=10.25,
            tanggal_input=datetime(2025, 5, 2, 19, 0, 0),
            kategori_id=2,
        ),
        RiwayatPerangkat(
            id=12,
            user_id=1,
            nama_perangkat="Rice Cooker",
            merek="Miyako",
            daya=395.0,
            durasi=1.5,
            tanggal_input=datetime(2025, 5, 3, 6, 15, 0),
            kategori_id=1,
        ),
        RiwayatPerangkat(
            id=13,
            user_id=1,
            nama_perangkat="Perangkat Lama",
            merek="Tanpa Merek",
            daya=5.0,
            durasi=1.0,
            tanggal_input=datetime(2025, 4, 30, 12, 0, 0),
            kategori_id=99,
        ),
        RiwayatPerangkat(
            id=20,
            user_id=2,
            nama_perangkat="Setrika",
            merek="Maspion",
            daya=350.0,
            durasi=0.75,
            tanggal_input=datetime(2025, 5, 1, 7, 0, 0),
            kategori_id=1,
        ),
    ]
    test_session.add_all(users + categories)
    test_session.commit()
    test_session.add_all(records)
    test_session.commit()
    return {"users": users, "categories": categories, "records": records}
