"""
Pytest Fixtures für Fine Dine.

Jeder Test bekommt eine frische Datenbank (SQLite in-memory, oder
TEST_DATABASE_URL falls gesetzt) und einen Fake-Mailer, der alle
Sendeaufrufe mitschreibt statt Emails zu verschicken.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("LOG_TO_FILE", "false")

import pytest
from datetime import timedelta
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from finedine.main import app
from finedine.database import Base, get_db
from finedine.services.notification_service import get_notification_sender
from finedine.services.reservation_store import ReservationStore, get_reservation_store
from finedine.utils.booking import restaurant_today
from tests.helpers import RecordingSender, make_reservation


# ============ DATENBANK SETUP ============

SQLALCHEMY_TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "sqlite://")

if SQLALCHEMY_TEST_DATABASE_URL.startswith("sqlite"):
    # Eine gemeinsame Verbindung, damit TestClient-Thread und Test dieselbe In-Memory-DB sehen
    engine = create_engine(
        SQLALCHEMY_TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
else:
    engine = create_engine(SQLALCHEMY_TEST_DATABASE_URL)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# ============ BASIS FIXTURES ============

@pytest.fixture(scope="function")
def db():
    """Frische Datenbank für jeden Test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def sender():
    return RecordingSender()


@pytest.fixture
def store(db):
    return ReservationStore(db)


@pytest.fixture(scope="function")
def client(db, sender):
    """
    TestClient mit Test-DB und Fake-Mailer statt echtem SMTP/EmailJS.
    """
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notification_sender] = lambda: sender

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def use_store(db, client):
    """Ersetzt den ReservationStore der App, z.B. durch FailingStore."""
    def _use(store_class, **kwargs):
        app.dependency_overrides[get_reservation_store] = lambda: store_class(db, **kwargs)
    return _use


# ============ DATEN FIXTURES ============

@pytest.fixture
def pending_reservation(db):
    return make_reservation(db)


@pytest.fixture
def reservations(db):
    """Drei Reservierungen, absichtlich nicht sortiert angelegt."""
    today = restaurant_today()
    return [
        make_reservation(db, customer_name="Late", reservation_date=today + timedelta(days=10), reservation_time="20:00"),
        make_reservation(db, customer_name="Early Evening", reservation_date=today + timedelta(days=2), reservation_time="21:00"),
        make_reservation(db, customer_name="Early", reservation_date=today + timedelta(days=2), reservation_time="17:00"),
    ]
