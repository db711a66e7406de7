"""
Pytest Configuration and Shared Fixtures
========================================

This module provides shared fixtures for all DoseTrack tests.
Fixtures include database sessions, test clients, stores and sample records.
"""

import os
import sys
import time
from datetime import datetime, date, timedelta
from typing import Generator, Callable, Optional

# Keep the app's own engine in memory before config is imported
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from database import Base, get_db
from models import MedicationRecord
from services.blob_store import LocalBlobStore
from services.intake_service import IntakeService
from services.record_store import SqlRecordStore
from api.deps import get_blob_store
from app import app


OWNER_ID = "user-1"
OTHER_OWNER_ID = "user-2"

# Wednesday; the 15th keeps a two-week history inside the month
FIXED_NOW = datetime(2024, 3, 15, 9, 30, 0)
TODAY = FIXED_NOW.date()


# ==================== DATABASE FIXTURES ====================

@pytest.fixture(scope="function")
def test_engine():
    """Create a test database engine with in-memory SQLite"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    # Create all tables
    Base.metadata.create_all(bind=engine)

    yield engine

    # Cleanup
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(test_engine) -> Generator[Session, None, None]:
    """Create a test database session"""
    TestingSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=test_engine
    )

    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.rollback()
        session.close()


# ==================== STORE / SERVICE FIXTURES ====================

@pytest.fixture
def record_store(db_session: Session) -> SqlRecordStore:
    """Record store over the test session"""
    return SqlRecordStore(db_session)


@pytest.fixture
def blob_store(tmp_path) -> LocalBlobStore:
    """Blob store writing into a temporary directory"""
    return LocalBlobStore(root_dir=str(tmp_path), bucket="medication-proofs")


@pytest.fixture
def clock() -> Callable[[], datetime]:
    """Frozen clock"""
    return lambda: FIXED_NOW


@pytest.fixture
def non_utc_timezone(monkeypatch):
    """Run with the process local time zone set to UTC-5/-4"""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset not available on this platform")
    monkeypatch.setenv("TZ", "America/New_York")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


@pytest.fixture
def intake_service(record_store, blob_store, clock) -> IntakeService:
    """Intake service wired to the test stores and frozen clock"""
    return IntakeService(record_store, blob_store, clock=clock)


@pytest.fixture(scope="function")
def client(db_session: Session, blob_store: LocalBlobStore) -> Generator[TestClient, None, None]:
    """Create a FastAPI test client with database and blob store overrides"""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_blob_store] = lambda: blob_store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Headers identifying the test owner"""
    return {"X-User-Id": OWNER_ID}


# ==================== SAMPLE DATA FIXTURES ====================

@pytest.fixture
def sample_record_data():
    """Sample payload for scheduling a dose"""
    return {
        "name": "Metformin",
        "dosage": "500mg",
        "scheduled_date": TODAY.isoformat(),
        "scheduled_time": "08:00",
    }


@pytest.fixture
def make_record(db_session: Session):
    """Factory inserting a record directly into the test database"""

    def _make(
        scheduled_date: date = TODAY,
        taken: bool = False,
        owner_id: str = OWNER_ID,
        name: str = "Metformin",
        dosage: str = "500mg",
        scheduled_time: str = "08:00",
        photo_ref: Optional[str] = None,
    ) -> MedicationRecord:
        record = MedicationRecord(
            owner_id=owner_id,
            name=name,
            dosage=dosage,
            scheduled_date=scheduled_date,
            scheduled_time=scheduled_time,
            taken=taken,
            taken_at=FIXED_NOW if taken else None,
            photo_ref=photo_ref,
        )
        db_session.add(record)
        db_session.commit()
        db_session.refresh(record)
        return record

    return _make


@pytest.fixture
def two_week_history(make_record):
    """
    Fourteen days ending today: every day taken except three days ago,
    which has one of two doses missed.
    """
    records = []
    for offset in range(14):
        day = TODAY - timedelta(days=offset)
        if offset == 3:
            records.append(make_record(day, taken=True, scheduled_time="08:00"))
            records.append(make_record(day, taken=False, scheduled_time="20:00"))
        else:
            records.append(make_record(day, taken=True))
    return records


# ==================== MARKERS ====================

def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "api: mark test as an API test")
    config.addinivalue_line("markers", "database: mark test as requiring database")
