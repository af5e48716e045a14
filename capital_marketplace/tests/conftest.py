# capital_marketplace/tests/conftest.py
"""Shared fixtures: in-memory SQLite database, sample companies, API client"""
import pytest
from fastapi.testclient import TestClient

from capital_marketplace.config import Settings
from capital_marketplace.core.database import Database
from capital_marketplace.main import create_app
from capital_marketplace.models import Company, Document, User
from capital_marketplace.services.file_storage import LocalFileStorage
from capital_marketplace.services.investability_service import InvestabilityService, ScoreChangeCoordinator
from capital_marketplace.services.store import CompanyStore


@pytest.fixture
def database():
    """In-memory database shared across sessions (StaticPool)"""
    db = Database("sqlite://")
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def db_session(database):
    session = database.SessionLocal()
    yield session
    session.close()


@pytest.fixture
def make_company(db_session):
    """Factory persisting a user plus company. Keyword args override company fields."""
    counter = {"n": 0}

    def _make(documents: int = 0, **fields) -> Company:
        counter["n"] += 1
        user = User(email=f"founder{counter['n']}@example.com")
        db_session.add(user)
        db_session.flush()

        values = {
            "name": f"Startup {counter['n']}",
            "sector": "Technology",
            "target_raise": 1_000_000,
            "revenue": 0,
            "kyc_verified": False,
            "financials_linked": False,
        }
        values.update(fields)
        company = Company(user_id=user.id, **values)
        db_session.add(company)
        db_session.flush()

        for i in range(documents):
            db_session.add(Document(
                company_id=company.id,
                name=f"doc{i}.pdf",
                mime_type="application/pdf",
                size=100,
                path=f"/tmp/doc{i}.pdf",
            ))
        db_session.commit()
        return company

    return _make


@pytest.fixture
def investability(db_session):
    return InvestabilityService(CompanyStore(db_session))


@pytest.fixture
def coordinator(investability):
    return ScoreChangeCoordinator(investability)


@pytest.fixture
def storage(tmp_path):
    storage = LocalFileStorage(str(tmp_path / "uploads"))
    storage.ensure_root()
    return storage


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url="sqlite://",
        upload_dir=str(tmp_path / "uploads"),
        rate_limit_enabled=False,
        log_level="WARNING",
    )


@pytest.fixture
def app(settings, database):
    return create_app(settings=settings, database=database)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def onboarded(client):
    """A company created through the API. Returns its JSON representation."""
    response = client.post("/api/company", json={
        "name": "Acme Robotics",
        "sector": "Technology",
        "targetRaise": 2_000_000,
        "revenue": 500_000,
        "email": "founder@acme.io",
    })
    assert response.status_code == 201
    return response.json()["data"]
