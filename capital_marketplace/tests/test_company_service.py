# capital_marketplace/tests/test_company_service.py
import uuid

import pytest

from capital_marketplace.models import Notification, User
from capital_marketplace.services.company_service import CompanyService, serialize_company
from capital_marketplace.utils.exceptions import ConflictError, NotFoundError, ValidationError


@pytest.fixture
def companies(db_session):
    return CompanyService(db_session)


def create(companies, **overrides):
    values = {
        "name": "Acme Robotics",
        "sector": "Technology",
        "target_raise": 2_000_000,
        "revenue": 500_000,
        "email": "Founder@Acme.io",
    }
    values.update(overrides)
    return companies.create_company(**values)


class TestCreateCompany:

    def test_creates_user_and_company(self, companies, db_session):
        company = create(companies)

        user = db_session.get(User, company.user_id)
        assert user.email == "founder@acme.io"
        assert company.kyc_verified is False
        assert company.financials_linked is False

    def test_sends_welcome_notification(self, companies, db_session):
        company = create(companies)

        [notification] = db_session.query(Notification).filter(Notification.user_id == company.user_id).all()
        assert notification.title == "Onboarding Complete"
        assert '"Acme Robotics"' in notification.message

    def test_one_company_per_user(self, companies):
        create(companies)
        with pytest.raises(ConflictError, match="User already has a company registered"):
            create(companies, name="Second Venture")

    def test_existing_user_without_company(self, companies, db_session):
        db_session.add(User(email="founder@acme.io"))
        db_session.commit()

        company = create(companies)
        assert db_session.query(User).count() == 1
        assert company.user.email == "founder@acme.io"

    @pytest.mark.parametrize("overrides", [
        {"name": ""},
        {"sector": "Crypto"},
        {"target_raise": 0},
        {"revenue": -1},
        {"email": "not-an-email"},
    ])
    def test_invalid_fields(self, companies, overrides):
        with pytest.raises(ValidationError):
            create(companies, **overrides)


class TestLookupAndUpdate:

    def test_get_company_scoped_to_email(self, companies):
        company = create(companies)
        other = create(companies, email="other@example.com")

        assert companies.get_company(company.id, email="founder@acme.io").id == company.id
        with pytest.raises(NotFoundError):
            companies.get_company(other.id, email="founder@acme.io")
        with pytest.raises(NotFoundError, match="User not found"):
            companies.get_company(company.id, email="ghost@example.com")

    def test_get_company_for_user_email(self, companies):
        company = create(companies)
        assert companies.get_company_for_user_email("FOUNDER@acme.io").id == company.id
        with pytest.raises(NotFoundError):
            companies.get_company_for_user_email("ghost@example.com")

    def test_update_ignores_flags(self, companies):
        company = create(companies)
        updated = companies.update_company(company.id, revenue=750_000, kyc_verified=True, name=" Acme AI ")

        assert updated.revenue == 750_000
        assert updated.name == "Acme AI"
        assert updated.kyc_verified is False

    def test_update_unknown_company(self, companies):
        with pytest.raises(NotFoundError):
            companies.update_company(uuid.uuid4(), revenue=1)

    def test_serialize(self, companies):
        data = serialize_company(create(companies))
        assert data["targetRaise"] == 2_000_000
        assert data["kycVerified"] is False
        assert data["createdAt"].endswith("Z")
