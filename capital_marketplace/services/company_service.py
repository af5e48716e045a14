# capital_marketplace/services/company_service.py
"""Company onboarding and profile management"""
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from capital_marketplace.core.logger import get_logger
from capital_marketplace.models import Company, Sector, User
from capital_marketplace.services.notification_service import NotificationService
from capital_marketplace.services.store import CompanyStore, store_errors
from capital_marketplace.utils.datetime_utils import to_iso_string
from capital_marketplace.utils.exceptions import ConflictError, NotFoundError, ValidationError
from capital_marketplace.utils.validators import validate_email

logger = get_logger(__name__)

UPDATABLE_FIELDS = ("name", "sector", "target_raise", "revenue")


def serialize_company(company: Company) -> Dict[str, Any]:
    return {
        "id": str(company.id),
        "userId": str(company.user_id),
        "name": company.name,
        "sector": company.sector,
        "targetRaise": company.target_raise,
        "revenue": company.revenue,
        "kycVerified": company.kyc_verified,
        "financialsLinked": company.financials_linked,
        "createdAt": to_iso_string(company.created_at),
        "updatedAt": to_iso_string(company.updated_at),
    }


def _validate_fields(
    name: Optional[str] = None,
    sector: Optional[str] = None,
    target_raise: Optional[float] = None,
    revenue: Optional[float] = None,
) -> None:
    if name is not None and not (1 <= len(name.strip()) <= 255):
        raise ValidationError("Company name must be between 1 and 255 characters")

    if sector is not None:
        try:
            Sector(sector)
        except ValueError:
            raise ValidationError(f"Invalid sector: {sector}")

    if target_raise is not None and target_raise <= 0:
        raise ValidationError("Target raise must be positive")

    if revenue is not None and revenue < 0:
        raise ValidationError("Revenue must be non-negative")


class CompanyService:
    """Service for onboarding and managing companies"""

    def __init__(self, db: Session):
        self.db = db
        self.store = CompanyStore(db)

    def _find_user(self, email: str) -> Optional[User]:
        with store_errors():
            return self.db.query(User).filter(User.email == email).first()

    def create_company(
        self,
        name: str,
        sector: str,
        target_raise: float,
        revenue: float,
        email: str,
    ) -> Company:
        """
        Onboard a company, creating the founder's user record if needed.

        Raises:
            ValidationError: If a field is invalid
            ConflictError: If the user already has a company
        """
        try:
            email = validate_email(email)
        except ValueError as e:
            raise ValidationError(str(e))
        _validate_fields(name=name, sector=sector, target_raise=target_raise, revenue=revenue)
        name = name.strip()
        sector = Sector(sector).value

        user = self._find_user(email)
        if user is None:
            user = User(email=email)
            self.db.add(user)
            with store_errors():
                self.db.flush()
            logger.info(f"✓ User created: {email}")
        elif user.company is not None:
            raise ConflictError("User already has a company registered")

        company = Company(
            user_id=user.id,
            name=name,
            sector=sector,
            target_raise=target_raise,
            revenue=revenue,
            kyc_verified=False,
            financials_linked=False,
        )
        self.db.add(company)
        try:
            with store_errors():
                self.db.commit()
        except IntegrityError:
            # Lost a race with another create for the same user
            self.db.rollback()
            raise ConflictError("User already has a company registered")

        logger.info(f"✓ Company created: {name} (ID: {company.id}) for user {email}")

        try:
            NotificationService(self.db).notify_onboarding_complete(user.id, name)
        except Exception as e:
            self.db.rollback()
            logger.warning(f"Failed to send onboarding notification: {e}")

        return company

    def get_company(self, company_id: UUID, email: Optional[str] = None) -> Company:
        """
        Fetch a company. When `email` is given the company must belong to that user.

        Raises:
            NotFoundError: If the user or company does not exist
        """
        if email is None:
            return self.store.get_company(company_id)

        user = self._find_user(email.strip().lower())
        if user is None:
            raise NotFoundError("User not found")

        company = self.store.find_company(company_id)
        if company is None or company.user_id != user.id:
            raise NotFoundError("Company not found")
        return company

    def get_company_for_user_email(self, email: str) -> Company:
        user = self._find_user(email.strip().lower())
        if user is None:
            raise NotFoundError("User not found")
        if user.company is None:
            raise NotFoundError("No company found for this user")
        return user.company

    def update_company(self, company_id: UUID, **fields) -> Company:
        """
        Update profile fields (name, sector, target_raise, revenue).

        Flags (kyc_verified, financials_linked) are only changed through
        their own services and are ignored here.
        """
        company = self.store.get_company(company_id)

        changes = {
            key: value
            for key, value in fields.items()
            if key in UPDATABLE_FIELDS and value is not None
        }
        _validate_fields(**changes)
        if "name" in changes:
            changes["name"] = changes["name"].strip()
        if "sector" in changes:
            changes["sector"] = Sector(changes["sector"]).value

        for key, value in changes.items():
            setattr(company, key, value)

        with store_errors():
            self.db.commit()

        logger.info(f"✓ Company updated: {company.id} ({', '.join(changes) or 'no changes'})")
        return company
