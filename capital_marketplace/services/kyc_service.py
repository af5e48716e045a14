# capital_marketplace/services/kyc_service.py
"""KYC verification for companies"""
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from capital_marketplace.core.logger import get_logger
from capital_marketplace.services import audit_service
from capital_marketplace.services.audit_service import AuditService, company_resource
from capital_marketplace.services.investability_service import ScoreChangeCoordinator
from capital_marketplace.services.notification_service import NotificationService
from capital_marketplace.services.providers import MockIdentityProvider
from capital_marketplace.services.store import CompanyStore, store_errors
from capital_marketplace.utils.datetime_utils import get_utc_now, to_iso_string
from capital_marketplace.utils.exceptions import AlreadyDoneError, ValidationError

logger = get_logger(__name__)


class KycService:
    """Marks companies KYC-verified. Verification is one-way."""

    def __init__(
        self,
        db: Session,
        coordinator: ScoreChangeCoordinator,
        provider: Optional[MockIdentityProvider] = None,
    ):
        self.db = db
        self.store = CompanyStore(db)
        self.coordinator = coordinator
        self.provider = provider or MockIdentityProvider()

    def verify(
        self,
        company_id: UUID,
        inquiry_id: Optional[str] = None,
        mock_verify: bool = False,
    ) -> Dict[str, Any]:
        """
        Verify a company's identity.

        Returns:
            {"success": True, "verified": bool}; verified is False when the
            provider rejects the inquiry, in which case nothing changes.

        Raises:
            NotFoundError: If the company does not exist
            AlreadyDoneError: If the company is already verified
            ValidationError: If neither mock_verify nor inquiry_id is given
        """
        company = self.store.get_company(company_id)

        if company.kyc_verified:
            raise AlreadyDoneError("KYC already verified for this company")

        if mock_verify:
            verified = True
        elif inquiry_id:
            verified = self.provider.verify_inquiry(inquiry_id)
        else:
            raise ValidationError("Either mockVerify or inquiryId is required")

        if not verified:
            logger.info(f"KYC verification rejected for company {company_id}")
            return {"success": True, "verified": False}

        company.kyc_verified = True
        AuditService(self.db).record(
            company.user_id,
            audit_service.KYC_VERIFIED,
            company_resource(company_id),
            metadata={
                "inquiryId": inquiry_id,
                "mockVerify": mock_verify,
                "timestamp": to_iso_string(get_utc_now()),
            },
        )
        with store_errors():
            self.db.commit()

        logger.info(f"✓ KYC verified for company {company_id}")

        try:
            NotificationService(self.db).notify_kyc_verified(company.user_id)
        except Exception as e:
            self.db.rollback()
            logger.warning(f"Failed to send KYC notification: {e}")

        self.coordinator.on_company_data_change(company_id)

        return {"success": True, "verified": True}

    def status(self, company_id: UUID) -> Dict[str, Any]:
        company = self.store.get_company(company_id)
        return {
            "verified": company.kyc_verified,
            "verifiedAt": to_iso_string(company.updated_at) if company.kyc_verified else None,
        }
