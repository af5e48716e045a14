# capital_marketplace/services/financials_service.py
"""Bank account linking for companies"""
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from capital_marketplace.core.logger import get_logger
from capital_marketplace.services import audit_service
from capital_marketplace.services.audit_service import AuditService, company_resource
from capital_marketplace.services.investability_service import ScoreChangeCoordinator
from capital_marketplace.services.notification_service import NotificationService
from capital_marketplace.services.providers import MockBankingProvider
from capital_marketplace.services.store import CompanyStore, store_errors
from capital_marketplace.utils.datetime_utils import get_utc_now, to_iso_string
from capital_marketplace.utils.exceptions import AlreadyDoneError, ValidationError

logger = get_logger(__name__)


class FinancialsService:
    """Links and unlinks a company's bank accounts."""

    def __init__(
        self,
        db: Session,
        coordinator: ScoreChangeCoordinator,
        provider: Optional[MockBankingProvider] = None,
    ):
        self.db = db
        self.store = CompanyStore(db)
        self.coordinator = coordinator
        self.provider = provider or MockBankingProvider()

    def link(self, company_id: UUID, plaid_token: str, account_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Link bank accounts using a provider public token.

        Raises:
            NotFoundError: If the company does not exist
            AlreadyDoneError: If financials are already linked
        """
        company = self.store.get_company(company_id)

        if company.financials_linked:
            raise AlreadyDoneError("Financials already linked for this company")

        linked = self.provider.link(plaid_token, account_id)
        if not linked:
            return {"success": True, "linked": False}

        company.financials_linked = True
        AuditService(self.db).record(
            company.user_id,
            audit_service.FINANCIALS_LINKED,
            company_resource(company_id),
            metadata={
                "plaidToken": "[REDACTED]",
                "accountId": account_id,
                "timestamp": to_iso_string(get_utc_now()),
            },
        )
        with store_errors():
            self.db.commit()

        logger.info(f"✓ Financials linked for company {company_id}")

        try:
            NotificationService(self.db).notify_financials_linked(company.user_id)
        except Exception as e:
            self.db.rollback()
            logger.warning(f"Failed to send financials notification: {e}")

        self.coordinator.on_company_data_change(company_id)

        return {"success": True, "linked": True}

    def unlink(self, company_id: UUID) -> Dict[str, Any]:
        """
        Raises:
            NotFoundError: If the company does not exist
            AlreadyDoneError: If no accounts are linked
        """
        company = self.store.get_company(company_id)

        if not company.financials_linked:
            raise AlreadyDoneError("No financial accounts linked")

        self.provider.unlink(company_id)

        company.financials_linked = False
        AuditService(self.db).record(
            company.user_id,
            audit_service.FINANCIALS_UNLINKED,
            company_resource(company_id),
            metadata={"timestamp": to_iso_string(get_utc_now())},
        )
        with store_errors():
            self.db.commit()

        logger.info(f"✓ Financials unlinked for company {company_id}")

        self.coordinator.on_company_data_change(company_id)

        return {"success": True}

    def status(self, company_id: UUID) -> Dict[str, Any]:
        company = self.store.get_company(company_id)
        linked = company.financials_linked
        return {
            "linked": linked,
            "linkedAt": to_iso_string(company.updated_at) if linked else None,
            "accounts": self.provider.get_accounts(company_id) if linked else [],
        }

    def summary(self, company_id: UUID) -> Dict[str, Any]:
        """
        Raises:
            ValidationError: If financials are not linked
        """
        company = self.store.get_company(company_id)
        if not company.financials_linked:
            raise ValidationError("Financial accounts not linked")
        return self.provider.get_summary(company_id)
