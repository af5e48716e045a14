# capital_marketplace/dependencies.py
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from capital_marketplace.config import Settings
from capital_marketplace.core.database import get_db
from capital_marketplace.services.company_service import CompanyService
from capital_marketplace.services.document_service import DocumentService
from capital_marketplace.services.financials_service import FinancialsService
from capital_marketplace.services.investability_service import InvestabilityService, ScoreChangeCoordinator
from capital_marketplace.services.kyc_service import KycService
from capital_marketplace.services.notification_service import NotificationService
from capital_marketplace.services.audit_service import AuditService
from capital_marketplace.services.providers import MockBankingProvider, MockIdentityProvider
from capital_marketplace.services.store import CompanyStore


def get_app_settings(request: Request) -> Settings:
    """Settings the app was created with."""
    return request.app.state.settings


def get_investability_service(db: Session = Depends(get_db)) -> InvestabilityService:
    return InvestabilityService(CompanyStore(db))


def get_coordinator(
    request: Request,
    investability: InvestabilityService = Depends(get_investability_service),
) -> ScoreChangeCoordinator:
    """Coordinator carrying the handlers registered on the app."""
    return ScoreChangeCoordinator(investability, request.app.state.score_change_handlers)


def get_company_service(db: Session = Depends(get_db)) -> CompanyService:
    return CompanyService(db)


def get_kyc_service(
    db: Session = Depends(get_db),
    coordinator: ScoreChangeCoordinator = Depends(get_coordinator),
    settings: Settings = Depends(get_app_settings),
) -> KycService:
    return KycService(db, coordinator, MockIdentityProvider(settings.persona_environment))


def get_financials_service(
    db: Session = Depends(get_db),
    coordinator: ScoreChangeCoordinator = Depends(get_coordinator),
    settings: Settings = Depends(get_app_settings),
) -> FinancialsService:
    return FinancialsService(db, coordinator, MockBankingProvider(settings.plaid_environment))


def get_document_service(
    request: Request,
    db: Session = Depends(get_db),
    coordinator: ScoreChangeCoordinator = Depends(get_coordinator),
    settings: Settings = Depends(get_app_settings),
) -> DocumentService:
    return DocumentService(db, coordinator, request.app.state.file_storage, settings.max_file_size)


def get_notification_service(db: Session = Depends(get_db)) -> NotificationService:
    return NotificationService(db)


def get_audit_service(db: Session = Depends(get_db)) -> AuditService:
    return AuditService(db)
