from .store import CompanyStore
from .investability_service import InvestabilityService, ScoreChangeCoordinator
from .notification_service import NotificationService
from .audit_service import AuditService
from .company_service import CompanyService
from .kyc_service import KycService
from .financials_service import FinancialsService
from .document_service import DocumentService
from .file_storage import LocalFileStorage

__all__ = [
    "CompanyStore",
    "InvestabilityService",
    "ScoreChangeCoordinator",
    "NotificationService",
    "AuditService",
    "CompanyService",
    "KycService",
    "FinancialsService",
    "DocumentService",
    "LocalFileStorage",
]
