from .common import APIResponse, ErrorResponse, ErrorDetail, api_response
from .company import CreateCompanyRequest, UpdateCompanyRequest
from .kyc import KycVerificationRequest
from .financials import LinkFinancialsRequest
from .notification import CreateNotificationRequest

__all__ = [
    "APIResponse",
    "ErrorResponse",
    "ErrorDetail",
    "api_response",
    "CreateCompanyRequest",
    "UpdateCompanyRequest",
    "KycVerificationRequest",
    "LinkFinancialsRequest",
    "CreateNotificationRequest",
]
