# capital_marketplace/routes/kyc_routes.py
"""KYC verification routes"""
from uuid import UUID

from fastapi import APIRouter, Depends

from capital_marketplace.dependencies import get_kyc_service
from capital_marketplace.schemas import APIResponse, KycVerificationRequest, api_response
from capital_marketplace.services.kyc_service import KycService

router = APIRouter(tags=["KYC"])


@router.post("/verify")
async def verify_kyc(
    request: KycVerificationRequest,
    service: KycService = Depends(get_kyc_service),
) -> APIResponse:
    result = service.verify(
        request.company_id,
        inquiry_id=request.inquiry_id,
        mock_verify=request.mock_verify,
    )
    return api_response(result)


@router.get("/status/{company_id}")
async def get_kyc_status(
    company_id: UUID,
    service: KycService = Depends(get_kyc_service),
) -> APIResponse:
    return api_response(service.status(company_id))
