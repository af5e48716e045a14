# capital_marketplace/routes/financials_routes.py
"""Bank account linking routes"""
from uuid import UUID

from fastapi import APIRouter, Depends

from capital_marketplace.dependencies import get_financials_service
from capital_marketplace.schemas import APIResponse, LinkFinancialsRequest, api_response
from capital_marketplace.services.financials_service import FinancialsService

router = APIRouter(tags=["Financials"])


@router.post("/link")
async def link_financials(
    request: LinkFinancialsRequest,
    service: FinancialsService = Depends(get_financials_service),
) -> APIResponse:
    result = service.link(request.company_id, request.plaid_token, request.account_id)
    return api_response(result)


@router.get("/status/{company_id}")
async def get_financials_status(
    company_id: UUID,
    service: FinancialsService = Depends(get_financials_service),
) -> APIResponse:
    return api_response(service.status(company_id))


@router.delete("/link/{company_id}")
async def unlink_financials(
    company_id: UUID,
    service: FinancialsService = Depends(get_financials_service),
) -> APIResponse:
    return api_response(service.unlink(company_id))


@router.get("/summary/{company_id}")
async def get_financial_summary(
    company_id: UUID,
    service: FinancialsService = Depends(get_financials_service),
) -> APIResponse:
    return api_response(service.summary(company_id))
