# capital_marketplace/routes/score_routes.py
"""Investability score routes"""
from uuid import UUID

from fastapi import APIRouter, Depends

from capital_marketplace.dependencies import (
    get_audit_service,
    get_coordinator,
    get_investability_service,
)
from capital_marketplace.schemas import APIResponse, api_response
from capital_marketplace.services.audit_service import AuditService
from capital_marketplace.services.investability_service import (
    InvestabilityService,
    ScoreChangeCoordinator,
    calculate_score,
    get_recommendations,
)
from capital_marketplace.utils.datetime_utils import serialize_datetime_fields

router = APIRouter(tags=["Score"])


@router.get("/{company_id}")
async def get_score(
    company_id: UUID,
    investability: InvestabilityService = Depends(get_investability_service),
) -> APIResponse:
    return api_response(investability.calculate_score(company_id).to_dict())


@router.get("/{company_id}/recommendations")
async def get_score_recommendations(
    company_id: UUID,
    investability: InvestabilityService = Depends(get_investability_service),
) -> APIResponse:
    return api_response(investability.get_recommendations(company_id))


@router.get("/{company_id}/breakdown")
async def get_score_breakdown(
    company_id: UUID,
    investability: InvestabilityService = Depends(get_investability_service),
    audit: AuditService = Depends(get_audit_service),
) -> APIResponse:
    """Score, recommendations, approximate history and the inputs behind them"""
    company = investability.store.get_company(company_id)
    document_count = investability.store.count_documents_for_company(company_id)

    return api_response({
        "score": calculate_score(company, document_count).to_dict(),
        "recommendations": get_recommendations(company, document_count),
        "history": serialize_datetime_fields(audit.score_history(company_id)),
        "companyInfo": {
            "name": company.name,
            "sector": company.sector,
            "revenue": company.revenue,
            "targetRaise": company.target_raise,
            "documentCount": document_count,
            "kycVerified": company.kyc_verified,
            "financialsLinked": company.financials_linked,
        },
    })


@router.post("/{company_id}/recalculate")
async def recalculate_score(
    company_id: UUID,
    coordinator: ScoreChangeCoordinator = Depends(get_coordinator),
) -> APIResponse:
    """Force a recomputation and run the score-change handlers"""
    coordinator.on_company_data_change(company_id)
    return api_response(coordinator.investability.calculate_score(company_id).to_dict())
