# capital_marketplace/routes/company_routes.py
"""Company onboarding routes"""
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from capital_marketplace.dependencies import get_company_service
from capital_marketplace.schemas import APIResponse, CreateCompanyRequest, UpdateCompanyRequest, api_response
from capital_marketplace.services.company_service import CompanyService, serialize_company

router = APIRouter(tags=["Companies"])


@router.post("", status_code=201)
async def create_company(
    request: CreateCompanyRequest,
    service: CompanyService = Depends(get_company_service),
) -> APIResponse:
    """Onboard a new company"""
    company = service.create_company(
        name=request.name,
        sector=request.sector.value,
        target_raise=request.target_raise,
        revenue=request.revenue,
        email=request.email,
    )
    return api_response(serialize_company(company))


@router.get("/by-email/{email}")
async def get_company_by_email(
    email: str,
    service: CompanyService = Depends(get_company_service),
) -> APIResponse:
    """Get the company registered by a user"""
    company = service.get_company_for_user_email(email)
    return api_response(serialize_company(company))


@router.get("/{company_id}")
async def get_company(
    company_id: UUID,
    email: str = Query(..., min_length=3),
    service: CompanyService = Depends(get_company_service),
) -> APIResponse:
    """Get a company owned by the user with `email`"""
    company = service.get_company(company_id, email=email)
    return api_response(serialize_company(company))


@router.put("/{company_id}")
async def update_company(
    company_id: UUID,
    request: UpdateCompanyRequest,
    service: CompanyService = Depends(get_company_service),
) -> APIResponse:
    """Update profile fields"""
    company = service.update_company(
        company_id,
        name=request.name,
        sector=request.sector.value if request.sector else None,
        target_raise=request.target_raise,
        revenue=request.revenue,
    )
    return api_response(serialize_company(company))
