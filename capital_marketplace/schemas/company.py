# capital_marketplace/schemas/company.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

from capital_marketplace.models import Sector


class CreateCompanyRequest(BaseModel):
    """Onboarding form submitted by a founder"""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=255)
    sector: Sector
    target_raise: float = Field(..., gt=0, alias="targetRaise")
    revenue: float = Field(..., ge=0)
    email: str = Field(..., min_length=3, max_length=255)


class UpdateCompanyRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    sector: Optional[Sector] = None
    target_raise: Optional[float] = Field(None, gt=0, alias="targetRaise")
    revenue: Optional[float] = Field(None, ge=0)
