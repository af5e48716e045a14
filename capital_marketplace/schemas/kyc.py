# capital_marketplace/schemas/kyc.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from uuid import UUID


class KycVerificationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    company_id: UUID = Field(..., alias="companyId")
    inquiry_id: Optional[str] = Field(None, alias="inquiryId")
    mock_verify: bool = Field(False, alias="mockVerify")
