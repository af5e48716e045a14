# capital_marketplace/schemas/financials.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from uuid import UUID


class LinkFinancialsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    company_id: UUID = Field(..., alias="companyId")
    plaid_token: str = Field(..., min_length=1, alias="plaidToken")
    account_id: Optional[str] = Field(None, alias="accountId")
