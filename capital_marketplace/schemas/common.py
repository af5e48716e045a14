# capital_marketplace/schemas/common.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Optional, Generic, TypeVar

from capital_marketplace.utils.datetime_utils import get_utc_now, to_iso_string

T = TypeVar('T')


class ErrorDetail(BaseModel):
    field: str
    message: str


class APIResponse(BaseModel, Generic[T]):
    """Standard API response envelope."""
    success: bool = True
    data: Optional[T] = None
    timestamp: str


class ErrorResponse(BaseModel):
    """Error response."""
    model_config = ConfigDict(populate_by_name=True)

    success: bool = False
    error: str
    code: str
    path: str
    details: Optional[list[ErrorDetail]] = None
    retry_after: Optional[int] = Field(None, alias="retryAfter")

    def to_content(self) -> dict:
        """JSON body with unset optional fields left out."""
        return self.model_dump(by_alias=True, exclude_none=True)


def api_response(data: Any = None) -> APIResponse:
    """Wrap `data` in the success envelope."""
    return APIResponse(success=True, data=data, timestamp=to_iso_string(get_utc_now()))
