# capital_marketplace/schemas/notification.py
from pydantic import BaseModel, Field
from typing import Any, Optional

from capital_marketplace.models import NotificationType


class CreateNotificationRequest(BaseModel):
    """System/admin-issued notification"""
    type: NotificationType
    message: str = Field(..., min_length=1)
    title: Optional[str] = Field(None, max_length=255)
    data: Optional[dict[str, Any]] = None
