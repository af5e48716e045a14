# capital_marketplace/routes/notification_routes.py
"""User notification routes"""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from capital_marketplace.dependencies import get_notification_service
from capital_marketplace.schemas import APIResponse, CreateNotificationRequest, api_response
from capital_marketplace.services.notification_service import NotificationService, serialize_notification

router = APIRouter(tags=["Notifications"])


@router.get("/{user_id}")
async def get_notifications(
    user_id: UUID,
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    unread_only: bool = Query(False, alias="unreadOnly"),
    service: NotificationService = Depends(get_notification_service),
) -> APIResponse:
    service.get_user(user_id)
    notifications = service.get_for_user(user_id, limit=limit, offset=offset, unread_only=unread_only)
    return api_response({
        "notifications": [serialize_notification(n) for n in notifications],
        "unreadCount": service.get_unread_count(user_id),
        "totalCount": service.count_for_user(user_id),
    })


@router.post("/{user_id}", status_code=201)
async def create_notification(
    user_id: UUID,
    request: CreateNotificationRequest,
    service: NotificationService = Depends(get_notification_service),
) -> APIResponse:
    """Create a notification (admin/system use)"""
    service.get_user(user_id)
    notification = service.create(
        user_id,
        request.type.value,
        request.message,
        title=request.title,
        data=request.data,
    )
    return api_response(serialize_notification(notification))


@router.get("/{user_id}/unread-count")
async def get_unread_count(
    user_id: UUID,
    service: NotificationService = Depends(get_notification_service),
) -> APIResponse:
    return api_response({"count": service.get_unread_count(user_id)})


@router.put("/{user_id}/read-all")
async def mark_all_read(
    user_id: UUID,
    service: NotificationService = Depends(get_notification_service),
) -> APIResponse:
    marked = service.mark_all_as_read(user_id)
    return api_response({"success": True, "markedCount": marked})


@router.put("/{user_id}/{notification_id}/read")
async def mark_read(
    user_id: UUID,
    notification_id: UUID,
    service: NotificationService = Depends(get_notification_service),
) -> APIResponse:
    service.mark_as_read(notification_id, user_id)
    return api_response({"success": True})


@router.delete("/{user_id}/cleanup")
async def cleanup_notifications(
    user_id: UUID,
    older_than_days: Optional[int] = Query(None, ge=1, alias="olderThanDays"),
    service: NotificationService = Depends(get_notification_service),
) -> APIResponse:
    """Delete this user's read notifications older than the retention window"""
    service.get_user(user_id)
    deleted = service.cleanup(older_than_days=older_than_days, user_id=user_id)
    return api_response({"deletedCount": deleted})


@router.delete("/{user_id}/{notification_id}")
async def delete_notification(
    user_id: UUID,
    notification_id: UUID,
    service: NotificationService = Depends(get_notification_service),
) -> APIResponse:
    service.delete(notification_id, user_id)
    return api_response({"success": True})
