# capital_marketplace/services/notification_service.py
"""In-app notifications: storage, read state and the message catalog"""
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from capital_marketplace.config import get_settings
from capital_marketplace.core.logger import get_logger
from capital_marketplace.models import Notification, NotificationType, User
from capital_marketplace.services.store import store_errors
from capital_marketplace.utils.datetime_utils import days_ago, get_utc_now, to_iso_string
from capital_marketplace.utils.exceptions import NotFoundError, ValidationError

logger = get_logger(__name__)


def serialize_notification(notification: Notification) -> Dict[str, Any]:
    return {
        "id": str(notification.id),
        "userId": str(notification.user_id),
        "type": notification.type,
        "title": notification.title,
        "message": notification.message,
        "data": notification.data,
        "read": notification.read_at is not None,
        "readAt": to_iso_string(notification.read_at),
        "createdAt": to_iso_string(notification.created_at),
    }


class NotificationService:
    """Service for creating and managing user notifications."""

    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: UUID) -> User:
        with store_errors():
            user = self.db.get(User, user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def create(
        self,
        user_id: UUID,
        type: str,
        message: str,
        title: Optional[str] = None,
        data: Optional[Dict[str, Any]] = None,
    ) -> Notification:
        """
        Create a notification for a user.

        Raises:
            ValidationError: If type is unknown or message is empty
        """
        try:
            type = NotificationType(type).value
        except ValueError:
            raise ValidationError(f"Invalid notification type: {type}")

        if not message or not message.strip():
            raise ValidationError("Notification message is required")

        notification = Notification(
            user_id=user_id,
            type=type,
            title=title,
            message=message,
            data=data,
        )
        self.db.add(notification)
        with store_errors():
            self.db.commit()

        logger.info(f"Notification created for user {user_id}: {title or type}")
        return notification

    def get_for_user(
        self,
        user_id: UUID,
        limit: int = 50,
        offset: int = 0,
        unread_only: bool = False,
    ) -> List[Notification]:
        """Newest first."""
        query = self.db.query(Notification).filter(Notification.user_id == user_id)
        if unread_only:
            query = query.filter(Notification.read_at.is_(None))

        with store_errors():
            return (
                query.order_by(Notification.created_at.desc())
                .limit(limit)
                .offset(offset)
                .all()
            )

    def count_for_user(self, user_id: UUID) -> int:
        with store_errors():
            return (
                self.db.query(func.count(Notification.id))
                .filter(Notification.user_id == user_id)
                .scalar()
            ) or 0

    def get_unread_count(self, user_id: UUID) -> int:
        with store_errors():
            return (
                self.db.query(func.count(Notification.id))
                .filter(Notification.user_id == user_id, Notification.read_at.is_(None))
                .scalar()
            ) or 0

    def _get_owned(self, notification_id: UUID, user_id: UUID) -> Notification:
        with store_errors():
            notification = (
                self.db.query(Notification)
                .filter(Notification.id == notification_id, Notification.user_id == user_id)
                .first()
            )
        if not notification:
            raise NotFoundError("Notification not found")
        return notification

    def mark_as_read(self, notification_id: UUID, user_id: UUID) -> Notification:
        """
        Raises:
            NotFoundError: If the notification does not exist or belongs to someone else
        """
        notification = self._get_owned(notification_id, user_id)
        if notification.read_at is None:
            notification.read_at = get_utc_now()
            with store_errors():
                self.db.commit()
        return notification

    def mark_all_as_read(self, user_id: UUID) -> int:
        """Returns the number of notifications marked."""
        with store_errors():
            updated = (
                self.db.query(Notification)
                .filter(Notification.user_id == user_id, Notification.read_at.is_(None))
                .update({Notification.read_at: get_utc_now()}, synchronize_session=False)
            )
            self.db.commit()
        logger.info(f"Marked {updated} notifications as read for user {user_id}")
        return updated

    def delete(self, notification_id: UUID, user_id: UUID) -> None:
        notification = self._get_owned(notification_id, user_id)
        self.db.delete(notification)
        with store_errors():
            self.db.commit()

    def cleanup(self, older_than_days: Optional[int] = None, user_id: Optional[UUID] = None) -> int:
        """
        Delete read notifications created more than `older_than_days` ago.
        Unread notifications are never removed.
        """
        if older_than_days is None:
            older_than_days = get_settings().notification_retention_days

        query = self.db.query(Notification).filter(
            Notification.read_at.isnot(None),
            Notification.created_at < days_ago(older_than_days),
        )
        if user_id is not None:
            query = query.filter(Notification.user_id == user_id)

        with store_errors():
            deleted = query.delete(synchronize_session=False)
            self.db.commit()

        logger.info(f"Cleaned up {deleted} old notifications")
        return deleted

    # Message catalog

    def notify_onboarding_complete(self, user_id: UUID, company_name: str) -> Notification:
        return self.create(
            user_id,
            NotificationType.SUCCESS.value,
            f'Welcome to Capital Marketplace! Your company "{company_name}" has been successfully onboarded.',
            title="Onboarding Complete",
            data={"event": "onboarding_complete", "companyName": company_name},
        )

    def notify_kyc_verified(self, user_id: UUID) -> Notification:
        return self.create(
            user_id,
            NotificationType.SUCCESS.value,
            "Your KYC verification has been completed successfully. You earned 30 investability points!",
            title="KYC Verified",
            data={"event": "kyc_verified", "pointsEarned": 30},
        )

    def notify_financials_linked(self, user_id: UUID) -> Notification:
        return self.create(
            user_id,
            NotificationType.SUCCESS.value,
            "Your bank account has been successfully linked. You earned 20 investability points!",
            title="Financials Linked",
            data={"event": "financials_linked", "pointsEarned": 20},
        )

    def notify_document_uploaded(self, user_id: UUID, document_name: str) -> Notification:
        return self.create(
            user_id,
            NotificationType.INFO.value,
            f'Document "{document_name}" has been uploaded successfully to your data room.',
            title="Document Uploaded",
            data={"event": "document_uploaded", "documentName": document_name},
        )

    def notify_score_improved(self, user_id: UUID, old_score: int, new_score: int) -> Notification:
        improvement = new_score - old_score
        return self.create(
            user_id,
            NotificationType.SUCCESS.value,
            f"Great progress! Your investability score improved by {improvement} points "
            f"({old_score} → {new_score}).",
            title="Score Improved",
            data={
                "event": "score_improved",
                "oldScore": old_score,
                "newScore": new_score,
                "improvement": improvement,
            },
        )
