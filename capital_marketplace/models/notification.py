from sqlalchemy import Column, String, Text, UUID, DateTime, ForeignKey, Index, JSON
from sqlalchemy.orm import relationship
import uuid
import enum
from .base import Base, TimestampMixin

class NotificationType(str, enum.Enum):
    """Severity of a user notification."""
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"

class Notification(Base, TimestampMixin):
    """In-app message for a user. Unread while read_at is null."""
    __tablename__ = "notification"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("user.id"), nullable=False)
    type = Column(String(20), nullable=False, default=NotificationType.INFO.value)
    title = Column(String(255), nullable=True)
    message = Column(Text, nullable=False)
    data = Column(JSON, nullable=True)
    read_at = Column(DateTime, nullable=True)

    # Relationships
    user = relationship("User", back_populates="notifications")

    __table_args__ = (
        Index("idx_notification_user", "user_id"),
        Index("idx_notification_created_at", "created_at"),
    )

    def __repr__(self):
        return f"<Notification {self.type}: {self.title or self.message[:30]}>"
