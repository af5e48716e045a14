from sqlalchemy import Column, String, UUID, DateTime, ForeignKey, Index, JSON
from sqlalchemy.orm import relationship
import uuid
from .base import Base
from capital_marketplace.utils.datetime_utils import get_utc_now

class AuditLog(Base):
    """Append-only record of state changes that affect a company."""
    __tablename__ = "audit_log"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("user.id"), nullable=False)
    action = Column(String(100), nullable=False)
    resource = Column(String(100), nullable=True)
    # "metadata" is reserved on declarative classes
    metadata_json = Column("metadata", JSON, nullable=True)
    created_at = Column(DateTime, nullable=False, default=get_utc_now, index=True)

    # Relationships
    user = relationship("User", back_populates="audit_logs")

    __table_args__ = (
        Index("idx_audit_user", "user_id"),
        Index("idx_audit_resource", "resource"),
        Index("idx_audit_action", "action"),
    )

    def __repr__(self):
        return f"<AuditLog {self.action}>"
