from sqlalchemy import Column, String, UUID, Index
from sqlalchemy.orm import relationship
import uuid
from .base import Base, TimestampMixin

class User(Base, TimestampMixin):
    """Founder account - owns at most one company."""
    __tablename__ = "user"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(255), nullable=False, unique=True)

    # Relationships
    company = relationship("Company", back_populates="user", uselist=False)
    notifications = relationship("Notification", back_populates="user", cascade="all, delete-orphan")
    audit_logs = relationship("AuditLog", back_populates="user", cascade="all, delete-orphan")

    __table_args__ = (
        Index("idx_user_email", "email"),
    )

    def __repr__(self):
        return f"<User {self.email}>"
