from sqlalchemy import Column, String, UUID, Boolean, Float, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import relationship
import uuid
import enum
from .base import Base, TimestampMixin

class Sector(str, enum.Enum):
    """Sectors a company can register under."""
    TECHNOLOGY = "Technology"
    HEALTHCARE = "Healthcare"
    FINANCE = "Finance"
    CONSUMER_GOODS = "Consumer Goods"
    ENERGY = "Energy"
    REAL_ESTATE = "Real Estate"
    MANUFACTURING = "Manufacturing"
    EDUCATION = "Education"
    TRANSPORTATION = "Transportation"
    OTHER = "Other"

class Company(Base, TimestampMixin):
    """Company profile onboarded by a founder."""
    __tablename__ = "company"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("user.id"), nullable=False, unique=True)
    name = Column(String(255), nullable=False)
    sector = Column(String(100), nullable=False)
    target_raise = Column(Float, nullable=False)
    revenue = Column(Float, nullable=False, default=0.0)
    kyc_verified = Column(Boolean, nullable=False, default=False)
    financials_linked = Column(Boolean, nullable=False, default=False)

    # Relationships
    user = relationship("User", back_populates="company")
    documents = relationship("Document", back_populates="company", cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint("target_raise > 0", name="ck_company_target_raise_positive"),
        CheckConstraint("revenue >= 0", name="ck_company_revenue_non_negative"),
        Index("idx_company_user", "user_id"),
    )

    def __repr__(self):
        return f"<Company {self.name}>"
