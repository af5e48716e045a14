from sqlalchemy import Column, String, UUID, Integer, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
import uuid
import enum
from .base import Base
from capital_marketplace.utils.datetime_utils import get_utc_now

class DocumentCategory(str, enum.Enum):
    """Data room folders. Used for filtering only."""
    PITCH_DECK = "pitch-deck"
    FINANCIAL_STATEMENTS = "financial-statements"
    BUSINESS_PLAN = "business-plan"
    LEGAL_DOCUMENTS = "legal-documents"
    OTHER = "other"

class Document(Base):
    """Data room file metadata. Immutable once uploaded."""
    __tablename__ = "document"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    company_id = Column(UUID(as_uuid=True), ForeignKey("company.id"), nullable=False)
    name = Column(String(255), nullable=False)
    mime_type = Column(String(255), nullable=False)
    size = Column(Integer, nullable=False)
    path = Column(String(1024), nullable=False)
    category = Column(String(50), nullable=False, default=DocumentCategory.OTHER.value)
    created_at = Column(DateTime, nullable=False, default=get_utc_now)

    # Relationships
    company = relationship("Company", back_populates="documents")

    __table_args__ = (
        Index("idx_document_company", "company_id"),
        Index("idx_document_category", "category"),
    )

    def __repr__(self):
        return f"<Document {self.name}>"
