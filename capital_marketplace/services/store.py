# capital_marketplace/services/store.py
"""Read access to company state used by scoring and recommendations"""
from contextlib import contextmanager
from typing import Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.orm import Session

from capital_marketplace.core.logger import get_logger
from capital_marketplace.models import Company, Document
from capital_marketplace.utils.exceptions import NotFoundError, TransientStoreError

logger = get_logger(__name__)


@contextmanager
def store_errors():
    """Tag connection-level database failures as TransientStoreError."""
    try:
        yield
    except (OperationalError, InterfaceError) as e:
        logger.error(f"Data store unavailable: {e}")
        raise TransientStoreError() from e


class CompanyStore:
    """Company and document-count queries over one session."""

    def __init__(self, db: Session):
        self.db = db

    def find_company(self, company_id: UUID) -> Optional[Company]:
        with store_errors():
            return self.db.get(Company, company_id)

    def get_company(self, company_id: UUID) -> Company:
        company = self.find_company(company_id)
        if company is None:
            raise NotFoundError("Company not found")
        return company

    def count_documents_for_company(self, company_id: UUID) -> int:
        with store_errors():
            return self.db.scalar(
                select(func.count(Document.id)).where(Document.company_id == company_id)
            ) or 0
