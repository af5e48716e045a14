# capital_marketplace/services/audit_service.py
"""Audit trail of company state changes"""
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from capital_marketplace.core.logger import get_logger
from capital_marketplace.models import AuditLog
from capital_marketplace.services.store import store_errors

logger = get_logger(__name__)

KYC_VERIFIED = "kyc_verified"
FINANCIALS_LINKED = "financials_linked"
FINANCIALS_UNLINKED = "financials_unlinked"
DOCUMENT_UPLOADED = "document_uploaded"
DOCUMENT_DELETED = "document_deleted"

# Points credited per event when replaying history
HISTORY_POINTS = {
    KYC_VERIFIED: 30,
    FINANCIALS_LINKED: 20,
    DOCUMENT_UPLOADED: 5,
}


def company_resource(company_id: UUID) -> str:
    return f"Company:{company_id}"


class AuditService:
    """Append-only audit log writer and reader."""

    def __init__(self, db: Session):
        self.db = db

    def record(
        self,
        user_id: UUID,
        action: str,
        resource: str,
        metadata: Optional[Dict[str, Any]] = None,
        timestamp: Optional[datetime] = None,
    ) -> AuditLog:
        """Add an entry to the current transaction. The caller commits."""
        entry = AuditLog(
            user_id=user_id,
            action=action,
            resource=resource,
            metadata_json=metadata,
        )
        if timestamp is not None:
            entry.created_at = timestamp

        self.db.add(entry)
        with store_errors():
            self.db.flush()
        logger.info(f"Audit event recorded: {action} on {resource}")
        return entry

    def list_for_resource(self, resource: str, actions: Optional[Iterable[str]] = None) -> List[AuditLog]:
        """Oldest first."""
        query = self.db.query(AuditLog).filter(AuditLog.resource == resource)
        if actions is not None:
            query = query.filter(AuditLog.action.in_(list(actions)))
        with store_errors():
            return query.order_by(AuditLog.created_at.asc()).all()

    def score_history(self, company_id: UUID) -> List[Dict[str, Any]]:
        """
        Approximate score timeline replayed from scoring audit events.

        Only additive events are replayed; revenue changes, unlinks and
        deletions are not reflected, so this is not an exact history.
        """
        events = self.list_for_resource(company_resource(company_id), HISTORY_POINTS.keys())

        history = []
        running_score = 0
        for event in events:
            change = HISTORY_POINTS[event.action]
            running_score = min(running_score + change, 100)
            history.append({
                "date": event.created_at,
                "score": running_score,
                "event": event.action,
                "change": change,
            })

        return history
