# capital_marketplace/services/document_service.py
"""Data room documents: upload, listing, download and deletion"""
import uuid
from collections import Counter
from typing import Any, Dict, List, Optional
from uuid import UUID

import filetype
from sqlalchemy.orm import Session

from capital_marketplace.config import get_settings
from capital_marketplace.core.logger import get_logger
from capital_marketplace.models import Document, DocumentCategory
from capital_marketplace.services import audit_service
from capital_marketplace.services.audit_service import AuditService, company_resource
from capital_marketplace.services.file_storage import LocalFileStorage
from capital_marketplace.services.investability_service import ScoreChangeCoordinator
from capital_marketplace.services.notification_service import NotificationService
from capital_marketplace.services.store import CompanyStore, store_errors
from capital_marketplace.utils.datetime_utils import get_utc_now, to_iso_string
from capital_marketplace.utils.exceptions import NotFoundError, ValidationError
from capital_marketplace.utils.validators import sanitize_file_name

logger = get_logger(__name__)

ALLOWED_MIME_TYPES = (
    "application/pdf",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "image/jpeg",
    "image/png",
)

# Rejected anywhere inside an uploaded image
SUSPICIOUS_PATTERNS = (b"<script", b"javascript:", b"vbscript:", b"<?php")


def normalize_category(category: Optional[str]) -> str:
    """Unknown or missing categories fall back to `other`."""
    try:
        return DocumentCategory(category).value
    except ValueError:
        return DocumentCategory.OTHER.value


def serialize_document(document: Document) -> Dict[str, Any]:
    return {
        "id": str(document.id),
        "companyId": str(document.company_id),
        "name": document.name,
        "mimeType": document.mime_type,
        "size": document.size,
        "category": document.category,
        "createdAt": to_iso_string(document.created_at),
    }


class DocumentService:
    """Service for a company's data room"""

    def __init__(
        self,
        db: Session,
        coordinator: ScoreChangeCoordinator,
        storage: LocalFileStorage,
        max_file_size: Optional[int] = None,
    ):
        self.db = db
        self.store = CompanyStore(db)
        self.coordinator = coordinator
        self.storage = storage
        self.max_file_size = max_file_size or get_settings().max_file_size

    def validate_file(self, content: bytes) -> str:
        """
        Check size, detect the real type from the file's leading bytes and
        scan images for embedded script.

        Returns:
            Detected MIME type

        Raises:
            ValidationError: If the file is empty, too large, of an unknown or
                disallowed type, or looks malicious
        """
        size = len(content)
        if size == 0:
            raise ValidationError("File is empty")

        if size > self.max_file_size:
            raise ValidationError(
                f"File size {size} exceeds maximum allowed size of {self.max_file_size} bytes"
            )

        kind = filetype.guess(content)
        if kind is None:
            raise ValidationError("Unable to determine file type")

        if kind.mime not in ALLOWED_MIME_TYPES:
            raise ValidationError(f"File type {kind.mime} is not allowed")

        if kind.mime.startswith("image/"):
            lowered = content.lower()
            if any(pattern in lowered for pattern in SUSPICIOUS_PATTERNS):
                raise ValidationError("File contains potentially malicious content")

        return kind.mime

    def upload(
        self,
        company_id: UUID,
        file_name: str,
        content_type: Optional[str],
        content: bytes,
        category: Optional[str] = None,
    ) -> Document:
        """
        Validate, store and register a document, then rescore the company.

        Raises:
            NotFoundError: If the company does not exist
            ValidationError: If the file fails validation
        """
        company = self.store.get_company(company_id)
        mime_type = self.validate_file(content)
        if content_type and content_type != mime_type:
            logger.warning(f"Declared type {content_type} does not match detected type {mime_type}")

        if not file_name:
            raise ValidationError("File name is required")

        file_id = uuid.uuid4()
        name = sanitize_file_name(file_name)
        category = normalize_category(category)
        path = self.storage.save(company_id, file_id, name, content)

        document = Document(
            id=file_id,
            company_id=company_id,
            name=name,
            mime_type=mime_type,
            size=len(content),
            path=path,
            category=category,
        )
        try:
            self.db.add(document)
            AuditService(self.db).record(
                company.user_id,
                audit_service.DOCUMENT_UPLOADED,
                company_resource(company_id),
                metadata={
                    "documentId": str(file_id),
                    "fileName": name,
                    "fileSize": document.size,
                    "mimeType": mime_type,
                    "category": category,
                    "timestamp": to_iso_string(get_utc_now()),
                },
            )
            with store_errors():
                self.db.commit()
        except Exception:
            self.db.rollback()
            self.storage.delete(path)
            raise

        logger.info(f"✓ Document uploaded: {name} for company {company_id}")

        try:
            NotificationService(self.db).notify_document_uploaded(company.user_id, name)
        except Exception as e:
            self.db.rollback()
            logger.warning(f"Failed to send upload notification: {e}")

        self.coordinator.on_company_data_change(company_id)

        return document

    def list_documents(
        self,
        company_id: UUID,
        category: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Document]:
        """Newest first."""
        self.store.get_company(company_id)

        with store_errors():
            query = self.db.query(Document).filter(Document.company_id == company_id)
            if category:
                query = query.filter(Document.category == category)
            return (
                query.order_by(Document.created_at.desc())
                .limit(limit)
                .offset(offset)
                .all()
            )

    def get_document(self, company_id: UUID, document_id: UUID) -> Document:
        """
        Documents are only visible through their owning company.

        Raises:
            NotFoundError: If no such document exists for the company
        """
        with store_errors():
            document = (
                self.db.query(Document)
                .filter(Document.id == document_id, Document.company_id == company_id)
                .first()
            )
        if not document:
            raise NotFoundError("File not found")
        return document

    def read_content(self, document: Document) -> bytes:
        if not self.storage.exists(document.path):
            raise NotFoundError("File not found on disk")
        return self.storage.read(document.path)

    def delete_document(self, company_id: UUID, document_id: UUID) -> None:
        document = self.get_document(company_id, document_id)
        company = self.store.get_company(company_id)

        self.db.delete(document)
        AuditService(self.db).record(
            company.user_id,
            audit_service.DOCUMENT_DELETED,
            company_resource(company_id),
            metadata={
                "documentId": str(document_id),
                "fileName": document.name,
                "timestamp": to_iso_string(get_utc_now()),
            },
        )
        with store_errors():
            self.db.commit()

        if not self.storage.delete(document.path):
            logger.warning(f"Failed to delete file from disk: {document.path}")

        logger.info(f"✓ Document deleted: {document.name} for company {company_id}")

        self.coordinator.on_company_data_change(company_id)

    def stats(self, company_id: UUID) -> Dict[str, Any]:
        self.store.get_company(company_id)

        with store_errors():
            documents = self.db.query(Document).filter(Document.company_id == company_id).all()

        return {
            "totalFiles": len(documents),
            "totalSize": sum(document.size for document in documents),
            "filesByCategory": dict(Counter(document.category for document in documents)),
        }

    def cleanup_orphaned_files(self, company_id: Optional[UUID] = None) -> Dict[str, int]:
        """
        Remove document records whose file is missing from disk, then rescore
        every company that lost documents.

        Args:
            company_id: Limit the sweep to one company (default: all companies)
        """
        if company_id is not None:
            self.store.get_company(company_id)

        with store_errors():
            query = self.db.query(Document)
            if company_id is not None:
                query = query.filter(Document.company_id == company_id)
            documents = query.all()

        orphans = [document for document in documents if not self.storage.exists(document.path)]
        for document in orphans:
            self.db.delete(document)
        with store_errors():
            self.db.commit()

        removed = Counter(document.company_id for document in orphans)
        for affected_id, count in removed.items():
            logger.warning(f"Removed {count} orphaned document(s) for company {affected_id}")
            self.coordinator.on_company_data_change(affected_id)

        logger.info(f"✓ Orphaned file cleanup: {len(orphans)} of {len(documents)} removed")
        return {"checked": len(documents), "deleted": len(orphans)}
