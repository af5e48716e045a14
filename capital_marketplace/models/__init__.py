# capital_marketplace/models/__init__.py
from .base import Base
from .user import User
from .company import Company, Sector
from .document import Document, DocumentCategory
from .notification import Notification, NotificationType
from .audit_log import AuditLog

__all__ = [
    "Base",
    "User",
    "Company",
    "Sector",
    "Document",
    "DocumentCategory",
    "Notification",
    "NotificationType",
    "AuditLog",
]
