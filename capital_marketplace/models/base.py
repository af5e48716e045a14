from sqlalchemy import Column, DateTime
from sqlalchemy.orm import declarative_base

from capital_marketplace.utils.datetime_utils import get_utc_now

Base = declarative_base()

class TimestampMixin:
    """Mixin to add created_at and updated_at timestamps."""
    created_at = Column(DateTime, nullable=False, default=get_utc_now)
    updated_at = Column(DateTime, nullable=False, default=get_utc_now, onupdate=get_utc_now)
