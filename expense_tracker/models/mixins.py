# expense_tracker/models/mixins.py
from datetime import datetime, timezone
from sqlalchemy import Column, DateTime


def utcnow() -> datetime:
    # Stored naive, always UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


class TimestampMixin:
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
