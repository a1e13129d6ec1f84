"""SQLAlchemy model backing the key/value policy store."""

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.types import JSON

from issue_changelog.infrastructure.database import Base
from issue_changelog.utils import now_utc

_storage_json_type = JSON().with_variant(JSONB(), "postgresql")


class StorageEntryModel(Base):
    """One key/value pair of the policy store."""

    __tablename__ = "storage_entry"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String(255), nullable=False, unique=True, index=True)
    value = Column(_storage_json_type, nullable=True)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=now_utc, onupdate=now_utc
    )


__all__ = ["StorageEntryModel"]
