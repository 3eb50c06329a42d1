from sqlalchemy import Column, DateTime, Index, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from .base import Base, now_utc

COLLECTION = 'users'


class UserRecord(Base):
    """One user document. ``document`` holds every attribute except the id."""
    __tablename__ = COLLECTION
    id = Column(Uuid(as_uuid=True), primary_key=True)
    document = Column(JSONB, nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    __table_args__ = (
        Index('idx_users_created_at', 'created_at'),
    )
