"""
SQLAlchemy models for the users collection.

Exposes `Base`, `now_utc`, the collection name and the ORM record class.
"""

from .base import Base, now_utc  # re-export
from .users import COLLECTION, UserRecord

__all__ = [
    "Base",
    "now_utc",
    "COLLECTION",
    "UserRecord",
]
