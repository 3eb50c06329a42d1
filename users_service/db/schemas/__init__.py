"""
Pydantic schemas for request payloads and stored records.
"""

from .users import UserBase, UserCreate, UserUpdate, User

__all__ = [
    "UserBase",
    "UserCreate",
    "UserUpdate",
    "User",
]
