"""User Models package initializer.

Contains the ORM models for user accounts and their roles.
"""

from .user import User
from .user_role import UserRole

__all__ = [
    "User",
    "UserRole",
]
