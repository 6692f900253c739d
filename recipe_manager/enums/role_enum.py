"""Enum for user roles."""

from enum import Enum


class RoleEnum(str, Enum):
    """Roles that can be granted to a user account.

    ADMIN manages reference data and accounts; CREATOR may write recipes and
    pictures. Every authenticated user can read.
    """

    ADMIN = "ADMIN"
    CREATOR = "CREATOR"
