"""Enum for sort direction."""

from enum import Enum


class SortOrderEnum(str, Enum):
    """Sort direction of a paged listing."""

    ASC = "ASC"
    DESC = "DESC"
