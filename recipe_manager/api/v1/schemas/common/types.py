"""Reusable constrained field types."""

from typing import Annotated

from pydantic import Field

EntityId = Annotated[int, Field(ge=1)]
SortNumber = Annotated[int, Field(ge=1)]
