"""Pydantic models for sort specs."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


class SortSpec(BaseModel):
    """One active sort field plus direction.

    Defaults to most recently updated first, the lead table's initial order.
    """

    model_config = ConfigDict(frozen=True)

    field: str = Field(default="updatedAt", description="Record field to order by")
    direction: SortDirection = Field(default=SortDirection.DESC)

    @property
    def descending(self) -> bool:
        return self.direction is SortDirection.DESC
