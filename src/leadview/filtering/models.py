"""Pydantic models for filter conditions and filter specs."""

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class Operator(str, Enum):
    """Canonical string-containment operators."""
    CONTAINS = "contains"
    EQUALS = "equals"
    STARTS_WITH = "startsWith"
    ENDS_WITH = "endsWith"

    @property
    def label(self) -> str:
        return OPERATOR_LABELS[self]


OPERATOR_LABELS = {
    Operator.CONTAINS: "Contains",
    Operator.EQUALS: "Equals",
    Operator.STARTS_WITH: "Starts with",
    Operator.ENDS_WITH: "Ends with",
}

DEFAULT_OPERATOR = Operator.CONTAINS


class FilterLogic(str, Enum):
    """How condition results combine."""
    AND = "AND"
    OR = "OR"

    @property
    def label(self) -> str:
        return "ALL conditions" if self is FilterLogic.AND else "ANY condition"


class Condition(BaseModel):
    """One atomic filter test.

    ``field`` may be empty while a condition is still being edited, and
    ``operator`` is kept as free text so a spec carrying an operator this
    engine does not know still loads; both cases evaluate as satisfied.
    """

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    id: str = Field(..., description="Unique condition identifier (used for edits, not evaluation)")
    field: str = Field(default="", description="Record field to test; empty means incomplete")
    operator: str = Field(default=DEFAULT_OPERATOR.value, description="contains, equals, startsWith or endsWith")
    value: str = Field(default="", description="Comparison literal, compared case-insensitively")

    @property
    def is_complete(self) -> bool:
        return bool(self.field)

    def known_operator(self) -> Optional[Operator]:
        """Return the Operator for this condition, or None if unrecognised."""
        try:
            return Operator(self.operator)
        except ValueError:
            return None


class FilterSpec(BaseModel):
    """An ordered set of conditions combined by a single logic.

    The default instance (no conditions, AND) is the identity filter.
    """

    model_config = ConfigDict(frozen=True)

    conditions: Tuple[Condition, ...] = Field(default_factory=tuple)
    logic: FilterLogic = Field(default=FilterLogic.AND)

    @property
    def is_identity(self) -> bool:
        return not self.conditions
