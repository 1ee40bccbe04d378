"""Spec transitions driven by the condition list editor.

Each function takes a FilterSpec and returns a new one; the input is never
modified. Removal and update match by id and leave the spec unchanged when no
condition has that id.
"""

from typing import Optional

from ..fields import RecordSchema
from ..utils.id_generator import new_condition_id
from .models import DEFAULT_OPERATOR, Condition, FilterLogic, FilterSpec

EDITABLE_FIELDS = ("field", "operator", "value")


def add_condition(
    spec: FilterSpec,
    schema: Optional[RecordSchema] = None,
    *,
    condition_id: Optional[str] = None,
) -> FilterSpec:
    """
    Append a new condition with default settings.

    The new condition targets the schema's first filterable field (or is left
    incomplete without a schema), uses the default operator and an empty value.
    """
    field = ""
    if schema is not None:
        filterable = schema.filterable_fields()
        if filterable:
            field = filterable[0].name

    condition = Condition(
        id=condition_id or new_condition_id(),
        field=field,
        operator=DEFAULT_OPERATOR.value,
        value="",
    )
    return spec.model_copy(update={"conditions": (*spec.conditions, condition)})


def remove_condition(spec: FilterSpec, condition_id: str) -> FilterSpec:
    """Remove the condition(s) with the given id."""
    remaining = tuple(c for c in spec.conditions if c.id != condition_id)
    if len(remaining) == len(spec.conditions):
        return spec
    return spec.model_copy(update={"conditions": remaining})


def update_condition(spec: FilterSpec, condition_id: str, **changes: str) -> FilterSpec:
    """
    Replace the given fields of the condition with the given id.

    Args:
        spec: Current spec
        condition_id: Id of the condition to edit
        **changes: Any of field, operator, value

    Raises:
        TypeError: If a key outside field/operator/value is passed
    """
    unexpected = set(changes) - set(EDITABLE_FIELDS)
    if unexpected:
        raise TypeError(f"Cannot update condition attribute(s): {', '.join(sorted(unexpected))}")

    updated = []
    found = False
    for condition in spec.conditions:
        if condition.id == condition_id:
            # Re-validate so the edited condition keeps the model's types
            condition = Condition(**{**condition.model_dump(), **changes})
            found = True
        updated.append(condition)

    if not found:
        return spec
    return spec.model_copy(update={"conditions": tuple(updated)})


def set_logic(spec: FilterSpec, logic: FilterLogic | str) -> FilterSpec:
    return spec.model_copy(update={"logic": FilterLogic(logic)})


def clear_conditions(spec: FilterSpec) -> FilterSpec:
    """
    Reset to the identity spec (no conditions, AND logic).

    Takes the current spec like every other transition; nothing from it
    carries over.
    """
    return FilterSpec()
