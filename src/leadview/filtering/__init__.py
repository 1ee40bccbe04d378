"""Structured filter conditions: models, evaluation engine and editor transitions."""

from .editor import (
    add_condition,
    clear_conditions,
    remove_condition,
    set_logic,
    update_condition,
)
from .engine import build_predicate, evaluate_condition, filter_records
from .models import Condition, FilterLogic, FilterSpec, Operator

__all__ = [
    "Condition",
    "FilterLogic",
    "FilterSpec",
    "Operator",
    "add_condition",
    "build_predicate",
    "clear_conditions",
    "evaluate_condition",
    "filter_records",
    "remove_condition",
    "set_logic",
    "update_condition",
]
