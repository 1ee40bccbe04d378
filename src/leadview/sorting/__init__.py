"""Single-field, stable ordering of record collections."""

from .engine import sort_records, toggle_sort
from .models import SortDirection, SortSpec

__all__ = ["SortDirection", "SortSpec", "sort_records", "toggle_sort"]
