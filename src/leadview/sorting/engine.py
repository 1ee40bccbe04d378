"""Sort engine: stable single-field ordering with missing values last."""

from datetime import datetime, timezone
from enum import Enum
from numbers import Real
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from ..fields import Record, RecordSchema, to_text
from ..utils.logging import get_logger
from .models import SortDirection, SortSpec

logger = get_logger(__name__)


def _read_value(record: Record, field: str, schema: Optional[RecordSchema]) -> Any:
    if schema is not None:
        return schema.get_value(record, field)
    value = record.get(field)
    if isinstance(value, Enum):
        return value.value
    return value


def _ranked_key(value: Any) -> Tuple[int, Any]:
    """
    Key for values of mixed types: numbers, then dates, then text, then the rest.

    Each group keeps its natural order; naive datetimes are taken as UTC.
    """
    if isinstance(value, Real):
        return (0, value)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return (1, value)
    if isinstance(value, str):
        return (2, value)
    return (3, to_text(value))


def sort_records(
    records: Sequence[Mapping],
    spec: SortSpec,
    schema: Optional[RecordSchema] = None,
) -> List[Mapping]:
    """
    Order records by one field.

    Defined values sort in their natural order (text lexicographically, dates
    chronologically, numbers numerically), reversed for descending. Records
    whose field is missing come after every defined value in both directions.
    Equal values keep their input order. The input sequence is not modified.

    Args:
        records: Records to order
        spec: Field and direction
        schema: Optional schema for typed field access

    Returns:
        New sorted list

    Raises:
        UnknownFieldError: If a schema is given and spec.field is not in it
        FieldCapabilityError: If a schema is given and spec.field is not sortable
    """
    if schema is not None:
        schema.require(spec.field, "sortable")

    present: List[Tuple[Any, Mapping]] = []
    missing: List[Mapping] = []
    for record in records:
        value = _read_value(record, spec.field, schema)
        if value is None:
            missing.append(record)
        else:
            present.append((value, record))

    descending = spec.descending
    # sorted() is stable for reverse=True too, so ties keep input order
    try:
        ordered = sorted(present, key=lambda pair: pair[0], reverse=descending)
    except TypeError:
        logger.debug("Mixed value types in field %r; ranking by type", spec.field)
        ordered = sorted(present, key=lambda pair: _ranked_key(pair[0]), reverse=descending)

    return [record for _, record in ordered] + missing


def toggle_sort(spec: SortSpec, field: str) -> SortSpec:
    """
    Select a sort field.

    Selecting the active field flips its direction; any other field
    becomes active in ascending order.
    """
    if spec.field == field:
        return spec.model_copy(update={"direction": spec.direction.flipped()})
    return SortSpec(field=field, direction=SortDirection.ASC)
