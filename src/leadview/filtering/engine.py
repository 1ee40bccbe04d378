"""Filter engine for evaluating condition specs against records."""

from typing import Callable, List, Mapping, Optional, Sequence

from ..fields import Record, RecordSchema, to_text
from ..utils.logging import get_logger
from .models import Condition, FilterLogic, FilterSpec, Operator

logger = get_logger(__name__)

Predicate = Callable[[Record], bool]


def _extract_text(record: Record, field: str, schema: Optional[RecordSchema]) -> str:
    """
    Extract the comparison text for a field.

    Args:
        record: Record mapping
        field: Field name to extract
        schema: Optional schema the field was checked against

    Returns:
        Field value as lower-cased text, "" if missing
    """
    if schema is not None:
        return schema.text_value(record, field).lower()
    return to_text(record.get(field)).lower()


def _match_contains(text: str, pattern: str) -> bool:
    return pattern in text


def _match_equals(text: str, pattern: str) -> bool:
    return text == pattern


def _match_starts_with(text: str, pattern: str) -> bool:
    return text.startswith(pattern)


def _match_ends_with(text: str, pattern: str) -> bool:
    return text.endswith(pattern)


_MATCHERS = {
    Operator.CONTAINS: _match_contains,
    Operator.EQUALS: _match_equals,
    Operator.STARTS_WITH: _match_starts_with,
    Operator.ENDS_WITH: _match_ends_with,
}


def _always_true(record: Record) -> bool:
    return True


def _compile_condition(condition: Condition, schema: Optional[RecordSchema]) -> Predicate:
    """
    Compile one condition into a record predicate.

    Incomplete conditions and unknown operators compile to an always-true
    predicate. With a schema, the field must be one of its filterable fields.
    """
    if not condition.is_complete:
        return _always_true

    if schema is not None:
        schema.require(condition.field, "filterable")

    operator = condition.known_operator()
    if operator is None:
        logger.debug(
            "Condition %s uses unknown operator %r; treating as satisfied",
            condition.id,
            condition.operator,
        )
        return _always_true

    matcher = _MATCHERS[operator]
    field = condition.field
    pattern = condition.value.lower()

    def predicate(record: Record) -> bool:
        return matcher(_extract_text(record, field, schema), pattern)

    return predicate


def build_predicate(spec: FilterSpec, schema: Optional[RecordSchema] = None) -> Predicate:
    """
    Compile a filter spec into a single record predicate.

    Args:
        spec: Filter spec to compile
        schema: Optional schema; when given, every complete condition must
            name one of its filterable fields

    Returns:
        Callable returning True for records the spec retains

    Raises:
        UnknownFieldError: If a schema is given and a condition names a field outside it
        FieldCapabilityError: If a schema is given and the field is not filterable
    """
    if spec.is_identity:
        return _always_true

    predicates = [_compile_condition(condition, schema) for condition in spec.conditions]

    if spec.logic is FilterLogic.OR:
        def combined(record: Record) -> bool:
            return any(predicate(record) for predicate in predicates)
    else:
        def combined(record: Record) -> bool:
            return all(predicate(record) for predicate in predicates)

    return combined


def evaluate_condition(condition: Condition, record: Record, schema: Optional[RecordSchema] = None) -> bool:
    """Evaluate a single condition against a record."""
    return _compile_condition(condition, schema)(record)


def filter_records(
    records: Sequence[Mapping],
    spec: FilterSpec,
    schema: Optional[RecordSchema] = None,
) -> List[Mapping]:
    """
    Reduce records to those matching a filter spec.

    An empty spec returns every record in its original order. Otherwise each
    condition is tested against the lower-cased text of its field (missing
    fields read as "") and the results combine with spec.logic. The input
    sequence is never modified.

    Args:
        records: Records to filter
        spec: Filter spec (conditions + AND/OR logic)
        schema: Optional schema for typed field access and field-name checks

    Returns:
        New list of matching records, input order preserved
    """
    if spec.is_identity:
        return list(records)

    predicate = build_predicate(spec, schema)
    matched = [record for record in records if predicate(record)]
    logger.debug("Filter kept %d of %d records (%s)", len(matched), len(records), spec.logic.value)
    return matched
