"""Compose filter, search and sort into one lead view."""

from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .fields import LEAD_SCHEMA, RecordSchema
from .filtering.engine import filter_records
from .filtering.models import FilterSpec
from .search import DEFAULT_SEARCH_FIELDS, search_records
from .sorting.engine import sort_records
from .sorting.models import SortSpec
from .utils.logging import get_logger

logger = get_logger(__name__)


class LeadQuery(BaseModel):
    """The view state a caller holds: conditions, search text and sort."""

    model_config = ConfigDict(frozen=True)

    filters: FilterSpec = Field(default_factory=FilterSpec)
    search: str = ""
    # None means the schema's searchable fields
    search_fields: Optional[Tuple[str, ...]] = None
    sort: Optional[SortSpec] = Field(default_factory=SortSpec)


def resolve_search_fields(query: LeadQuery, schema: Optional[RecordSchema]) -> Tuple[str, ...]:
    """
    Pick the fields free-text search runs over.

    Explicit fields must be searchable in the schema; without explicit fields
    the schema's searchable fields are used (name, email, phone for leads).

    Raises:
        UnknownFieldError: If an explicit field is not in the schema
        FieldCapabilityError: If an explicit field is not searchable
    """
    if schema is None:
        return query.search_fields or DEFAULT_SEARCH_FIELDS
    if query.search_fields is None:
        return tuple(f.name for f in schema.searchable_fields())
    for name in query.search_fields:
        schema.require(name, "searchable")
    return query.search_fields


@dataclass(frozen=True)
class LeadView:
    """Result of running a LeadQuery over a record snapshot."""

    records: List[Mapping]
    total: int
    query: LeadQuery

    @property
    def shown(self) -> int:
        return len(self.records)

    def summary(self) -> str:
        """Human-readable result count line."""
        text = f"Showing {self.shown} of {self.total} leads"
        if self.query.search:
            text += f' matching "{self.query.search}"'
        return text


def run_query(
    records: Sequence[Mapping],
    query: LeadQuery,
    schema: Optional[RecordSchema] = LEAD_SCHEMA,
) -> LeadView:
    """
    Apply filter, then search, then sort.

    Search only narrows what the structured filter kept, so a record the
    filter drops never comes back through the search stage.

    Args:
        records: Record snapshot (not modified)
        query: Filter spec, search text and sort spec
        schema: Schema used to check field names and read typed values;
            pass None for schema-free records

    Returns:
        LeadView with the ordered matches and the input total
    """
    filtered = filter_records(records, query.filters, schema)
    searched = search_records(filtered, query.search, resolve_search_fields(query, schema))
    ordered = sort_records(searched, query.sort, schema) if query.sort is not None else searched
    logger.debug(
        "Query kept %d of %d records (filter=%d, search=%d)",
        len(ordered),
        len(records),
        len(filtered),
        len(searched),
    )
    return LeadView(records=ordered, total=len(records), query=query)
