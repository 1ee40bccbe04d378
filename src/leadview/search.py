"""Free-text search across a small set of contact fields."""

from typing import List, Mapping, Sequence

from .fields import to_text

DEFAULT_SEARCH_FIELDS = ("name", "email", "phone")


def matches_query(record: Mapping, query: str, fields: Sequence[str] = DEFAULT_SEARCH_FIELDS) -> bool:
    """True if any of the fields contains the query, ignoring case."""
    if not query:
        return True
    needle = query.lower()
    return any(needle in to_text(record.get(field)).lower() for field in fields)


def search_records(
    records: Sequence[Mapping],
    query: str,
    fields: Sequence[str] = DEFAULT_SEARCH_FIELDS,
) -> List[Mapping]:
    """
    Keep records where any search field contains the query.

    An empty query keeps every record. Missing fields read as "".
    """
    if not query:
        return list(records)
    return [record for record in records if matches_query(record, query, fields)]
