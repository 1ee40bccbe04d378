"""Record schema: the closed set of fields the engines can filter, sort and search.

Records themselves stay plain mappings. A RecordSchema names which keys exist,
what kind of value each holds, and how to read that value in typed form, so an
unsupported field name fails when a spec is bound to the schema instead of
silently matching nothing later.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .errors import FieldCapabilityError, UnknownFieldError
from .utils.time import parse_timestamp, to_utc_z

Record = Mapping[str, Any]

CAPABILITIES = ("filterable", "sortable", "searchable")


class FieldKind(str, Enum):
    """Value kinds a record field can hold."""
    TEXT = "text"
    STATUS = "status"
    DATE = "date"
    NUMBER = "number"


@dataclass(frozen=True)
class FieldDef:
    """A single field of a record schema."""
    name: str
    label: str
    kind: FieldKind = FieldKind.TEXT
    filterable: bool = False
    sortable: bool = False
    searchable: bool = False


def to_text(value: Any) -> str:
    """
    Render a field value as comparison text.

    Missing values become the empty string, enums their value,
    datetimes ISO 8601 (UTC, Z suffix).
    """
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, datetime):
        return to_utc_z(value)
    return str(value)


def _to_number(value: Any) -> Any:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return float(text)
        except ValueError:
            return value
    return value


class RecordSchema:
    """A closed enumeration of record fields with typed accessors."""

    def __init__(self, name: str, fields: Iterable[FieldDef]):
        self.name = name
        self._fields: Dict[str, FieldDef] = {}
        for field_def in fields:
            if field_def.name in self._fields:
                raise ValueError(f"Duplicate field in schema {name!r}: {field_def.name}")
            self._fields[field_def.name] = field_def

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __iter__(self):
        return iter(self._fields.values())

    def __len__(self) -> int:
        return len(self._fields)

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(self._fields)

    def has_field(self, name: str) -> bool:
        return name in self._fields

    def field(self, name: str) -> FieldDef:
        """
        Look up a field definition.

        Raises:
            UnknownFieldError: If the schema has no such field
        """
        try:
            return self._fields[name]
        except KeyError:
            raise UnknownFieldError(name, self._fields) from None

    def require(self, name: str, capability: str) -> FieldDef:
        """
        Look up a field that must support a capability.

        Args:
            name: Field name
            capability: One of "filterable", "sortable", "searchable"

        Raises:
            UnknownFieldError: If the schema has no such field
            FieldCapabilityError: If the field exists but lacks the capability
        """
        if capability not in CAPABILITIES:
            raise ValueError(f"Unknown field capability: {capability!r}")
        field_def = self.field(name)
        if not getattr(field_def, capability):
            allowed = [f.name for f in self._fields.values() if getattr(f, capability)]
            raise FieldCapabilityError(name, capability, allowed)
        return field_def

    def filterable_fields(self) -> List[FieldDef]:
        return [f for f in self._fields.values() if f.filterable]

    def sortable_fields(self) -> List[FieldDef]:
        return [f for f in self._fields.values() if f.sortable]

    def searchable_fields(self) -> List[FieldDef]:
        return [f for f in self._fields.values() if f.searchable]

    def get_value(self, record: Record, name: str) -> Optional[Any]:
        """
        Read a field in its typed form.

        Date fields are parsed to aware datetimes and number fields to int/float.
        Values that do not parse are returned unchanged; missing values are None.
        """
        field_def = self.field(name)
        value = record.get(name)
        if value is None:
            return None
        if field_def.kind is FieldKind.DATE:
            parsed = parse_timestamp(value)
            return parsed if parsed is not None else value
        if field_def.kind is FieldKind.NUMBER:
            return _to_number(value)
        if field_def.kind is FieldKind.STATUS and isinstance(value, Enum):
            return value.value
        return value

    def text_value(self, record: Record, name: str) -> str:
        """
        Read a field as comparison text ("" when missing).

        Strings are returned as stored; typed parsing is for ordering only.
        """
        self.field(name)
        return to_text(record.get(name))


LEAD_SCHEMA = RecordSchema(
    "lead",
    [
        FieldDef("id", "ID"),
        FieldDef("name", "Name", filterable=True, sortable=True, searchable=True),
        FieldDef("phone", "Phone", filterable=True, searchable=True),
        FieldDef("altPhone", "Alternate Phone"),
        FieldDef("email", "Email", filterable=True, searchable=True),
        FieldDef("altEmail", "Alternate Email"),
        FieldDef("status", "Status", FieldKind.STATUS, filterable=True, sortable=True),
        FieldDef("qualification", "Qualification", filterable=True, sortable=True),
        FieldDef("interest", "Interest", sortable=True),
        FieldDef("source", "Source", filterable=True, sortable=True),
        FieldDef("assignedTo", "Assigned To", sortable=True),
        FieldDef("jobInterest", "Job Interest"),
        FieldDef("state", "State"),
        FieldDef("city", "City"),
        FieldDef("passoutYear", "Passout Year", FieldKind.NUMBER),
        FieldDef("heardFrom", "Heard From"),
        FieldDef("createdAt", "Created", FieldKind.DATE, sortable=True),
        FieldDef("updatedAt", "Last Updated", FieldKind.DATE, sortable=True),
    ],
)
