"""Pydantic model for the reference lead record."""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .utils.time import parse_timestamp, utc_now


class LeadStatus(str, Enum):
    """Pipeline stage of a lead."""
    NEW = "New"
    FOLLOW_UP = "Follow-Up"
    QUALIFIED = "Qualified"
    CONVERTED = "Converted"


class Lead(BaseModel):
    """A single lead as loaded from the record source.

    Field names serialize to the camelCase keys the engines and the
    lead schema use (``assignedTo``, ``updatedAt``, ...).
    """

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    id: Optional[str] = Field(default=None, validation_alias=AliasChoices("id", "_id"))
    name: str = ""
    phone: str = ""
    alt_phone: Optional[str] = Field(default=None, alias="altPhone")
    email: str = ""
    alt_email: Optional[str] = Field(default=None, alias="altEmail")
    status: LeadStatus = LeadStatus.NEW
    qualification: str = ""
    interest: str = ""
    source: str = ""
    assigned_to: str = Field(default="", alias="assignedTo")
    job_interest: str = Field(default="", alias="jobInterest")
    state: str = ""
    city: str = ""
    passout_year: str = Field(default="", alias="passoutYear")
    heard_from: str = Field(default="", alias="heardFrom")
    created_at: datetime = Field(default_factory=utc_now, alias="createdAt")
    updated_at: datetime = Field(default_factory=utc_now, alias="updatedAt")

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def _parse_timestamp(cls, value: Any) -> Any:
        # Unset timestamps fall back to "now", as the lead list did on load
        if value is None or value == "":
            return utc_now()
        parsed = parse_timestamp(value)
        return parsed if parsed is not None else value

    @field_validator("passout_year", mode="before")
    @classmethod
    def _year_as_text(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value

    def to_record(self) -> Dict[str, Any]:
        """Return the plain mapping consumed by the filter/sort engines."""
        record = self.model_dump(by_alias=True)
        return {key: value for key, value in record.items() if value is not None}


def leads_to_records(leads: Sequence[Lead]) -> List[Dict[str, Any]]:
    return [lead.to_record() for lead in leads]


def prepend_record(records: Sequence[Mapping[str, Any]], record: Mapping[str, Any]) -> List[Mapping[str, Any]]:
    """
    Return a new list with a newly created record at the front.

    The record is used as given: ids and timestamps are the caller's job.
    """
    return [record, *records]
