"""Pytest configuration and fixtures."""

from datetime import datetime, timezone

import pytest


def _ts(day: int, hour: int = 9) -> datetime:
    return datetime(2025, 3, day, hour, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def leads():
    """A small lead list with mixed casing, shared timestamps and a missing field."""
    return [
        {
            "id": "L1",
            "name": "Johnson Reyes",
            "email": "JReyes@Example.com",
            "phone": "555-0101",
            "status": "New",
            "qualification": "B.Tech",
            "source": "Website",
            "assignedTo": "Priya",
            "createdAt": _ts(1),
            "updatedAt": _ts(4),
        },
        {
            "id": "L2",
            "name": "john carter",
            "email": "carter@mail.org",
            "phone": "555-0202",
            "status": "Qualified",
            "qualification": "MBA",
            "source": "Referral",
            "assignedTo": "Sam",
            "createdAt": _ts(2),
            "updatedAt": _ts(4),
        },
        {
            "id": "L3",
            "name": "Mary Ann",
            "email": "mary@example.com",
            "phone": "555-0303",
            "status": "Follow-Up",
            "qualification": "B.Sc",
            "source": "website form",
            "createdAt": _ts(3),
            "updatedAt": _ts(2),
        },
        {
            "id": "L4",
            "name": "Zed Okafor",
            "email": "zed@okafor.dev",
            "phone": "555-0404",
            "status": "Converted",
            "qualification": "MBA",
            "source": "Walk-in",
            "assignedTo": "Priya",
            "createdAt": _ts(4),
            "updatedAt": _ts(6),
        },
    ]


@pytest.fixture
def names():
    def _names(records):
        return [record.get("name") for record in records]

    return _names
