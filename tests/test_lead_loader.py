"""Tests for loading lead files."""

import json
from datetime import datetime, timezone

import pytest

from leadview.errors import LeadFileError
from leadview.ingestion import load_leads, parse_leads


def test_load_json_list(tmp_path):
    """Test loading a top-level JSON list."""
    path = tmp_path / "leads.json"
    path.write_text(
        json.dumps([
            {"_id": "a1", "name": "Ana", "status": "New", "updatedAt": "2025-03-01T08:00:00Z"},
            {"id": "b2", "name": "Ben", "status": "Converted"},
        ]),
        encoding="utf-8",
    )

    records = load_leads(path)

    assert [r["id"] for r in records] == ["a1", "b2"]
    assert records[0]["updatedAt"] == datetime(2025, 3, 1, 8, 0, tzinfo=timezone.utc)
    assert isinstance(records[1]["createdAt"], datetime)


def test_load_json_envelope(tmp_path):
    """Test loading {"leads": [...]}."""
    path = tmp_path / "leads.json"
    path.write_text(json.dumps({"leads": [{"name": "Ana"}]}), encoding="utf-8")

    assert [r["name"] for r in load_leads(path)] == ["Ana"]


def test_invalid_rows_skipped(caplog):
    """Test that invalid rows are skipped with a warning."""
    records = parse_leads([{"name": "Ana"}, {"name": "Bad", "status": "Lost"}, "not a lead"], origin="test")

    assert [r["name"] for r in records] == ["Ana"]
    assert "Skipping invalid lead #1" in caplog.text
    assert "Skipping lead #2" in caplog.text


def test_load_csv(tmp_path):
    """Test loading a CSV with blank cells treated as missing."""
    path = tmp_path / "leads.csv"
    path.write_text(
        "id,name,email,assignedTo,status,updatedAt\n"
        "c1,Cara,cara@example.com,,Qualified,2025-03-05T10:00:00Z\n"
        "c2, Dev ,dev@example.com,Sam,New,\n",
        encoding="utf-8",
    )

    records = load_leads(path)

    assert [r["name"] for r in records] == ["Cara", "Dev"]
    assert records[0]["assignedTo"] == ""
    assert records[1]["assignedTo"] == "Sam"


def test_missing_file(tmp_path):
    """Test FileNotFoundError for a missing lead file."""
    with pytest.raises(FileNotFoundError):
        load_leads(tmp_path / "none.json")


def test_bad_json(tmp_path):
    """Test that malformed JSON raises LeadFileError."""
    path = tmp_path / "leads.json"
    path.write_text("[{", encoding="utf-8")

    with pytest.raises(LeadFileError, match="not valid JSON"):
        load_leads(path)


def test_json_without_list(tmp_path):
    """Test that JSON without a lead list is rejected."""
    path = tmp_path / "leads.json"
    path.write_text(json.dumps({"items": []}), encoding="utf-8")

    with pytest.raises(LeadFileError, match="list of leads"):
        load_leads(path)


def test_unsupported_suffix(tmp_path):
    """Test that other file types are rejected."""
    path = tmp_path / "leads.xlsx"
    path.write_text("", encoding="utf-8")

    with pytest.raises(LeadFileError, match="Unsupported lead file type"):
        load_leads(path)
