"""Tests for view config loading."""

from pathlib import Path

import pytest

from leadview.config.loader import build_query, load_query, load_view_config, normalize_view_config
from leadview.errors import ConfigError
from leadview.filtering.models import FilterLogic
from leadview.sorting.models import SortDirection, SortSpec

EXAMPLE_CONFIG = Path(__file__).resolve().parent.parent / "config" / "view.example.yaml"


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "view.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_example_config_loads():
    """Test that the shipped example config builds a query."""
    query = load_query(EXAMPLE_CONFIG)

    assert [c.id for c in query.filters.conditions] == ["qualified-only", "from-website"]
    assert query.filters.logic is FilterLogic.AND
    assert query.sort == SortSpec(field="updatedAt", direction=SortDirection.DESC)
    assert query.search_fields == ("name", "email", "phone")


def test_missing_file_raises(tmp_path):
    """Test FileNotFoundError for a missing config."""
    with pytest.raises(FileNotFoundError, match="View config file not found"):
        load_view_config(tmp_path / "nope.yaml")


def test_empty_file_gives_defaults(tmp_path):
    """Test that an empty file is the identity view."""
    query = load_query(_write(tmp_path, ""))

    assert query.filters.is_identity
    assert query.search == ""
    assert query.sort == SortSpec()


def test_invalid_yaml_raises_config_error(tmp_path):
    """Test that broken YAML is reported as ConfigError."""
    with pytest.raises(ConfigError, match="not valid YAML"):
        load_view_config(_write(tmp_path, "filters: [unclosed"))


def test_unknown_section_rejected():
    """Test that unexpected top-level keys are rejected."""
    with pytest.raises(ConfigError, match="unknown section"):
        normalize_view_config({"pagination": {"size": 10}})


def test_conditions_must_be_list():
    """Test structure validation for conditions."""
    with pytest.raises(ConfigError, match="must be a list"):
        normalize_view_config({"filters": {"conditions": "status=new"}})


def test_logic_is_case_insensitive():
    """Test that "or" parses as OR."""
    query = build_query(normalize_view_config({"filters": {"logic": "or"}}))

    assert query.filters.logic is FilterLogic.OR


def test_invalid_logic_rejected():
    """Test that logic other than AND/OR is rejected."""
    with pytest.raises(ConfigError, match="Invalid filter logic"):
        build_query(normalize_view_config({"filters": {"logic": "XOR"}}))


def test_condition_without_id_gets_one():
    """Test that ids are generated for conditions that omit them."""
    config = normalize_view_config({"filters": {"conditions": [{"field": "name", "value": "jo"}, {"field": "email"}]}})

    conditions = build_query(config).filters.conditions

    assert all(c.id for c in conditions)
    assert conditions[0].id != conditions[1].id
    assert conditions[0].operator == "contains"
    assert conditions[1].value == ""


def test_numeric_value_becomes_text():
    """Test that YAML numbers are compared as text."""
    config = normalize_view_config({"filters": {"conditions": [{"id": "p", "field": "phone", "operator": "contains", "value": 5550101}]}})

    assert build_query(config).filters.conditions[0].value == "5550101"


def test_unfilterable_condition_field_rejected():
    """Test that a known field must also be filterable."""
    config = normalize_view_config({"filters": {"conditions": [{"field": "passoutYear", "value": 2021}]}})

    with pytest.raises(ConfigError, match="Filter condition field is not filterable: passoutYear"):
        build_query(config)


def test_unsortable_sort_field_rejected():
    """Test that the sort field must be sortable."""
    with pytest.raises(ConfigError, match="Sort field is not sortable: phone"):
        build_query(normalize_view_config({"sort": {"field": "phone"}}))


def test_unsearchable_search_field_rejected():
    """Test that search fields must be searchable."""
    with pytest.raises(ConfigError, match="Search field is not searchable: status"):
        build_query(normalize_view_config({"search": {"query": "x", "fields": ["name", "status"]}}))


def test_search_fields_default_to_none():
    """Test that omitted search fields are left for the schema to decide."""
    assert build_query(normalize_view_config({"search": "mary"})).search_fields is None


def test_unknown_condition_field_rejected():
    """Test that condition fields are checked against the schema."""
    config = normalize_view_config({"filters": {"conditions": [{"field": "shoeSize", "value": "9"}]}})

    with pytest.raises(ConfigError, match="shoeSize"):
        build_query(config)


def test_unknown_operator_kept():
    """Test that an unknown operator loads (it evaluates as satisfied)."""
    config = normalize_view_config({"filters": {"conditions": [{"field": "name", "operator": "greater", "value": "a"}]}})

    assert build_query(config).filters.conditions[0].operator == "greater"


def test_incomplete_condition_kept():
    """Test that a condition without a field loads as incomplete."""
    config = normalize_view_config({"filters": {"conditions": [{"operator": "equals", "value": "x"}]}})

    assert build_query(config).filters.conditions[0].is_complete is False


def test_search_shorthand_string():
    """Test that search may be given as a plain string."""
    query = build_query(normalize_view_config({"search": "mary"}))

    assert query.search == "mary"


def test_unknown_search_field_rejected():
    """Test that search fields are checked against the schema."""
    with pytest.raises(ConfigError, match="Search references unknown field"):
        build_query(normalize_view_config({"search": {"fields": ["name", "shoeSize"]}}))


def test_sort_direction_validation():
    """Test sort parsing and direction validation."""
    query = build_query(normalize_view_config({"sort": {"field": "name", "direction": "DESC"}}))
    assert query.sort == SortSpec(field="name", direction=SortDirection.DESC)

    with pytest.raises(ConfigError, match="Invalid sort direction"):
        build_query(normalize_view_config({"sort": {"field": "name", "direction": "sideways"}}))


def test_sort_without_direction_is_ascending():
    """Test that a sort section without direction sorts ascending."""
    query = build_query(normalize_view_config({"sort": {"field": "status"}}))

    assert query.sort.direction is SortDirection.ASC


def test_schema_free_build_accepts_any_field():
    """Test that schema=None skips field checks."""
    config = normalize_view_config({"filters": {"conditions": [{"field": "title", "value": "x"}]}, "sort": {"field": "title"}})

    query = build_query(config, schema=None)

    assert query.filters.conditions[0].field == "title"
    assert query.sort.field == "title"
