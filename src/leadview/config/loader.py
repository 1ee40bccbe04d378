from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from ..errors import ConfigError, FieldCapabilityError, UnknownFieldError
from ..fields import LEAD_SCHEMA, RecordSchema
from ..filtering.models import Condition, FilterLogic, FilterSpec
from ..pipeline import LeadQuery
from ..sorting.models import SortDirection, SortSpec
from ..utils.id_generator import new_condition_id

DEFAULT_CONFIG_PATH = Path("leadview.config.yaml")

ALLOWED_SECTIONS = ("version", "filters", "search", "sort")


def load_view_config(path: Path | None = None) -> Dict[str, Any]:
    """
    Load a saved lead view from YAML.

    Args:
        path: Optional path to the view file. Defaults to leadview.config.yaml

    Returns:
        Dictionary with filters, search and sort sections (missing sections
        filled with empty defaults)

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ConfigError: If the config structure is invalid
    """
    cfg_path = path or DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        raise FileNotFoundError(f"View config file not found: {cfg_path}")
    with cfg_path.open("r", encoding="utf-8") as f:
        try:
            config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"View config is not valid YAML: {e}") from e

    return normalize_view_config(config)


def normalize_view_config(config: Any) -> Dict[str, Any]:
    """Validate the raw structure of a view config and fill defaults."""
    if config is None:
        config = {}
    if not isinstance(config, dict):
        raise ConfigError("View config must be a dictionary")

    unknown = [key for key in config if key not in ALLOWED_SECTIONS]
    if unknown:
        raise ConfigError(f"View config has unknown section(s): {', '.join(map(str, unknown))}")

    config.setdefault("version", 1)

    filters = config.get("filters") or {}
    if not isinstance(filters, dict):
        raise ConfigError("View config 'filters' must be a dictionary")
    conditions = filters.get("conditions") or []
    if not isinstance(conditions, list):
        raise ConfigError("View config 'filters.conditions' must be a list")
    for entry in conditions:
        if not isinstance(entry, dict):
            raise ConfigError("Each filter condition must be a dictionary")
    filters["conditions"] = conditions
    filters.setdefault("logic", FilterLogic.AND.value)
    config["filters"] = filters

    search = config.get("search") or {}
    if isinstance(search, str):
        search = {"query": search}
    if not isinstance(search, dict):
        raise ConfigError("View config 'search' must be a string or dictionary")
    search.setdefault("query", "")
    search_fields = search.get("fields")
    if search_fields is not None and not isinstance(search_fields, list):
        raise ConfigError("View config 'search.fields' must be a list")
    search["fields"] = search_fields or None
    config["search"] = search

    sort = config.get("sort")
    if sort is not None and not isinstance(sort, dict):
        raise ConfigError("View config 'sort' must be a dictionary")
    config["sort"] = sort

    return config


def _check_field(schema: Optional[RecordSchema], name: str, capability: str, context: str) -> None:
    if schema is None:
        return
    try:
        schema.require(name, capability)
    except UnknownFieldError:
        raise ConfigError(f"{context} references unknown field: {name}") from None
    except FieldCapabilityError:
        raise ConfigError(f"{context} field is not {capability}: {name}") from None


def _build_conditions(entries: List[Dict[str, Any]], schema: Optional[RecordSchema]) -> List[Condition]:
    conditions = []
    for entry in entries:
        field = entry.get("field") or ""
        if field:
            _check_field(schema, field, "filterable", "Filter condition")
        value = entry.get("value")
        try:
            conditions.append(
                Condition(
                    id=str(entry.get("id") or new_condition_id()),
                    field=field,
                    operator=entry.get("operator") or "contains",
                    value="" if value is None else str(value),
                )
            )
        except ValidationError as e:
            raise ConfigError(f"Invalid filter condition {entry!r}: {e}") from e
    return conditions


def build_query(config: Dict[str, Any], schema: Optional[RecordSchema] = LEAD_SCHEMA) -> LeadQuery:
    """
    Turn a normalized view config into a LeadQuery.

    Field names in conditions, search fields and sort are checked against the
    schema's filterable, searchable and sortable fields. Unknown operators are
    kept: they evaluate as satisfied.

    Raises:
        ConfigError: If a field name or enum value is invalid
    """
    filters = config.get("filters") or {}
    try:
        logic = FilterLogic(str(filters.get("logic", "AND")).upper())
    except ValueError as e:
        raise ConfigError(f"Invalid filter logic: {filters.get('logic')!r} (expected AND or OR)") from e

    conditions = _build_conditions(filters.get("conditions") or [], schema)

    search = config.get("search") or {}
    search_fields = None
    if search.get("fields"):
        search_fields = tuple(str(name) for name in search["fields"])
        for name in search_fields:
            _check_field(schema, name, "searchable", "Search")

    sort_spec = SortSpec()
    sort = config.get("sort")
    if sort:
        field = sort.get("field") or sort_spec.field
        _check_field(schema, field, "sortable", "Sort")
        try:
            direction = SortDirection(str(sort.get("direction", "asc")).lower())
        except ValueError as e:
            raise ConfigError(f"Invalid sort direction: {sort.get('direction')!r} (expected asc or desc)") from e
        sort_spec = SortSpec(field=field, direction=direction)

    return LeadQuery(
        filters=FilterSpec(conditions=tuple(conditions), logic=logic),
        search=str(search.get("query") or ""),
        search_fields=search_fields,
        sort=sort_spec,
    )


def load_query(path: Path | None = None, schema: Optional[RecordSchema] = LEAD_SCHEMA) -> LeadQuery:
    """Load a view config file and build its LeadQuery."""
    return build_query(load_view_config(path), schema)
