"""Render a LeadView for terminals and exports."""

import csv
import json
from io import StringIO
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..fields import LEAD_SCHEMA, RecordSchema, to_text
from ..pipeline import LeadView
from ..utils.time import utc_now_z

EXPORT_SCHEMA_VERSION = "1"

# Lead table columns, in display order
TABLE_COLUMNS = ("name", "status", "qualification", "interest", "source", "assignedTo", "updatedAt")

MAX_CELL_WIDTH = 32


def _columns_for(schema: Optional[RecordSchema], records: Sequence[Mapping]) -> List[str]:
    if schema is not None:
        return list(schema.field_names)
    columns: List[str] = []
    for record in records:
        for key in record:
            if key not in columns:
                columns.append(key)
    return columns


def _json_record(record: Mapping) -> Dict[str, Any]:
    return {key: to_text(value) if not isinstance(value, (int, float, str, bool)) else value for key, value in record.items()}


def render_json(view: LeadView) -> str:
    """Export envelope with the query that produced the records."""
    export_data = {
        "export_schema_version": EXPORT_SCHEMA_VERSION,
        "exported_at_utc": utc_now_z(),
        "total": view.total,
        "shown": view.shown,
        "query": view.query.model_dump(mode="json"),
        "data": [_json_record(record) for record in view.records],
    }
    return json.dumps(export_data, indent=2, sort_keys=True)


def render_csv(view: LeadView, schema: Optional[RecordSchema] = LEAD_SCHEMA) -> str:
    """CSV with stable column order; missing values are empty cells."""
    columns = _columns_for(schema, view.records)
    output_buffer = StringIO()
    writer = csv.writer(output_buffer)
    writer.writerow(columns)
    for record in view.records:
        writer.writerow([to_text(record.get(col)) for col in columns])
    return output_buffer.getvalue()


def _truncate(text: str) -> str:
    if len(text) <= MAX_CELL_WIDTH:
        return text
    return text[: MAX_CELL_WIDTH - 3] + "..."


def render_table(
    view: LeadView,
    columns: Sequence[str] = TABLE_COLUMNS,
    schema: Optional[RecordSchema] = LEAD_SCHEMA,
) -> str:
    """Fixed-width text table followed by the result summary line."""
    headers = [schema.field(col).label if schema is not None else col for col in columns]
    rows = [[_truncate(to_text(record.get(col))) for col in columns] for record in view.records]

    widths = [len(header) for header in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    lines = [
        "  ".join(header.ljust(widths[i]) for i, header in enumerate(headers)).rstrip(),
        "  ".join("-" * width for width in widths),
    ]
    for row in rows:
        lines.append("  ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)).rstrip())
    if not rows:
        lines.append("No leads found")
    lines.append("")
    lines.append(view.summary())
    return "\n".join(lines)


def render(view: LeadView, format: str = "table", schema: Optional[RecordSchema] = LEAD_SCHEMA) -> str:
    if format == "json":
        return render_json(view)
    elif format == "csv":
        return render_csv(view, schema)
    elif format == "table":
        return render_table(view, schema=schema)
    else:
        raise ValueError(f"Unsupported format: {format}")


def write_output(text: str, out: Path | None = None) -> str:
    """Write rendered output to a file, or return it for printing."""
    if out:
        out.write_text(text, encoding="utf-8", newline="")
        return f"Exported to {out}"
    return text
