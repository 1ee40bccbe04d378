"""Load lead records from JSON or CSV exports of the record source."""

import csv
import json
from pathlib import Path
from typing import Any, Dict, Iterable, List

from pydantic import ValidationError

from ..errors import LeadFileError
from ..leads import Lead
from ..utils.logging import get_logger

logger = get_logger(__name__)


def parse_leads(rows: Iterable[Dict[str, Any]], origin: str = "<memory>") -> List[Dict[str, Any]]:
    """
    Validate raw rows as leads and return engine records.

    Rows that fail validation are skipped with a warning rather than
    aborting the whole load.
    """
    records = []
    skipped = 0
    for index, row in enumerate(rows):
        if not isinstance(row, dict):
            logger.warning(f"Skipping lead #{index} from {origin}: expected an object, got {type(row).__name__}")
            skipped += 1
            continue
        try:
            records.append(Lead.model_validate(row).to_record())
        except ValidationError as e:
            logger.warning(f"Skipping invalid lead #{index} from {origin}: {e.error_count()} error(s)")
            logger.debug("Validation detail for lead #%d: %s", index, e)
            skipped += 1
    logger.info(f"Loaded {len(records)} leads from {origin} ({skipped} skipped)")
    return records


def load_leads_from_json(path: Path) -> List[Dict[str, Any]]:
    """
    Load leads from a JSON file.

    Accepts either a top-level list of lead objects or an object with a
    "leads" list (the shape returned by the leads API).
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise LeadFileError(f"Lead file is not valid JSON: {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("leads")
    if not isinstance(data, list):
        raise LeadFileError(f"Lead file must contain a list of leads: {path}")
    return parse_leads(data, origin=str(path))


def load_leads_from_csv(path: Path) -> List[Dict[str, Any]]:
    """
    Load leads from a CSV file with a header row of lead field names.

    Empty cells are treated as missing.
    """
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        if not reader.fieldnames:
            raise LeadFileError(f"Lead CSV has no header row: {path}")
        rows = [
            {key.strip(): value.strip() for key, value in row.items() if key and value and value.strip()}
            for row in reader
        ]
    return parse_leads(rows, origin=str(path))


def load_leads(path: Path) -> List[Dict[str, Any]]:
    """
    Load leads from a .json or .csv file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        LeadFileError: If the file type is unsupported or the content is malformed
    """
    if not path.exists():
        raise FileNotFoundError(f"Lead file not found: {path}")
    suffix = path.suffix.lower()
    if suffix == ".json":
        return load_leads_from_json(path)
    if suffix == ".csv":
        return load_leads_from_csv(path)
    raise LeadFileError(f"Unsupported lead file type: {path.suffix or '<none>'} (expected .json or .csv)")
