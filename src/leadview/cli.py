"""CLI entrypoint for leadview."""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from leadview.config.loader import load_query
from leadview.errors import ConfigError, FieldCapabilityError, LeadFileError, UnknownFieldError
from leadview.fields import LEAD_SCHEMA
from leadview.filtering.editor import add_condition, set_logic, update_condition
from leadview.filtering.models import FilterLogic, FilterSpec, Operator
from leadview.ingestion import load_leads
from leadview.output.render import render, write_output
from leadview.pipeline import LeadQuery, run_query
from leadview.sorting.models import SortDirection, SortSpec
from leadview.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


def _parse_where(expression: str) -> tuple[str, str, str]:
    """Split FIELD:OPERATOR:VALUE (value may itself contain colons)."""
    parts = expression.split(":", 2)
    if len(parts) != 3:
        raise argparse.ArgumentTypeError(
            f"Invalid --where {expression!r}: expected FIELD:OPERATOR:VALUE"
        )
    field, operator, value = parts[0].strip(), parts[1].strip(), parts[2]
    try:
        Operator(operator)
    except ValueError:
        choices = ", ".join(op.value for op in Operator)
        raise argparse.ArgumentTypeError(
            f"Invalid --where {expression!r}: unknown operator {operator!r} (expected one of: {choices})"
        ) from None
    return field, operator, value


def _apply_where(spec: FilterSpec, expressions: List[tuple[str, str, str]]) -> FilterSpec:
    for field, operator, value in expressions:
        LEAD_SCHEMA.require(field, "filterable")
        spec = add_condition(spec, LEAD_SCHEMA)
        new_id = spec.conditions[-1].id
        spec = update_condition(spec, new_id, field=field, operator=operator, value=value)
    return spec


def build_cli_query(args: argparse.Namespace) -> LeadQuery:
    """Start from the saved view (if any) and layer command-line options on top."""
    query = load_query(args.config) if args.config else LeadQuery()

    filters = _apply_where(query.filters, args.where or [])
    if args.any:
        filters = set_logic(filters, FilterLogic.OR)

    updates = {"filters": filters}
    if args.search is not None:
        updates["search"] = args.search
    if args.sort:
        LEAD_SCHEMA.require(args.sort, "sortable")
        direction = SortDirection.DESC if args.desc else SortDirection.ASC
        updates["sort"] = SortSpec(field=args.sort, direction=direction)
    elif args.desc and query.sort is not None:
        updates["sort"] = query.sort.model_copy(update={"direction": SortDirection.DESC})
    return query.model_copy(update=updates)


def cmd_query(args: argparse.Namespace) -> None:
    """Filter, search and sort a lead file."""
    try:
        records = load_leads(args.leads)
        query = build_cli_query(args)
    except FileNotFoundError as e:
        logger.error(f"{e}")
        sys.exit(1)
    except (ConfigError, FieldCapabilityError, LeadFileError, UnknownFieldError) as e:
        logger.error(f"Invalid input: {e}")
        sys.exit(2)

    view = run_query(records, query, LEAD_SCHEMA)
    result = write_output(render(view, args.format, LEAD_SCHEMA), args.out)
    print(result)
    if args.out:
        print(view.summary())


def cmd_fields(args: argparse.Namespace) -> None:
    """List the lead fields and what each supports."""
    print(f"{'FIELD':<14} {'LABEL':<16} {'KIND':<8} FILTER  SORT  SEARCH")
    for field_def in LEAD_SCHEMA:
        print(
            f"{field_def.name:<14} {field_def.label:<16} {field_def.kind.value:<8} "
            f"{'yes' if field_def.filterable else '-':<7} "
            f"{'yes' if field_def.sortable else '-':<5} "
            f"{'yes' if field_def.searchable else '-'}"
        )


def cmd_operators(args: argparse.Namespace) -> None:
    """List filter operators."""
    for operator in Operator:
        print(f"{operator.value:<12} {operator.label}")


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entrypoint."""
    parser = argparse.ArgumentParser(
        prog="leadview",
        description="Filter, search and sort lead lists",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # query command
    query_parser = subparsers.add_parser("query", help="Filter, search and sort a lead file")
    query_parser.add_argument("leads", type=Path, help="Lead file (.json or .csv)")
    query_parser.add_argument(
        "--config",
        type=Path,
        help="Saved view YAML (filters, search, sort)",
    )
    query_parser.add_argument(
        "--where",
        type=_parse_where,
        action="append",
        metavar="FIELD:OP:VALUE",
        help="Add a filter condition, e.g. status:equals:qualified (repeatable)",
    )
    query_parser.add_argument(
        "--any",
        action="store_true",
        help="Keep leads matching ANY condition (default: ALL)",
    )
    query_parser.add_argument("--search", type=str, help="Free-text search over name, email and phone")
    query_parser.add_argument("--sort", type=str, help="Field to sort by (default: updatedAt, newest first)")
    query_parser.add_argument("--desc", action="store_true", help="Sort descending")
    query_parser.add_argument(
        "--format",
        type=str,
        choices=["table", "json", "csv"],
        default="table",
        help="Output format (default: table)",
    )
    query_parser.add_argument(
        "--out",
        type=Path,
        help="Output file path (if not provided, prints to stdout)",
    )
    query_parser.set_defaults(func=cmd_query)

    fields_parser = subparsers.add_parser("fields", help="List lead fields")
    fields_parser.set_defaults(func=cmd_fields)

    operators_parser = subparsers.add_parser("operators", help="List filter operators")
    operators_parser.set_defaults(func=cmd_operators)

    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if not args.command:
        parser.print_help()
        return

    try:
        args.func(args)
    except Exception as e:
        logger.error(f"Error running command '{args.command}': {e}", exc_info=True)
        raise


if __name__ == "__main__":
    main()
