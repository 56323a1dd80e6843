"""Console interface for the expense tracker."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Optional

from expense_core.aggregation import SummaryService
from expense_core.config import Settings
from expense_core.exceptions import ConflictError, ValidationError
from expense_core.models import Expense, Summary
from expense_core.services import ExpenseStore

logger = logging.getLogger("expense_cli")


def _parse_port(value: str) -> int:
    try:
        port = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid port '{value}'") from exc
    if not 0 < port < 65536:
        raise argparse.ArgumentTypeError("Port must be between 1 and 65535")
    return port


def _load_export(path: Path) -> List[Dict[str, Any]]:
    """Read expense objects from a JSON array or a GET /api/expenses envelope."""
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except json.JSONDecodeError as exc:
        raise ValidationError(f"Corrupted JSON data in {path}") from exc
    except OSError as exc:
        raise ValidationError(f"Unable to read from {path}") from exc

    if isinstance(payload, dict):
        payload = payload.get("data")
    if not isinstance(payload, list) or not all(isinstance(item, dict) for item in payload):
        raise ValidationError(f"Expected a list of expense objects in {path}")
    return payload


def _format_expense(expense: Expense) -> str:
    line = f"[{expense.id}] {expense.date} {expense.amount:.2f}  {expense.category}"
    if expense.description:
        line += f" - {expense.description}"
    return line


def _format_summary(summary: Summary) -> str:
    rows = summary.rows()
    if not rows:
        return "No expenses recorded."
    width = max(len(row.category) for row in rows)
    lines = [
        f"{row.category:<{width}}  {row.total:>12.2f}  {row.percentage:>5.1f}%"
        for row in rows
    ]
    lines.append(f"{'Total':<{width}}  {summary.grand_total:>12.2f}")
    return "\n".join(lines)


def handle_serve(args: argparse.Namespace, settings: Settings) -> None:
    from expense_api.app import create_app

    overrides = {
        "host": args.host,
        "port": args.port,
        "env": args.env,
    }
    settings = replace(settings, **{k: v for k, v in overrides.items() if v is not None})
    app = create_app(settings)
    logger.info("Serving expense tracker API on http://%s:%s", settings.host, settings.port)
    app.run(host=settings.host, port=settings.port, debug=args.debug, threaded=True)


def handle_summary(args: argparse.Namespace) -> None:
    store = ExpenseStore()
    for record in _load_export(args.file):
        store.create(record)
    logger.debug("Loaded %d expenses from %s", len(store), args.file)

    if args.category:
        expenses = store.list(args.category)
        if not expenses:
            print("No expenses found.")
            return
        print(f"Found {len(expenses)} expenses:")
        for expense in expenses:
            print(_format_expense(expense))
        return

    print(_format_summary(SummaryService(store).summarize()))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Expense Tracker CLI")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override EXPENSE_TRACKER_LOG_LEVEL",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host")
    serve_parser.add_argument("--port", type=_parse_port)
    serve_parser.add_argument("--env", help="prod or dev (dev allows any CORS origin)")
    serve_parser.add_argument("--debug", action="store_true")

    summary_parser = subparsers.add_parser(
        "summary", help="Summarise an exported list of expenses by category"
    )
    summary_parser.add_argument("file", type=Path)
    summary_parser.add_argument("--category", help="List expenses in this category instead")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = Settings.from_env()
    except ValueError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    logging.basicConfig(
        level=args.log_level or settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "serve":
            handle_serve(args, settings)
        elif args.command == "summary":
            handle_summary(args)
        else:  # pragma: no cover - argparse should prevent this
            parser.error(f"Unknown command: {args.command}")
            return 2
    except ValidationError as exc:
        print(f"Validation error: {exc}", file=sys.stderr)
        return 1
    except ConflictError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
