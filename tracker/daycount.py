from __future__ import annotations

import argparse
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional, Sequence, TextIO

from config.settings import Settings, load_settings
from daycount_logging import configure as configure_global_logging, get_logger
from persistence.store import EventStore

from .birthday import annotate, parse_birthdate
from .classifier import classify
from .errors import EX_USAGE, ConfigurationError, FatalError
from .presenter import render
from .timeutil import parse_date, today


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="daycount",
        description="Count the days since and until the events in your event file.",
    )
    ap.add_argument("--file", type=Path, help="event file to read (default: ~/.daycount/events.csv)")
    ap.add_argument("--today", metavar="YYYY-MM-DD", help="pretend the current date is this one")
    ap.add_argument("--no-birthday", action="store_true", help="skip the days-alive line")
    ap.add_argument("--log-level", help="override DAYCOUNT_LOG_LEVEL")
    ap.add_argument("--json-logs", action="store_true", help="emit diagnostics as JSON")
    return ap


def ensure_store_dir(path: Path) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ConfigurationError(f"cannot create {path.parent}: {exc}") from exc


def report(settings: Settings, path: Path, current: date, show_birthday: bool = True) -> List[str]:
    """Load the event file and return every line of the report."""
    ensure_store_dir(path)
    store = EventStore(path, clock=lambda: current)
    loaded = store.load()

    lines = render(classify(loaded.events, current))
    if not lines:
        lines.append("No events.")

    if show_birthday:
        birthdate = parse_birthdate(settings.birthdate)
        if birthdate is not None:
            lines.extend(annotate(birthdate, current, settings.milestone_days).lines())
    return lines


def run(args: argparse.Namespace, settings: Settings, out: TextIO) -> None:
    current = parse_date(args.today) if args.today else today(settings.timezone)
    path = args.file.expanduser() if args.file else settings.store_path
    for line in report(settings, path, current, show_birthday=not args.no_birthday):
        print(line, file=out)


def main(
    argv: Optional[Sequence[str]] = None,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    out = out or sys.stdout
    err = err or sys.stderr
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.today:
        try:
            parse_date(args.today)
        except ValueError as exc:
            print(f"error: --today: {exc}", file=err)
            return EX_USAGE

    try:
        settings = load_settings()
        configure_global_logging(
            args.log_level or settings.log_level,
            json_format=args.json_logs or settings.log_json,
            force=True,
        )
        logger = get_logger("daycount.main", store=str(settings.store_path))
        logger.debug("daycount.start", today=args.today, file=str(args.file) if args.file else None)
        run(args, settings, out)
    except FatalError as exc:
        print(f"error: {exc}", file=err)
        return exc.exit_code
    return 0


if __name__ == "__main__":
    sys.exit(main())
