"""Command-line entrypoint for the On This Day note helper.

Commands:
1) insert today's events into a note (at a cursor or over a selection)
2) preview the rendered text or list the fetched events
3) show, change or reset the persisted settings
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from dataclasses import asdict
from typing import List, Optional, Tuple

from dotenv import load_dotenv

from .fetchers import MissingCredentialError
from .models import SettingsError
from .output.editor import NoteDocument, Position
from .session import FETCH_FAILED_NOTICE, Session
from .utils.config_loader import ConfigError, load_providers_config
from .utils.data_store import DataStore
from .utils.logging import configure_logging, get_logger

SETTING_FIELDS = [
    "amount_of_events",
    "insert_title",
    "title_template",
    "item_template",
    "title_date_format",
    "access_token",
    "provider",
    "selection_mode",
    "categories",
]


def _parse_position(value: str) -> Position:
    """Parse ``LINE:COL`` (both 1-based) into a zero-based Position."""
    try:
        line_s, col_s = value.split(":", 1)
        line, col = int(line_s), int(col_s)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected LINE:COL, got '{value}'") from None
    if line < 1 or col < 1:
        raise argparse.ArgumentTypeError(f"LINE and COL are 1-based, got '{value}'")
    return Position(line - 1, col - 1)


def _parse_selection(value: str) -> Tuple[Position, Position]:
    try:
        start, end = value.split("-", 1)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected LINE:COL-LINE:COL, got '{value}'") from None
    return _parse_position(start), _parse_position(end)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="on-this-day",
        description="Insert historical 'on this day' events into a note",
    )
    parser.add_argument(
        "--data",
        default=None,
        help="Path to the plugin data JSON file (default: $ON_THIS_DAY_DATA_PATH or ~/.config/on-this-day/data.json)",
    )
    parser.add_argument(
        "--providers",
        default=os.environ.get("ON_THIS_DAY_PROVIDERS"),
        help="Optional YAML file declaring extra feed providers",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity (default: $LOG_LEVEL or WARNING)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    insert = sub.add_parser("insert", help="Insert today's events into a note")
    insert.add_argument("note", help="Path to the note file")
    where = insert.add_mutually_exclusive_group()
    where.add_argument("--at", type=_parse_position, default=None, help="Cursor position LINE:COL (default: end of note)")
    where.add_argument("--select", type=_parse_selection, default=None, help="Replace the range LINE:COL-LINE:COL")
    insert.add_argument("--no-title", action="store_true", help="Insert the items without the title")

    preview = sub.add_parser("preview", help="Print the rendered text")
    preview.add_argument("--no-title", action="store_true", help="Render the items without the title")

    sub.add_parser("events", help="Print today's events as JSON lines")

    settings = sub.add_parser("settings", help="Show or change settings")
    settings_sub = settings.add_subparsers(dest="settings_command", required=True)
    settings_sub.add_parser("show", help="Print the current settings as JSON")
    set_cmd = settings_sub.add_parser("set", help="Change a single setting")
    set_cmd.add_argument("field", choices=SETTING_FIELDS)
    set_cmd.add_argument("value")
    reset = settings_sub.add_parser("reset", help="Reset all settings to their defaults")
    reset.add_argument("--yes", action="store_true", help="Do not ask for confirmation")

    return parser.parse_args(argv)


def _confirm_reset() -> bool:
    print("Are you sure you want to reset the settings to the default settings?", file=sys.stderr)
    try:
        answer = input("Reset settings to default? [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def _run_settings(session: Session, args: argparse.Namespace) -> int:
    if args.settings_command == "show":
        print(json.dumps(session.settings.to_dict(), indent=2))
        return 0
    if args.settings_command == "set":
        updated = session.update_setting(args.field, args.value)
        print(json.dumps(updated.to_dict(), indent=2))
        return 0
    if not args.yes and not _confirm_reset():
        print("Reset cancelled", file=sys.stderr)
        return 1
    session.reset_settings()
    return 0


def run(args: argparse.Namespace) -> int:
    logger = get_logger("otd.cli")
    store = DataStore(args.data)
    providers = load_providers_config(args.providers) if args.providers else {}
    session = Session.load(store, providers=providers)

    if args.command == "settings":
        return _run_settings(session, args)

    if args.command == "insert":
        doc = NoteDocument(args.note)
        try:
            state = doc.open(cursor=args.at, selection=args.select)
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Could not read note %s: %s", doc.path, exc)
            session.notify(f"Could not read note {doc.path}: {exc}")
            return 1
        if not session.insert(state, include_title=not args.no_title):
            return 1
        try:
            doc.save(state)
        except OSError as exc:
            logger.error("Could not write note %s: %s", doc.path, exc)
            session.notify(f"Could not write note {doc.path}: {exc}")
            return 1
        return 0

    try:
        events = session.events()
    except MissingCredentialError as exc:
        logger.warning("%s", exc)
        session.notify(str(exc))
        return 1

    if args.command == "events":
        if not events:
            session.notify(FETCH_FAILED_NOTICE)
            return 1
        for ev in events:
            print(json.dumps(asdict(ev), ensure_ascii=False))
        return 0

    text = session.render_text(include_title=not args.no_title)
    if not text:
        session.notify(FETCH_FAILED_NOTICE if not events else session.empty_render_notice())
        return 1
    sys.stdout.write(text)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv(override=False)
    args = parse_args(argv)
    configure_logging(level=args.log_level)
    logger = get_logger("otd.cli")

    try:
        return run(args)
    except (ConfigError, SettingsError) as exc:
        logger.error("%s", exc)
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover - script entrypoint
    raise SystemExit(main())
