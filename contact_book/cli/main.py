"""
CLI entry point for contact-book.

Usage
─────
  # Add a person (all six fields are required)
  python -m contact_book add \\
      --first-name Jan --last-name Adamski --birth-date 1990-01-01 \\
      --phone 555-0100 --email jan@example.com --address "Main St 1"

  # List everyone, or search by last name
  python -m contact_book list
  python -m contact_book list --search now

  # Edit or delete by id
  python -m contact_book edit --id 3 --phone 555-0199
  python -m contact_book delete --id 3

Subcommands are implemented as standalone functions (cmd_add, cmd_list,
cmd_edit, cmd_delete, cmd_privacy) so they can be unit-tested without
invoking argparse.
"""

import argparse
import logging
import os
import sys
from dataclasses import replace
from typing import Optional

from contact_book.exceptions import StorageError, ValidationError
from contact_book.store.cache import PersonCache
from contact_book.store.db import PersonStore
from contact_book.store.models import FIELD_NAMES, PersonRecord

__all__ = [
    "build_parser",
    "cmd_add",
    "cmd_list",
    "cmd_edit",
    "cmd_delete",
    "cmd_privacy",
    "main",
]

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = "~/.contact-book/persons.db"
DB_ENV_VAR = "CONTACT_BOOK_DB"

PRIVACY_NOTICE = (
    "Your data is stored locally in an SQLite database on this device.\n"
    "The app does not send data to the internet.\n"
    "You can edit or delete entries at any time."
)

# (field name, flag, help text)
_FIELD_FLAGS = [
    ("first_name", "--first-name", "First name"),
    ("last_name",  "--last-name",  "Last name"),
    ("birth_date", "--birth-date", "Birth date"),
    ("phone",      "--phone",      "Phone"),
    ("email",      "--email",      "Email"),
    ("address",    "--address",    "Address"),
]


# ── Argument parser ────────────────────────────────────────────────────────────


def build_parser() -> argparse.ArgumentParser:
    """
    Build and return the top-level argument parser.

    Subcommands: add | list | edit | delete | privacy
    """
    parser = argparse.ArgumentParser(
        prog="contact-book",
        description="Local personal-contact manager",
    )
    parser.add_argument(
        "--db",
        default=os.environ.get(DB_ENV_VAR, DEFAULT_DB_PATH),
        metavar="PATH",
        help=f"SQLite database path (default: ${DB_ENV_VAR} or {DEFAULT_DB_PATH})",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Enable verbose debug logging",
    )

    sub = parser.add_subparsers(dest="subcommand")

    # ── add ───────────────────────────────────────────────────────────────
    add = sub.add_parser("add", help="Add a person")
    for dest, flag, label in _FIELD_FLAGS:
        add.add_argument(flag, dest=dest, required=True, metavar="TEXT", help=label)

    # ── list ──────────────────────────────────────────────────────────────
    lst = sub.add_parser("list", help="List persons ordered by last name")
    lst.add_argument(
        "--search",
        default=None,
        metavar="TEXT",
        help="Only show persons whose last name contains TEXT (case-insensitive)",
    )

    # ── edit ──────────────────────────────────────────────────────────────
    edit = sub.add_parser("edit", help="Change fields of an existing person")
    edit.add_argument("--id", required=True, type=int, metavar="ID", help="Person id")
    for dest, flag, label in _FIELD_FLAGS:
        edit.add_argument(flag, dest=dest, default=None, metavar="TEXT",
                          help=f"New {label.lower()} (unchanged if omitted)")

    # ── delete ────────────────────────────────────────────────────────────
    dele = sub.add_parser("delete", help="Delete a person")
    dele.add_argument("--id", required=True, type=int, metavar="ID", help="Person id")

    # ── privacy ───────────────────────────────────────────────────────────
    sub.add_parser("privacy", help="Show the privacy notice")

    return parser


# ── Helpers ───────────────────────────────────────────────────────────────────


def _validate(values: dict[str, str]) -> dict[str, str]:
    """
    Strip every field and reject empty ones.

    Raises ValidationError naming the missing fields.
    """
    cleaned = {name: (values.get(name) or "").strip() for name in FIELD_NAMES}
    missing = [name for name, value in cleaned.items() if not value]
    if missing:
        raise ValidationError(
            f"All fields are required — please fill them in (missing: {', '.join(missing)})"
        )
    return cleaned


def _format_row(rec: PersonRecord) -> str:
    name = f"{rec.last_name}, {rec.first_name}"
    return f"[{rec.id:>4}]  {name:<30} {rec.birth_date:<12} {rec.phone:<16} {rec.email}"


# ── Command implementations ───────────────────────────────────────────────────


def cmd_add(cache: PersonCache, values: dict[str, str]) -> PersonRecord:
    """Validate *values* and add a new person. Returns the stored record."""
    fields = _validate(values)
    record = cache.add(**fields)
    logger.info("Added %s", record)
    print(f"Added person id={record.id}")
    return record


def cmd_list(cache: PersonCache, search: Optional[str]) -> None:
    """Print cached persons to stdout, optionally filtered by last name."""
    records = list(cache.search(search)) if search else list(cache)
    if not records:
        print("0 persons found.")
        return
    for rec in records:
        print(_format_row(rec))


def cmd_edit(cache: PersonCache, record_id: int, changes: dict[str, Optional[str]]) -> PersonRecord:
    """
    Overlay the non-None entries of *changes* onto person *record_id*.

    Raises:
        ValueError:      no person with that id exists.
        ValidationError: the resulting record has an empty field.
    """
    current = cache.store.get(record_id)
    if current is None:
        raise ValueError(f"No person with id={record_id}")

    merged = {name: getattr(current, name) for name in FIELD_NAMES}
    merged.update({k: v for k, v in changes.items() if v is not None})
    updated = replace(current, **_validate(merged))

    if not cache.update(updated):
        raise ValueError(f"No person with id={record_id}")
    print(f"Updated person id={record_id}")
    return updated


def cmd_delete(cache: PersonCache, record_id: int) -> bool:
    """Delete person *record_id*. Returns False if it did not exist."""
    record = next((r for r in cache if r.id == record_id), None)
    if record is None:
        print(f"No person with id={record_id}; nothing deleted.")
        return False
    cache.delete(record)
    print(f"Deleted person id={record_id}")
    return True


def cmd_privacy() -> None:
    """Print the privacy notice."""
    print(PRIVACY_NOTICE)


# ── Entry point ───────────────────────────────────────────────────────────────


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point. Returns exit code."""
    parser = build_parser()
    ns = parser.parse_args(argv)

    level = logging.DEBUG if ns.debug else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")

    if ns.subcommand is None:
        parser.print_help()
        return 0

    if ns.subcommand == "privacy":
        cmd_privacy()
        return 0

    try:
        cache = PersonCache(PersonStore(db_path=ns.db))
        cache.load()

        if ns.subcommand == "list":
            cmd_list(cache=cache, search=ns.search)
        elif ns.subcommand == "add":
            cmd_add(cache=cache, values={name: getattr(ns, name) for name in FIELD_NAMES})
        elif ns.subcommand == "edit":
            cmd_edit(
                cache=cache,
                record_id=ns.id,
                changes={name: getattr(ns, name) for name in FIELD_NAMES},
            )
        elif ns.subcommand == "delete":
            cmd_delete(cache=cache, record_id=ns.id)
    except (StorageError, ValidationError, ValueError) as exc:
        logger.debug("%s failed", ns.subcommand, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
