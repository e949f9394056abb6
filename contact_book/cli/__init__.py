"""
cli — command-line interface for contact-book.

Entry points
────────────
  python -m contact_book   (via contact_book/__main__.py)
  contact-book             (via pyproject.toml [project.scripts])

Subcommands: add | list | edit | delete | privacy
"""

from contact_book.cli.main import (
    build_parser,
    cmd_add,
    cmd_list,
    cmd_edit,
    cmd_delete,
    cmd_privacy,
    main,
)

__all__ = ["build_parser", "cmd_add", "cmd_list", "cmd_edit", "cmd_delete", "cmd_privacy", "main"]
