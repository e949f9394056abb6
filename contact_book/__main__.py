"""Allow ``python -m contact_book``."""

from contact_book.cli.main import main

raise SystemExit(main())
