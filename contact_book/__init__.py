"""contact-book — local SQLite personal-contact manager."""

__version__ = "1.0.0"
