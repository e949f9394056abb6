"""
Project-wide custom exception hierarchy.
All modules raise subclasses of ContactBookError — never bare Exception.
"""

__all__ = [
    "ContactBookError",
    "StorageError",
    "CacheNotLoadedError",
    "ValidationError",
]


class ContactBookError(Exception):
    """Root exception for all contact-book errors."""


# ── Store ─────────────────────────────────────────────────────────────────────

class StorageError(ContactBookError):
    """Raised on SQLite / store I/O errors."""


# ── Cache ─────────────────────────────────────────────────────────────────────

class CacheNotLoadedError(ContactBookError):
    """Raised when a PersonCache is mutated before load() was called."""


# ── CLI boundary ──────────────────────────────────────────────────────────────

class ValidationError(ContactBookError):
    """Raised when a required person field is empty at the input boundary."""
