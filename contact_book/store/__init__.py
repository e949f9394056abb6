"""
store — SQLite-backed persistence layer and in-memory mirror for persons.

Public API
──────────
PersonRecord  — frozen dataclass representing one person entry
PersonStore   — durable CRUD interface (insert, update, delete, list_all, …)
PersonCache   — in-memory ordered view kept in lock-step with PersonStore
"""

from contact_book.store.models import PersonRecord, UNASSIGNED_ID
from contact_book.store.db import PersonStore
from contact_book.store.cache import PersonCache, PersonView

__all__ = ["PersonRecord", "UNASSIGNED_ID", "PersonStore", "PersonCache", "PersonView"]
