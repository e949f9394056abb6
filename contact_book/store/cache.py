"""
PersonCache — in-memory ordered mirror of the persons table.

No Qt imports here; presentation code reads the cache directly (it is a
read-only Sequence) and calls the mutation methods, which only touch the
in-memory list after the matching PersonStore call succeeded.

Public API
──────────
PersonView   — lazy, restartable last-name search result
PersonCache  — load / add / update / delete / search
"""

import logging
from collections.abc import Sequence
from typing import Iterator, Optional

from contact_book.exceptions import CacheNotLoadedError
from contact_book.store.db import PersonStore
from contact_book.store.models import PersonRecord

__all__ = ["PersonView", "PersonCache"]

logger = logging.getLogger(__name__)


class PersonView:
    """
    Records of a PersonCache whose last_name contains *query* (case-insensitive).

    Nothing is computed up front: every iteration filters the cache's
    current contents again, so the same view can be iterated repeatedly.
    """

    def __init__(self, records: Sequence, query: str) -> None:
        self._records = records
        self._query = query.lower()

    @property
    def query(self) -> str:
        return self._query

    def __iter__(self) -> Iterator[PersonRecord]:
        # "" is contained in every string, so an empty query yields everything
        for rec in list(self._records):
            if self._query in rec.last_name.lower():
                yield rec

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __repr__(self) -> str:
        return f"PersonView(query={self._query!r})"


class PersonCache(Sequence):
    """
    Ordered, de-duplicated in-memory copy of the durable person table.

    Attributes
    ──────────
    store   — the PersonStore every mutation is delegated to
    loaded  — False until load() has run; mutations require it

    Ordering follows store.list_all() at load time. Records added later are
    appended at the end without re-sorting; call load() again to restore
    last-name order.
    """

    def __init__(self, store: PersonStore) -> None:
        self.store = store
        self.loaded = False
        self._records: list[PersonRecord] = []

    # ── Sequence protocol ──────────────────────────────────────────────────

    def __getitem__(self, index):
        return self._records[index]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[PersonRecord]:
        return iter(self._records)

    # ── Internal helpers ───────────────────────────────────────────────────

    def _require_loaded(self) -> None:
        if not self.loaded:
            raise CacheNotLoadedError("PersonCache.load() must be called before mutating")

    def _index_of(self, record_id: int) -> Optional[int]:
        for i, rec in enumerate(self._records):
            if rec.id == record_id:
                return i
        return None

    # ── Public API ─────────────────────────────────────────────────────────

    def load(self) -> None:
        """Replace the whole collection with store.list_all()."""
        self._records = self.store.list_all()
        self.loaded = True
        logger.info("Loaded %d persons", len(self._records))

    def add(
        self,
        first_name: str,
        last_name: str,
        birth_date: str,
        phone: str,
        email: str,
        address: str,
    ) -> PersonRecord:
        """
        Insert a new person and append it to the cache.

        Returns:
            The stored record, carrying its assigned id.

        Raises:
            StorageError: the insert failed; the cache is unchanged.
        """
        self._require_loaded()
        draft = PersonRecord(first_name, last_name, birth_date, phone, email, address)
        new_id = self.store.insert(draft)
        record = draft.with_id(new_id)
        self._records.append(record)
        return record

    def update(self, record: PersonRecord) -> bool:
        """
        Write *record* to the store and replace the entry with the same id.

        Returns:
            True if the row was updated; False if its id is not stored, in
            which case the cache is left as it was.
        """
        self._require_loaded()
        rows = self.store.update(record.id, record)
        if rows <= 0:
            logger.debug("Update not applied for id=%d", record.id)
            return False
        idx = self._index_of(record.id)
        if idx is not None:
            self._records[idx] = record
        return True

    def delete(self, record: PersonRecord) -> None:
        """Delete *record* from the store, then drop its first cached entry."""
        self._require_loaded()
        self.store.delete(record.id)
        idx = self._index_of(record.id)
        if idx is not None:
            del self._records[idx]

    def search(self, query: str = "") -> PersonView:
        """Return a lazy view of cached records whose last_name contains *query*."""
        return PersonView(self, query)
