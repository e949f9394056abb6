"""
PersonStore — SQLite-backed persistence layer for contact-book entries.

Usage::

    store = PersonStore(db_path="~/.contact-book/persons.db")

    # Persist a new person; the store assigns the id
    new_id = store.insert(PersonRecord("Jan", "Adamski", "1990-01-01",
                                       "555-0100", "jan@example.com", "Main St 1"))

    # Overwrite all six fields of an existing row
    if store.update(new_id, edited) == 0:
        ...  # id no longer exists, nothing was applied

    # Enumerate in last-name order
    for rec in store.list_all():
        print(rec.last_name, rec.first_name)

    store.delete(new_id)
"""

import logging
import sqlite3
from contextlib import closing, contextmanager
from pathlib import Path
from typing import Iterator, Optional

from contact_book.exceptions import StorageError
from contact_book.store.models import PersonRecord

__all__ = ["PersonStore", "SCHEMA_VERSION"]

logger = logging.getLogger(__name__)

# Path to the SQL schema file bundled with this package
_SCHEMA_PATH = Path(__file__).parent / "migrations" / "schema.sql"

# Bumping this drops the persons table and recreates it empty
SCHEMA_VERSION = 1

_COLUMNS = "first_name, last_name, birth_date, phone, email, address"


class PersonStore:
    """
    CRUD interface for the local SQLite person table.

    The database file and schema are created automatically on first open.
    Every operation uses its own short-lived connection, committed on success
    and rolled back on error; no connection is kept open between calls.
    Single-writer: not safe for concurrent mutation from several threads.
    """

    def __init__(self, db_path: str) -> None:
        self._db_path = Path(db_path).expanduser()
        self.initialize()

    @property
    def db_path(self) -> Path:
        return self._db_path

    # ── Internal helpers ──────────────────────────────────────────────────

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path))
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        return conn

    @contextmanager
    def _session(self, action: str) -> Iterator[sqlite3.Connection]:
        """Open a connection for one operation and translate sqlite3 errors."""
        try:
            with closing(self._connect()) as conn, conn:
                yield conn
        except sqlite3.Error as exc:
            logger.debug("%s failed on %s", action, self._db_path, exc_info=True)
            raise StorageError(f"{action} failed: {exc}") from exc

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> PersonRecord:
        return PersonRecord(
            id=row["id"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            birth_date=row["birth_date"],
            phone=row["phone"],
            email=row["email"],
            address=row["address"],
        )

    # ── Public API ────────────────────────────────────────────────────────

    def initialize(self) -> None:
        """
        Create the persons table, or rebuild it on a schema version mismatch.

        The stored version is kept in ``PRAGMA user_version``. A fresh file
        reports 0 and gets the table created. Any other version that differs
        from SCHEMA_VERSION drops the table first, so all existing rows are
        lost. The whole step runs in one transaction.

        Raises:
            StorageError: the file cannot be created or the schema applied.
        """
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"cannot create {self._db_path.parent}: {exc}") from exc

        try:
            schema = _SCHEMA_PATH.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"cannot read schema {_SCHEMA_PATH}: {exc}") from exc

        with self._session("initialize") as conn:
            version = conn.execute("PRAGMA user_version").fetchone()[0]
            if version == SCHEMA_VERSION:
                return
            script = schema
            if version != 0:
                logger.warning(
                    "Schema version %d != %d: dropping persons table (all rows lost)",
                    version, SCHEMA_VERSION,
                )
                script = "DROP TABLE IF EXISTS persons;\n" + schema
            conn.executescript(
                "BEGIN;\n"
                f"{script}\n"
                f"PRAGMA user_version = {SCHEMA_VERSION};\n"
                "COMMIT;\n"
            )
        logger.info("Initialized persons schema v%d at %s", SCHEMA_VERSION, self._db_path)

    def insert(self, record: PersonRecord) -> int:
        """
        Persist the six fields of *record* as a new row.

        ``record.id`` is ignored; ids are assigned by SQLite and never reused.

        Returns:
            The id of the newly inserted row.

        Raises:
            StorageError: the write could not be committed. No row exists.
        """
        with self._session("insert") as conn:
            cur = conn.execute(
                f"INSERT INTO persons ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?)",
                record.field_values(),
            )
            new_id = cur.lastrowid
            if not new_id:
                # Raising inside the session rolls the insert back
                raise sqlite3.DatabaseError("no row id returned for insert")
        logger.debug("Inserted person id=%d", new_id)
        return new_id

    def update(self, record_id: int, record: PersonRecord) -> int:
        """
        Overwrite all six fields of the row with *record_id*.

        Returns:
            Rows affected: 1 if applied, 0 if *record_id* does not exist.
        """
        with self._session("update") as conn:
            cur = conn.execute(
                """
                UPDATE persons
                   SET first_name=?, last_name=?, birth_date=?,
                       phone=?, email=?, address=?
                 WHERE id=?
                """,
                (*record.field_values(), record_id),
            )
            rows = cur.rowcount
        logger.debug("Updated person id=%d (rows=%d)", record_id, rows)
        return rows

    def delete(self, record_id: int) -> int:
        """
        Delete the row with *record_id*. Missing ids are a no-op.

        Returns:
            Rows affected (0 or 1).
        """
        with self._session("delete") as conn:
            cur = conn.execute("DELETE FROM persons WHERE id=?", (record_id,))
            rows = cur.rowcount
        logger.debug("Deleted person id=%d (rows=%d)", record_id, rows)
        return rows

    def get(self, record_id: int) -> Optional[PersonRecord]:
        """Return the record with *record_id*, or None if it does not exist."""
        with self._session("get") as conn:
            row = conn.execute(
                "SELECT * FROM persons WHERE id=?", (record_id,)
            ).fetchone()
        return self._row_to_record(row) if row else None

    def list_all(self) -> list[PersonRecord]:
        """
        Snapshot of every row, ordered by last_name ascending.

        Ties keep insertion order. Comparison uses SQLite's default BINARY
        collation, so upper-case names sort before lower-case ones.
        """
        with self._session("list_all") as conn:
            rows = conn.execute(
                "SELECT * FROM persons ORDER BY last_name ASC, id ASC"
            ).fetchall()
        return [self._row_to_record(r) for r in rows]
