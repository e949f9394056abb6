"""Data models for the store module."""

from dataclasses import dataclass, replace

__all__ = ["PersonRecord", "UNASSIGNED_ID", "FIELD_NAMES"]

# id carried by a record that has not been persisted yet
UNASSIGNED_ID = 0

# The six text fields, in column order
FIELD_NAMES = (
    "first_name",
    "last_name",
    "birth_date",
    "phone",
    "email",
    "address",
)


@dataclass(frozen=True)
class PersonRecord:
    """
    One person entry in the contact book.

    Fields
    ──────
    first_name  — given name
    last_name   — family name, used for ordering and search
    birth_date  — free-form text, e.g. "1990-04-12"
    phone       — free-form text
    email       — free-form text
    address     — free-form text
    id          — SQLite row id (UNASSIGNED_ID until inserted)

    Empty strings are valid field values at this layer.
    """
    first_name: str
    last_name:  str
    birth_date: str
    phone:      str
    email:      str
    address:    str
    id:         int = UNASSIGNED_ID

    @property
    def is_assigned(self) -> bool:
        """True once the store has given this record a real id."""
        return self.id != UNASSIGNED_ID

    def with_id(self, record_id: int) -> "PersonRecord":
        """Return a copy of this record carrying *record_id*."""
        return replace(self, id=record_id)

    def field_values(self) -> tuple[str, str, str, str, str, str]:
        """The six text fields in column order (see FIELD_NAMES)."""
        return (
            self.first_name,
            self.last_name,
            self.birth_date,
            self.phone,
            self.email,
            self.address,
        )

    def __str__(self) -> str:
        return f"PersonRecord(id={self.id}, name={self.first_name!r} {self.last_name!r})"
