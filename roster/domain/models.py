"""
Domain models for the roster pager.

`Record` is the explicit schema of one registered child. Raw entries coming
from a record source are validated here, at the deserialization boundary, so
the rest of the package never touches loosely shaped dicts.
"""
from __future__ import annotations

from datetime import date
from typing import Any, Iterable, Mapping, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator

from roster.domain.age import parse_date
from roster.domain.errors import InvalidRecordError

# Not typeable, so a filter needle never spans two fields.
FIELD_SEPARATOR = "\u241f"


class Record(BaseModel):
    """
    Representation of a single registered child.
    """

    id: str = Field(..., min_length=1, description="Opaque identifier.")
    name: str = Field(..., description="Display name of the child.")
    birth_date: date = Field(..., alias="birthDate", description="Calendar birth date.")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "extra": "ignore",
    }

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, bool):
            return value
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("birth_date", mode="before")
    @classmethod
    def _parse_birth_date(cls, value: Any) -> date:
        return parse_date(value)

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "Record":
        """
        Build a record from one raw source entry.

        Raises
        ------
        InvalidRecordError
            If the entry is missing required fields or carries malformed values.
        """
        if not isinstance(raw, Mapping):
            raise InvalidRecordError(f"Expected an object, got {type(raw).__name__}")
        try:
            return cls.model_validate(dict(raw))
        except (ValidationError, ValueError) as exc:
            raise InvalidRecordError(f"Malformed record {raw.get('id')!r}: {exc}") from exc

    def search_text(self) -> str:
        """Lower-cased textual projection used by the client-side filter."""
        return FIELD_SEPARATOR.join((self.id, self.name, self.birth_date.isoformat())).lower()


class PageResult(BaseModel):
    """One page of records as returned by a source, plus the overall count."""

    records: Tuple[Record, ...] = ()
    total_count: int = Field(0, ge=0)

    model_config = {"frozen": True}

    @classmethod
    def from_raw(cls, entries: Iterable[Mapping[str, Any]], total_count: Any) -> "PageResult":
        """Validate every raw entry; a single bad entry rejects the whole page."""
        records = tuple(Record.from_raw(entry) for entry in entries)
        try:
            count = int(total_count)
        except (TypeError, ValueError) as exc:
            raise InvalidRecordError(f"Malformed total count: {total_count!r}") from exc
        if count < 0:
            raise InvalidRecordError(f"Negative total count: {count}")
        return cls(records=records, total_count=count)


__all__ = ["Record", "PageResult"]
