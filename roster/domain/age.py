"""Age derivation from a birth date."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

from roster.domain.errors import InvalidBirthDateError

DateLike = Union[date, str]


def parse_date(value: DateLike) -> date:
    """
    Coerce an ISO-8601 string (or date/datetime) into a calendar date.

    Raises
    ------
    InvalidBirthDateError
        If the value is not a parseable calendar date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError as exc:
            raise InvalidBirthDateError(value) from exc
    raise InvalidBirthDateError(value)


def age(birth_date: DateLike, now: Optional[DateLike] = None) -> int:
    """
    Number of complete years between `birth_date` and `now` (default: today).

    The birthday counts on its anniversary date; a birth date in the future
    yields a negative age.
    """
    born = parse_date(birth_date)
    today = parse_date(now) if now is not None else date.today()

    years = today.year - born.year
    if (today.month, today.day) < (born.month, born.day):
        years -= 1
    return years


__all__ = ["age", "parse_date"]
