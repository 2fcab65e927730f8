"""Text encoding of marked dates for the key-value store."""

import re
from collections.abc import Mapping
from datetime import date

ENTRY_SEPARATOR = ","
FIELD_SEPARATOR = ":"
_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")
_ENTRY_FIELDS = 2
_FLAG_LITERALS = {"true": True, "false": False}


class MarkedDatesDecodeError(ValueError):
    """Raised when a stored marked-dates string cannot be decoded."""

    def __init__(self, entry: str, reason: str) -> None:
        super().__init__(f"Invalid marked-dates entry {entry!r}: {reason}")
        self.entry = entry
        self.reason = reason


def serialize_marked_dates(
    marked_dates: Mapping[date, bool], *, sort: bool = False
) -> str:
    """Encode marked dates as `YYYY-MM-DD:true|false` entries joined by commas.

    Entries keep the mapping's iteration order unless `sort` is set, which
    orders them by date for a canonical encoding.
    """
    items = sorted(marked_dates.items()) if sort else marked_dates.items()
    return ENTRY_SEPARATOR.join(
        f"{day.isoformat()}{FIELD_SEPARATOR}{'true' if delivered else 'false'}"
        for day, delivered in items
    )


def parse_marked_dates(data: str) -> dict[date, bool]:
    """Decode a string produced by `serialize_marked_dates`.

    Raises MarkedDatesDecodeError for any malformed entry.
    """
    if not data:
        return {}
    marked: dict[date, bool] = {}
    for entry in data.split(ENTRY_SEPARATOR):
        parts = entry.split(FIELD_SEPARATOR)
        if len(parts) != _ENTRY_FIELDS:
            raise MarkedDatesDecodeError(entry, "expected <date>:<flag>")
        day_raw, flag_raw = parts
        marked[_parse_day(entry, day_raw)] = _parse_flag(entry, flag_raw)
    return marked


def _parse_day(entry: str, raw: str) -> date:
    if not _ISO_DATE.fullmatch(raw):
        raise MarkedDatesDecodeError(entry, "date is not YYYY-MM-DD")
    try:
        return date.fromisoformat(raw)
    except ValueError as exc:
        raise MarkedDatesDecodeError(entry, str(exc)) from exc


def _parse_flag(entry: str, raw: str) -> bool:
    if raw not in _FLAG_LITERALS:
        raise MarkedDatesDecodeError(entry, "flag must be 'true' or 'false'")
    return _FLAG_LITERALS[raw]
