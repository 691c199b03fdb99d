"""
Date/time wire formats.

Formatting is strict: RFC 3339 timestamps and ``YYYY-MM-DD`` dates.

Parsing ``observed_on_string`` is best-effort. The provider stores whatever
the observer (or their app) typed, so the field is not self-describing.
Shapes seen in practice::

    2016-03-02
    2016-03-02 3:15:00 PM PST
    2016/03/02 3:15 PM -08:00
    Wed Mar 02 2016 15:15:00 GMT-0800 (PST)
    March 2, 2016 at 3:15 PM PDT
    on 2016-03-02 at 15:15 America/Los_Angeles

Anything else raises ``ParseError``; there is no silent default.
"""

from __future__ import annotations

import re
from datetime import UTC, date, datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from naturalist.errors import ParseError


def format_timestamp(value: datetime, *, fractional: bool = True) -> str:
    """
    Format a datetime as RFC 3339.

    Naive values are taken to be UTC, and UTC is written as ``Z``. With
    ``fractional=False`` sub-second precision is dropped.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    if not fractional:
        value = value.replace(microsecond=0)
    text = value.isoformat()
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


def format_date(value: date) -> str:
    """Plain calendar date, no time component."""
    return value.strftime("%Y-%m-%d")


# Abbreviations the provider emits for North American observers, plus UTC.
TZ_ABBREVIATIONS: dict[str, float] = {
    "UTC": 0,
    "GMT": 0,
    "Z": 0,
    "NST": -3.5,
    "NDT": -2.5,
    "AST": -4,
    "ADT": -3,
    "EST": -5,
    "EDT": -4,
    "CST": -6,
    "CDT": -5,
    "MST": -7,
    "MDT": -6,
    "PST": -8,
    "PDT": -7,
    "AKST": -9,
    "AKDT": -8,
    "HST": -10,
}

DATE_FORMATS = [
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%a %b %d %Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%b %d %Y",
    "%d %B %Y",
    "%d %b %Y",
]

TIME_FORMATS = [
    "",
    " %I:%M:%S %p",
    " %I:%M %p",
    " %H:%M:%S",
    " %H:%M",
]

_CONNECTIVES = re.compile(r"\b(?:on|at)\b", re.IGNORECASE)
_PAREN_SUFFIX = re.compile(r"\s*\([^)]*\)\s*$")
_NUMERIC_OFFSET = re.compile(r"^(?:GMT|UTC)?([+-])(\d{1,2}):?(\d{2})?$", re.IGNORECASE)
_ABBREVIATION = re.compile(r"^[A-Za-z]{1,5}$")
_MERIDIEM = {"AM", "PM"}


def _offset_zone(hours: float) -> timezone:
    return timezone(timedelta(hours=hours))


def _split_zone(text: str, raw: str) -> tuple[str, tzinfo | None]:
    """Peel a trailing timezone token off ``text``."""
    head, _, token = text.rpartition(" ")
    if not head:
        return text, None

    match = _NUMERIC_OFFSET.match(token)
    if match:
        sign, hh, mm = match.groups()
        delta = timedelta(hours=int(hh), minutes=int(mm or 0))
        return head, timezone(-delta if sign == "-" else delta)

    if "/" in token and not token[0].isdigit():
        try:
            return head, ZoneInfo(token)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ParseError(raw, f"unknown time zone {token!r}") from exc

    upper = token.upper()
    if _ABBREVIATION.match(token) and upper not in _MERIDIEM:
        if upper in TZ_ABBREVIATIONS:
            return head, _offset_zone(TZ_ABBREVIATIONS[upper])
        # Month names and weekdays are alphabetic too; only treat the token as
        # a zone when the remainder still ends in a time.
        if re.search(r"\d:\d{2}(?::\d{2})?(?:\s*[AP]M)?$", head, re.IGNORECASE):
            raise ParseError(raw, f"unknown time zone {token!r}")

    return text, None


def try_parse_observed_on(text: str) -> datetime:
    """
    Parse a free-text observed-on string into a datetime.

    The result is timezone-aware when the text names a zone or offset, naive
    otherwise. Date-only input yields midnight.

    Raises:
        ParseError: If the text is empty or matches no known shape.
    """
    raw = text
    text = (text or "").strip()
    if not text:
        raise ParseError(raw, "empty observed-on string")

    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass

    text = _PAREN_SUFFIX.sub("", text)
    text = _CONNECTIVES.sub(" ", text)
    text = " ".join(text.split())
    if not text:
        raise ParseError(raw)

    body, zone = _split_zone(text, raw)

    for date_fmt in DATE_FORMATS:
        for time_fmt in TIME_FORMATS:
            try:
                parsed = datetime.strptime(body, date_fmt + time_fmt)
            except ValueError:
                continue
            return parsed.replace(tzinfo=zone) if zone is not None else parsed

    raise ParseError(raw)
