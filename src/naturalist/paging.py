"""Extract paging metadata from list response headers."""

from __future__ import annotations

from collections.abc import Mapping

from requests.structures import CaseInsensitiveDict

from naturalist.errors import DecodeError
from naturalist.schemas import PageInfo

TOTAL_ENTRIES_HEADER = "X-Total-Entries"
PAGE_HEADER = "X-Page"
PER_PAGE_HEADER = "X-Per-Page"


def _int_header(headers: Mapping[str, str], name: str) -> int | None:
    raw = headers.get(name)
    if raw is None or not str(raw).strip():
        return None
    try:
        return int(str(raw).strip())
    except ValueError as exc:
        raise DecodeError(f"paging header {name} is not an integer: {raw!r}") from exc


def decode_page_info(headers: Mapping[str, str]) -> PageInfo:
    """
    Read ``X-Total-Entries``/``X-Page``/``X-Per-Page``.

    Absent headers leave the corresponding field ``None`` (not reported),
    which is distinct from the provider reporting zero.
    """
    if not isinstance(headers, CaseInsensitiveDict):
        headers = CaseInsensitiveDict(headers)
    return PageInfo(
        total_entries=_int_header(headers, TOTAL_ENTRIES_HEADER),
        page=_int_header(headers, PAGE_HEADER),
        per_page=_int_header(headers, PER_PAGE_HEADER),
    )
