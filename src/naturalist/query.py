"""
Query-string builder for the observations list endpoint.

Only options the caller set contribute parameters. Keys are emitted in
sorted order so the same options always produce the same string.
"""

from __future__ import annotations

from urllib.parse import urlencode

from naturalist.dates import format_date, format_timestamp
from naturalist.schemas import GetObservationsOpt

ORDER_ASC = "asc"
ORDER_DESC = "desc"


def format_coordinate(value: float) -> str:
    """Shortest decimal form of ``value``; whole numbers drop the ``.0``."""
    text = repr(float(value))
    if text.endswith(".0"):
        text = text[:-2]
    return text


def build_params(opt: GetObservationsOpt | None) -> dict[str, str]:
    """Map list options to query parameters (wire key -> encoded value)."""
    params: dict[str, str] = {}
    if opt is None:
        return params

    if opt.page is not None:
        params["page"] = str(opt.page)
    if opt.per_page is not None:
        params["per_page"] = str(opt.per_page)
    if opt.rectangle is not None:
        params["swlng"] = format_coordinate(opt.rectangle.southwest.longitude)
        params["swlat"] = format_coordinate(opt.rectangle.southwest.latitude)
        params["nelng"] = format_coordinate(opt.rectangle.northeast.longitude)
        params["nelat"] = format_coordinate(opt.rectangle.northeast.latitude)
    if opt.order_by is not None:
        params["order_by"] = opt.order_by
        if opt.order_ascending is None:
            params["order"] = ORDER_DESC
    if opt.order_ascending is not None:
        params["order"] = ORDER_ASC if opt.order_ascending else ORDER_DESC
    if opt.updated_since is not None:
        params["updated_since"] = format_timestamp(opt.updated_since, fractional=False)
    if opt.has_geo is not None:
        # The provider has no "without geo" filter; presence is the signal.
        params["has[]"] = "geo"
    if opt.on is not None:
        params["on"] = format_date(opt.on)
    return params


def build_query(opt: GetObservationsOpt | None) -> str:
    """
    Encode list options as a query string (without the leading ``?``).

    Returns an empty string when nothing is set.
    """
    params = build_params(opt)
    return urlencode(sorted(params.items()))
