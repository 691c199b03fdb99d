"""naturalist - typed client for the iNaturalist observations REST API.

Architecture::

    schemas.py        Pydantic models (observations, nested photos/comments/projects, options)
    codec.py          JSON bodies <-> models (string-encoded coordinates, omit-if-unset)
    query.py          List options -> query string
    paging.py         Response headers -> PageInfo
    dates.py          RFC 3339 formatting, free-text observed-on parsing
    client.py         Settings + executor + URL builder
    observations.py   One function per endpoint
    services/http.py  requests-based executor (status check, no retries)

Data flow: options -> query/codec -> executor (one HTTP call) -> codec/paging -> models
"""

__version__ = "0.1.0"
__author__ = "Michael Howden"

from naturalist.client import Client
from naturalist.config import Settings
from naturalist.errors import (
    DecodeError,
    EncodeError,
    NaturalistError,
    ParseError,
    TransportError,
    UnexpectedStatusError,
)

__all__ = [
    "Client",
    "DecodeError",
    "EncodeError",
    "NaturalistError",
    "ParseError",
    "Settings",
    "TransportError",
    "UnexpectedStatusError",
    "__version__",
]
