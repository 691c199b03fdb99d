"""
HTTP request executor.

Builds a configured ``requests.Session`` and runs exactly one request per
call, checking the status against the operation's expected success code.
Network failures surface as ``TransportError`` and status mismatches as
``UnexpectedStatusError``; nothing is retried unless the caller mounts its
own ``Retry`` strategy.

Usage::

    from naturalist.services.http import RequestExecutor, create_session

    executor = RequestExecutor(create_session(settings))
    resp = executor.execute("GET", "https://www.inaturalist.org/observations.json")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

import requests
from requests.adapters import HTTPAdapter
from requests.structures import CaseInsensitiveDict
from urllib3.util.retry import Retry

from naturalist.errors import TransportError, UnexpectedStatusError

if TYPE_CHECKING:
    from naturalist.config import Settings

logger = logging.getLogger(__name__)

#: Default strategy: no retries. Pass a custom ``Retry`` to opt in.
NO_RETRY = Retry(total=0, connect=0, read=0, redirect=0, raise_on_status=False)

DEFAULT_TIMEOUT = 30  # seconds

# Longest response excerpt kept on UnexpectedStatusError
BODY_EXCERPT = 500


@dataclass(frozen=True)
class RawResponse:
    """Status, headers and undecoded body of one response."""

    status: int
    content: bytes = b""
    headers: CaseInsensitiveDict[str] = field(default_factory=CaseInsensitiveDict)


class HttpExecutor(Protocol):
    """Performs one request and checks its status."""

    def execute(
        self,
        method: str,
        url: str,
        body: bytes | None = None,
        expected_status: int = 200,
    ) -> RawResponse: ...


def create_session(
    settings: Settings | None = None,
    retry: Retry | None = None,
) -> requests.Session:
    """
    Build a ``requests.Session`` for the provider.

    Args:
        settings: Supplies timeout, User-Agent and optional bearer token.
        retry: Custom retry strategy (defaults to ``NO_RETRY``).
    """
    timeout = settings.http_timeout if settings is not None else DEFAULT_TIMEOUT

    s = requests.Session()
    adapter = HTTPAdapter(max_retries=retry or NO_RETRY)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers["Accept"] = "application/json"
    if settings is not None:
        s.headers["User-Agent"] = settings.user_agent
        if settings.access_token:
            s.headers["Authorization"] = f"Bearer {settings.access_token}"

    # Monkey-patch send to inject a default timeout so callers don't need to
    # remember to pass ``timeout=`` every time.
    _original_send = s.send

    def _send_with_timeout(
        prepared: requests.PreparedRequest, **kwargs: object
    ) -> requests.Response:
        kwargs.setdefault("timeout", timeout)
        return _original_send(prepared, **kwargs)  # type: ignore[arg-type]

    s.send = _send_with_timeout  # type: ignore[method-assign]
    return s


class RequestExecutor:
    """``HttpExecutor`` backed by a ``requests.Session``."""

    def __init__(self, session: requests.Session) -> None:
        self.session = session

    def execute(
        self,
        method: str,
        url: str,
        body: bytes | None = None,
        expected_status: int = 200,
    ) -> RawResponse:
        headers = {"Content-Type": "application/json"} if body else {}
        try:
            resp = self.session.request(method, url, data=body, headers=headers)
        except requests.RequestException as exc:
            logger.debug("%s %s failed: %s", method, url, exc)
            raise TransportError(str(exc) or type(exc).__name__, url=url) from exc

        logger.debug("%s %s -> %d", method, url, resp.status_code)
        if resp.status_code != expected_status:
            raise UnexpectedStatusError(
                resp.status_code,
                expected_status,
                body=resp.text[:BODY_EXCERPT],
                url=url,
            )
        return RawResponse(
            status=resp.status_code,
            content=resp.content,
            headers=CaseInsensitiveDict(resp.headers),
        )
