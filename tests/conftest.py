"""Shared fixtures: a scripted executor so no test touches the network."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

import pytest
from requests.structures import CaseInsensitiveDict

from naturalist.client import Client
from naturalist.config import Settings
from naturalist.errors import UnexpectedStatusError
from naturalist.services.http import RawResponse

BASE_URL = "https://inat.example.org"


@dataclass
class Call:
    method: str
    url: str
    body: bytes | None
    expected_status: int


@dataclass
class FakeExecutor:
    """Replays queued responses and records every request."""

    responses: list[RawResponse | Exception] = field(default_factory=list)
    calls: list[Call] = field(default_factory=list)

    def queue(
        self,
        payload: Any = None,
        *,
        status: int = 200,
        headers: dict[str, str] | None = None,
        raw: bytes | None = None,
    ) -> None:
        content = raw if raw is not None else json.dumps(payload).encode()
        self.responses.append(
            RawResponse(status=status, content=content, headers=CaseInsensitiveDict(headers or {}))
        )

    def fail(self, exc: Exception) -> None:
        self.responses.append(exc)

    def execute(
        self,
        method: str,
        url: str,
        body: bytes | None = None,
        expected_status: int = 200,
    ) -> RawResponse:
        self.calls.append(Call(method, url, body, int(expected_status)))
        resp = self.responses.pop(0)
        if isinstance(resp, Exception):
            raise resp
        if resp.status != expected_status:
            raise UnexpectedStatusError(resp.status, expected_status, url=url)
        return resp


@pytest.fixture
def settings() -> Settings:
    return Settings(base_url=BASE_URL + "/", access_token="token-123", http_timeout=5)


@pytest.fixture
def executor() -> FakeExecutor:
    return FakeExecutor()


@pytest.fixture
def client(settings: Settings, executor: FakeExecutor) -> Client:
    return Client(settings, executor=executor)
