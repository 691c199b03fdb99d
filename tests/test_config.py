"""Tests for settings and the client URL builder."""

from __future__ import annotations

import pytest

from naturalist.client import Client
from naturalist.config import DEFAULT_BASE_URL, Settings, get_settings
from naturalist.services.http import RequestExecutor


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NATURALIST_BASE_URL", raising=False)
        monkeypatch.delenv("NATURALIST_ACCESS_TOKEN", raising=False)
        s = Settings(_env_file=None)
        assert s.base_url == DEFAULT_BASE_URL
        assert s.access_token is None
        assert s.http_timeout == 30.0

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NATURALIST_BASE_URL", "https://staging.example.org/")
        monkeypatch.setenv("NATURALIST_ACCESS_TOKEN", "secret")
        s = Settings(_env_file=None)
        assert s.base_url == "https://staging.example.org"
        assert s.access_token == "secret"

    def test_frozen(self) -> None:
        s = Settings(_env_file=None)
        with pytest.raises(ValueError):
            s.base_url = "https://elsewhere.example.org"  # type: ignore[misc]

    def test_timeout_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            Settings(_env_file=None, http_timeout=0)

    def test_get_settings_cached(self) -> None:
        get_settings.cache_clear()
        assert get_settings() is get_settings()
        get_settings.cache_clear()


class TestClient:
    def test_default_executor(self) -> None:
        client = Client(Settings(_env_file=None, access_token="abc"))
        assert isinstance(client.executor, RequestExecutor)
        assert client.executor.session.headers["Authorization"] == "Bearer abc"

    def test_build_url(self, client: Client) -> None:
        assert client.build_url("/observations.json") == "https://inat.example.org/observations.json"

    def test_build_url_escapes_segments(self, client: Client) -> None:
        url = client.build_url("/observations/{}.json", "jane doe/../x")
        assert url == "https://inat.example.org/observations/jane%20doe%2F..%2Fx.json"

    def test_build_url_with_int(self, client: Client) -> None:
        assert client.build_url("observations/{}.json", 42).endswith("/observations/42.json")

    def test_repr(self, client: Client) -> None:
        assert "inat.example.org" in repr(client)
