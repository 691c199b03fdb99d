"""
Provider client.

Holds the immutable ``Settings`` and the HTTP executor, and resolves endpoint
templates against the configured base address. Resource operations live in
``naturalist.observations`` and take a ``Client`` as their first argument.
"""

from __future__ import annotations

from urllib.parse import quote

from naturalist.config import Settings
from naturalist.services.http import HttpExecutor, RequestExecutor, create_session


class Client:
    """Configuration plus transport for one provider account."""

    def __init__(
        self,
        settings: Settings | None = None,
        executor: HttpExecutor | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.executor: HttpExecutor = executor or RequestExecutor(create_session(self.settings))

    def __repr__(self) -> str:
        return f"Client(base_url={self.settings.base_url!r})"

    def build_url(self, template: str, *segments: str | int) -> str:
        """
        Resolve ``template`` against the base address.

        ``{}`` placeholders are filled with ``segments``, each path-escaped
        (``/`` included), e.g. ``build_url("/observations/{}.json", "a b")``.
        """
        escaped = [quote(str(s), safe="") for s in segments]
        path = template.format(*escaped)
        if not path.startswith("/"):
            path = "/" + path
        return self.settings.base_url + path
