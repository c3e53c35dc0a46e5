"""HTTP client abstraction used by the GIF providers."""

from __future__ import annotations

from typing import Any, Protocol

import requests

DEFAULT_TIMEOUT_SECONDS = 10


class HTTPClient(Protocol):
    """Anything able to send a prepared request, like `requests.Session`."""

    def send(
        self, request: requests.PreparedRequest, **kwargs: Any
    ) -> requests.Response: ...


class TimeoutSession(requests.Session):
    """`requests.Session` applying a default timeout to every request."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        super().__init__()
        self.timeout = timeout

    def send(
        self, request: requests.PreparedRequest, **kwargs: Any
    ) -> requests.Response:
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = self.timeout
        return super().send(request, **kwargs)


def new_http_client(timeout: float = DEFAULT_TIMEOUT_SECONDS) -> HTTPClient:
    """Return the default HTTP client."""
    return TimeoutSession(timeout=timeout)
