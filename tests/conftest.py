from __future__ import annotations

import os
import sys
from http import HTTPStatus
from typing import Any, Callable

import pytest
import requests


PROJECT_ROOT = os.path.dirname(os.path.dirname(__file__))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

# Minimal environment for module imports during tests
os.environ.setdefault("GIF_PLUGIN_GIPHY_API_KEY", "apikey")
os.environ.setdefault("GIF_PLUGIN_BOT_USER_ID", "bot")

from gif_provider.errors import ErrorGenerator  # noqa: E402


def make_response(status: int, body: str | bytes = b"") -> requests.Response:
    """Build a `requests.Response` as returned by `Session.send`."""
    resp = requests.Response()
    resp.status_code = status
    resp.reason = HTTPStatus(status).phrase
    resp._content = body.encode("utf-8") if isinstance(body, str) else body
    return resp


class FakeHTTPClient:
    """HTTP client returning a canned response and recording requests."""

    def __init__(
        self,
        response: requests.Response | None = None,
        error: Exception | None = None,
    ) -> None:
        self.response = response
        self.error = error
        self.requests: list[requests.PreparedRequest] = []

    @property
    def last_request(self) -> requests.PreparedRequest:
        return self.requests[-1]

    def send(
        self, request: requests.PreparedRequest, **kwargs: Any
    ) -> requests.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        assert self.response is not None
        return self.response


@pytest.fixture
def errors() -> ErrorGenerator:
    return ErrorGenerator("test-plugin")


@pytest.fixture
def http_client_factory() -> Callable[..., FakeHTTPClient]:
    def _factory(
        status: int = 200,
        body: str | bytes = b"",
        error: Exception | None = None,
    ) -> FakeHTTPClient:
        return FakeHTTPClient(make_response(status, body), error=error)

    return _factory
