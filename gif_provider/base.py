"""GIF provider interface and the request handling shared by implementations."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from .errors import (
    ConfigError,
    EmptyResponseError,
    ErrorGenerator,
    ParseError,
    RateLimitError,
    SearchFailedError,
    TransportError,
)
from .http_client import HTTPClient

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def status_text(response: requests.Response) -> str:
    """Return the HTTP status line, e.g. ``429 Too Many Requests``."""
    return f"{response.status_code} {response.reason or ''}".strip()


class GifProvider(ABC):
    """Search a third-party GIF API and return a single image URL.

    Implementations hold immutable configuration only. The pagination cursor
    belongs to the caller: it is passed in and the cursor for the next call
    is returned alongside the URL.
    """

    name: str = "GIF provider"
    rate_limit_hint: str = "the default API key is shared and rate-limited"

    def __init__(
        self,
        http_client: HTTPClient | None,
        error_generator: ErrorGenerator | None,
        rendition: str,
    ) -> None:
        if error_generator is None:
            raise ConfigError(f"{self.name}: the error generator is missing")
        if http_client is None:
            raise error_generator.from_message(
                f"{self.name}: the HTTP client is missing", ConfigError
            )
        if not rendition:
            raise error_generator.from_message(
                f"{self.name}: the GIF rendition (display style) must be configured",
                ConfigError,
            )
        self.http_client = http_client
        self.error_generator = error_generator
        self.rendition = rendition

    @abstractmethod
    def get_gif_url(self, keywords: str, cursor: str) -> tuple[str, str]:
        """Return ``(url, next_cursor)`` for the first result after `cursor`.

        An empty URL means the search matched nothing; the cursor is then
        returned unchanged.
        """

    @abstractmethod
    def get_attribution_message(self) -> str:
        """Return the branding line required by the provider."""

    def _search(self, url: str, params: dict[str, Any], model: type[M]) -> M:
        """Send a GET request and parse the JSON body into `model`.

        Raises:
            TransportError: the request could not be sent.
            RateLimitError: the provider answered 429.
            SearchFailedError: the provider answered any other non-2xx status.
            EmptyResponseError: the body is empty.
            ParseError: the body does not match `model`.
        """
        errors = self.error_generator
        request = requests.Request("GET", url, params=params).prepare()
        try:
            response = self.http_client.send(request)
        except requests.RequestException as exc:
            raise errors.from_error(
                f"Error calling the {self.name} API", exc, TransportError
            ) from exc

        if not 200 <= response.status_code < 300:
            status = status_text(response)
            logger.warning(
                "provider.search.failed",
                extra={"provider": self.name, "status": status},
            )
            if response.status_code == 429:
                raise errors.from_message(
                    f"Error calling the {self.name} API ({status}): "
                    f"{self.rate_limit_hint}",
                    RateLimitError,
                )
            raise errors.from_message(
                f"Error calling the {self.name} API ({status})",
                SearchFailedError,
            )

        body = response.content
        if not body or not body.strip():
            raise errors.from_message(
                f"The {self.name} search response is empty", EmptyResponseError
            )
        try:
            return model.model_validate_json(body)
        except ValidationError as exc:
            raise errors.from_error(
                f"Could not parse the {self.name} search response",
                exc,
                ParseError,
            ) from exc
