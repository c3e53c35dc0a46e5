"""Giphy search provider."""

from __future__ import annotations

import re
from typing import Any

from .base import GifProvider
from .errors import ConfigError, ErrorGenerator, RenditionNotFoundError
from .http_client import HTTPClient
from .models import GiphySearchResponse

GIPHY_ROOT_URL = "https://api.giphy.com"
GIPHY_SEARCH_PATH = "/v1/gifs/search"

_OFFSET_RE = re.compile(r"[0-9]+")


def parse_offset(cursor: str) -> int | None:
    """Return the cursor as a non-negative offset, or None if it is not one.

    Only plain ASCII digits are accepted: signs, spaces and underscores make
    the cursor invalid.
    """
    if not isinstance(cursor, str) or _OFFSET_RE.fullmatch(cursor) is None:
        return None
    return int(cursor)


class GiphyProvider(GifProvider):
    """Search GIFs using the Giphy API.

    The cursor is the numeric offset of the next result to fetch.
    """

    name = "Giphy"
    rate_limit_hint = (
        "the default Giphy API key is shared by every installation and is "
        "rate-limited, configure your own API key in the plugin settings"
    )

    def __init__(
        self,
        http_client: HTTPClient | None,
        error_generator: ErrorGenerator | None,
        api_key: str,
        language: str,
        rating: str,
        rendition: str,
        root_url: str = GIPHY_ROOT_URL,
    ) -> None:
        super().__init__(http_client, error_generator, rendition)
        if not api_key:
            raise self.error_generator.from_message(
                "Giphy: the API key must be configured", ConfigError
            )
        self.api_key = api_key
        self.language = language
        self.rating = rating
        self.root_url = root_url.rstrip("/")

    def get_attribution_message(self) -> str:
        return "Powered by GIPHY"

    def build_search_params(self, keywords: str, cursor: str) -> dict[str, Any]:
        """Build the query parameters of the search request."""
        params: dict[str, Any] = {
            "api_key": self.api_key,
            "q": keywords,
            "limit": 1,
        }
        if self.rating:
            params["rating"] = self.rating
        if self.language:
            params["lang"] = self.language
        offset = parse_offset(cursor)
        if offset is not None:
            params["offset"] = offset
        return params

    def get_gif_url(self, keywords: str, cursor: str) -> tuple[str, str]:
        response = self._search(
            self.root_url + GIPHY_SEARCH_PATH,
            self.build_search_params(keywords, cursor),
            GiphySearchResponse,
        )
        if not response.data:
            return "", cursor

        image = response.data[0].images.get(self.rendition)
        if image is None or not image.url:
            raise self.error_generator.from_message(
                f"No URL found for display style {self.rendition} in the response",
                RenditionNotFoundError,
            )
        offset = parse_offset(cursor) or 0
        return image.url, str(offset + len(response.data))
