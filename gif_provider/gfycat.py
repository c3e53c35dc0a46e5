"""Gfycat search provider."""

from __future__ import annotations

from typing import Any

from .base import GifProvider
from .errors import ErrorGenerator, RenditionNotFoundError
from .http_client import HTTPClient
from .models import GfycatSearchResponse

GFYCAT_ROOT_URL = "https://api.gfycat.com"
GFYCAT_SEARCH_PATH = "/v1/gfycats/search"


class GfycatProvider(GifProvider):
    """Search GIFs using the Gfycat API.

    The cursor is the opaque token returned by the previous search.
    """

    name = "Gfycat"
    rate_limit_hint = (
        "the default Gfycat API access is shared by every installation and "
        "is rate-limited, try again later"
    )

    def __init__(
        self,
        http_client: HTTPClient | None,
        error_generator: ErrorGenerator | None,
        rendition: str,
        root_url: str = GFYCAT_ROOT_URL,
    ) -> None:
        super().__init__(http_client, error_generator, rendition)
        self.root_url = root_url.rstrip("/")

    def get_attribution_message(self) -> str:
        return "Powered by Gfycat"

    def build_search_params(self, keywords: str, cursor: str) -> dict[str, Any]:
        """Build the query parameters of the search request."""
        params: dict[str, Any] = {"search_text": keywords, "count": 1}
        if cursor:
            params["cursor"] = cursor
        return params

    def get_gif_url(self, keywords: str, cursor: str) -> tuple[str, str]:
        response = self._search(
            self.root_url + GFYCAT_SEARCH_PATH,
            self.build_search_params(keywords, cursor),
            GfycatSearchResponse,
        )
        if not response.gfycats:
            return "", cursor

        url = response.gfycats[0].get(self.rendition)
        if not isinstance(url, str) or not url:
            raise self.error_generator.from_message(
                f"No URL found for display style {self.rendition} in the response",
                RenditionNotFoundError,
            )
        return url, response.cursor or ""
