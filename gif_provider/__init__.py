"""GIF search providers (Giphy, Gfycat) behind a single interface."""

from .base import GifProvider
from .errors import ErrorGenerator, PluginError
from .gfycat import GfycatProvider
from .giphy import GiphyProvider
from .http_client import HTTPClient, new_http_client

__all__ = [
    "GifProvider",
    "GiphyProvider",
    "GfycatProvider",
    "ErrorGenerator",
    "PluginError",
    "HTTPClient",
    "new_http_client",
]
