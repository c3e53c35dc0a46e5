"""Plugin settings and GIF provider selection.

Settings come from environment variables prefixed with ``GIF_PLUGIN_`` or
from a local ``.env`` file.
"""

from __future__ import annotations

from enum import Enum

from pydantic_settings import BaseSettings, SettingsConfigDict

from gif_provider.base import GifProvider
from gif_provider.errors import ConfigError, ErrorGenerator
from gif_provider.gfycat import GFYCAT_ROOT_URL, GfycatProvider
from gif_provider.giphy import GIPHY_ROOT_URL, GiphyProvider
from gif_provider.http_client import DEFAULT_TIMEOUT_SECONDS, HTTPClient

PLUGIN_ID = "com.github.gif-plugin"


class DisplayMode(str, Enum):
    """How a GIF is rendered inside a post."""

    EMBEDDED = "embedded"
    FULL_URL = "full_url"


class ProviderName(str, Enum):
    """Supported GIF providers."""

    GIPHY = "giphy"
    GFYCAT = "gfycat"


DEFAULT_RENDITIONS: dict[ProviderName, str] = {
    ProviderName.GIPHY: "fixed_height_small",
    ProviderName.GFYCAT: "gif100px",
}


class PluginSettings(BaseSettings):
    """Settings for the GIF plugin.

    With the default ``giphy`` provider, ``GIF_PLUGIN_GIPHY_API_KEY`` is
    required: the plugin refuses to start without it.
    """

    provider: ProviderName = ProviderName.GIPHY
    giphy_api_key: str = ""
    giphy_root_url: str = GIPHY_ROOT_URL
    gfycat_root_url: str = GFYCAT_ROOT_URL
    rating: str = ""
    language: str = ""
    # Empty means the provider default from DEFAULT_RENDITIONS
    rendition: str = ""
    display_mode: DisplayMode = DisplayMode.EMBEDDED
    # Ephemeral previews only render embedded images
    preview_display_mode: DisplayMode = DisplayMode.EMBEDDED

    plugin_id: str = PLUGIN_ID
    bot_user_id: str = ""
    host_url: str = "http://localhost:8065"
    host_token: str = ""
    team_id: str = ""
    command_url: str = ""
    http_timeout: float = DEFAULT_TIMEOUT_SECONDS

    model_config = SettingsConfigDict(
        env_prefix="GIF_PLUGIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def effective_rendition(self) -> str:
        """Configured rendition, or the provider default."""
        return self.rendition or DEFAULT_RENDITIONS[self.provider]


def build_provider(
    settings: PluginSettings,
    http_client: HTTPClient | None,
    error_generator: ErrorGenerator,
) -> GifProvider:
    """Instantiate the provider selected by `settings`.

    Raises:
        ConfigError: unknown provider or invalid provider configuration.
    """
    if settings.provider == ProviderName.GIPHY:
        if not settings.giphy_api_key:
            raise error_generator.from_message(
                "The Giphy API key is missing: set GIF_PLUGIN_GIPHY_API_KEY",
                ConfigError,
            )
        return GiphyProvider(
            http_client,
            error_generator,
            api_key=settings.giphy_api_key,
            language=settings.language,
            rating=settings.rating,
            rendition=settings.effective_rendition,
            root_url=settings.giphy_root_url,
        )
    if settings.provider == ProviderName.GFYCAT:
        return GfycatProvider(
            http_client,
            error_generator,
            rendition=settings.effective_rendition,
            root_url=settings.gfycat_root_url,
        )
    raise error_generator.from_message(
        f"Unsupported GIF provider: {settings.provider}", ConfigError
    )
