"""Typed errors raised by GIF providers and the plugin.

Errors are never instantiated directly by the components: each one receives
an `ErrorGenerator` at construction time and builds its errors through it,
so the caller decides how errors are tagged and rendered.
"""

from __future__ import annotations

import logging
from typing import TypeVar

logger = logging.getLogger(__name__)


class PluginError(Exception):
    """Base error carrying a user-facing message and an optional cause."""

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        *,
        where: str = "",
    ) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.where = where

    @property
    def is_technical(self) -> bool:
        """True when a lower-level cause is attached."""
        return self.cause is not None

    def render(self, technical: bool | None = None) -> str:
        """Render the error for display.

        Args:
            technical: Force the rendering mode. Defaults to technical when a
                cause is attached, domain otherwise.

        Returns:
            The message alone (domain) or the message followed by the cause.
        """
        if technical is None:
            technical = self.is_technical
        if technical and self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message

    def __str__(self) -> str:
        return self.render()


class ConfigError(PluginError):
    """Invalid provider or plugin configuration."""


class ClientInputError(PluginError):
    """Malformed input sent by the user or the host."""


class CommandSyntaxError(ClientInputError):
    """The slash command text could not be parsed."""


class TransportError(PluginError):
    """The provider could not be reached."""


class SearchFailedError(PluginError):
    """The provider answered with a non-2xx status."""


class RateLimitError(SearchFailedError):
    """The provider answered 429 Too Many Requests."""


class EmptyResponseError(PluginError):
    """The provider answered with an empty body."""


class ParseError(PluginError):
    """The provider body is not the expected JSON document."""


class RenditionNotFoundError(PluginError):
    """The first result has no URL for the configured rendition."""


class HostOperationError(PluginError):
    """A call to the chat host failed."""


E = TypeVar("E", bound=PluginError)


class ErrorGenerator:
    """Builds `PluginError` instances tagged with the plugin identifier."""

    def __init__(self, plugin_id: str) -> None:
        self.plugin_id = plugin_id

    def from_message(
        self, message: str, kind: type[E] = PluginError  # type: ignore[assignment]
    ) -> E:
        """Build a domain error (message only)."""
        return kind(message, where=self.plugin_id)

    def from_error(
        self,
        message: str,
        cause: BaseException,
        kind: type[E] = PluginError,  # type: ignore[assignment]
    ) -> E:
        """Build a technical error wrapping `cause`."""
        logger.debug(
            "plugin.error.wrapped",
            extra={"where": self.plugin_id, "cause": repr(cause)},
        )
        return kind(message, cause, where=self.plugin_id)


__all__ = [
    "PluginError",
    "ConfigError",
    "ClientInputError",
    "CommandSyntaxError",
    "TransportError",
    "SearchFailedError",
    "RateLimitError",
    "EmptyResponseError",
    "ParseError",
    "RenditionNotFoundError",
    "HostOperationError",
    "ErrorGenerator",
]
