"""GIF plugin: wires settings, provider and host together.

Handles the two slash commands:
- ``/gif`` posts a GIF matching the search in the channel
- ``/gifs`` shows an ephemeral preview that can be shuffled, sent or canceled
"""

from __future__ import annotations

import logging

from gif_provider.base import GifProvider
from gif_provider.errors import (
    CommandSyntaxError,
    ErrorGenerator,
    HostOperationError,
    PluginError,
)
from gif_provider.http_client import HTTPClient, new_http_client

from .actions import ActionHandler
from .commands import (
    TRIGGER_GIF,
    TRIGGER_GIFS,
    generate_gif_caption,
    generate_shuffle_post_attachments,
    get_slash_commands,
    parse_command_line,
)
from .config import PluginSettings, build_provider
from .host import (
    RESPONSE_TYPE_EPHEMERAL,
    RESPONSE_TYPE_IN_CHANNEL,
    CommandArgs,
    CommandResponse,
    MattermostAPI,
    PluginAPI,
    Post,
)
from .notifier import UserNotifier

logger = logging.getLogger(__name__)


class GifPlugin:
    """Entry points called by the chat host."""

    def __init__(
        self,
        settings: PluginSettings,
        api: PluginAPI,
        provider: GifProvider,
        error_generator: ErrorGenerator,
        notifier: UserNotifier | None = None,
    ) -> None:
        self.settings = settings
        self.api = api
        self.provider = provider
        self.errors = error_generator
        self.bot_id = settings.bot_user_id
        self.notifier = notifier or UserNotifier(api, self.bot_id)
        self.actions = ActionHandler(
            api,
            provider,
            self.notifier,
            error_generator,
            bot_id=self.bot_id,
            plugin_id=settings.plugin_id,
            display_mode=settings.display_mode,
            preview_display_mode=settings.preview_display_mode,
        )

    @classmethod
    def from_settings(
        cls,
        settings: PluginSettings | None = None,
        *,
        api: PluginAPI | None = None,
        http_client: HTTPClient | None = None,
    ) -> "GifPlugin":
        """Build the plugin from settings, creating default collaborators.

        Raises:
            ConfigError: the provider configuration is invalid.
        """
        settings = settings or PluginSettings()
        errors = ErrorGenerator(settings.plugin_id)
        provider = build_provider(
            settings, http_client or new_http_client(settings.http_timeout), errors
        )
        if api is None:
            api = MattermostAPI(
                settings.host_url,
                settings.host_token,
                errors,
                team_id=settings.team_id,
                command_url=settings.command_url,
                timeout=settings.http_timeout,
            )
        return cls(settings, api, provider, errors)

    def on_activate(self) -> None:
        """Register the slash commands.

        Raises:
            HostOperationError: a command could not be registered.
        """
        for command in get_slash_commands():
            try:
                self.api.register_command(command)
            except HostOperationError as exc:
                raise self.errors.from_error(
                    f"Unable to define the following command: {command.trigger}",
                    exc,
                    HostOperationError,
                ) from exc
            logger.info("plugin.command.registered", extra={"trigger": command.trigger})

    def execute_command(self, args: CommandArgs) -> CommandResponse:
        """Run a slash command; errors become an ephemeral response."""
        parts = args.command.split(maxsplit=1)
        trigger = parts[0].lstrip("/") if parts else ""
        try:
            if trigger == TRIGGER_GIF:
                return self.execute_command_gif(args)
            if trigger == TRIGGER_GIFS:
                return self.execute_command_gif_shuffle(args)
            raise self.errors.from_message(
                f"Unknown command: /{trigger}", CommandSyntaxError
            )
        except PluginError as exc:
            if exc.is_technical:
                logger.warning(
                    "plugin.command.failed",
                    extra={"trigger": trigger, "error": exc.render(technical=True)},
                )
            return CommandResponse(
                response_type=RESPONSE_TYPE_EPHEMERAL, text=exc.message
            )

    def _no_result(self, keywords: str) -> CommandResponse:
        return CommandResponse(
            response_type=RESPONSE_TYPE_EPHEMERAL,
            text=f"No GIF found for '{keywords}'",
        )

    def execute_command_gif(self, args: CommandArgs) -> CommandResponse:
        """Return a public post containing a matching GIF."""
        keywords, caption = parse_command_line(args.command, TRIGGER_GIF, self.errors)
        gif_url, _ = self.provider.get_gif_url(keywords, "")
        if not gif_url:
            return self._no_result(keywords)
        text = generate_gif_caption(
            self.settings.display_mode,
            keywords,
            caption,
            gif_url,
            self.provider.get_attribution_message(),
        )
        return CommandResponse(response_type=RESPONSE_TYPE_IN_CHANNEL, text=text)

    def execute_command_gif_shuffle(self, args: CommandArgs) -> CommandResponse:
        """Send an ephemeral preview that can be posted, shuffled or canceled."""
        keywords, caption = parse_command_line(args.command, TRIGGER_GIFS, self.errors)
        gif_url, cursor = self.provider.get_gif_url(keywords, "")
        if not gif_url:
            return self._no_result(keywords)

        post = Post(
            user_id=self.bot_id,
            channel_id=args.channel_id,
            root_id=args.root_id,
            message=generate_gif_caption(
                self.settings.preview_display_mode,
                keywords,
                caption,
                gif_url,
                self.provider.get_attribution_message(),
            ),
            props={
                "attachments": generate_shuffle_post_attachments(
                    keywords,
                    caption,
                    gif_url,
                    cursor,
                    args.root_id,
                    self.settings.plugin_id,
                )
            },
        )
        self.api.send_ephemeral_post(args.user_id, post)
        return CommandResponse()
