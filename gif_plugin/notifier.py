"""User notification strategy for interactive actions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gif_provider.errors import HostOperationError, PluginError

from .host import PluginAPI, Post

if TYPE_CHECKING:
    from .actions import ActionRequest


class UserNotifier:
    """Tell the invoking user about the outcome of an action.

    Messages are sent as an ephemeral post from the bot in the channel of
    the action. When an error is given, its technical detail is appended and
    logged through the host.
    """

    def __init__(self, api: PluginAPI, bot_id: str) -> None:
        self.api = api
        self.bot_id = bot_id

    def notify(
        self,
        message: str,
        error: PluginError | None,
        request: ActionRequest,
    ) -> None:
        text = message
        if error is not None:
            text = f"{message}: {error.message}"
            self.api.log_warning(
                "action.failed",
                user_id=request.user_id,
                channel_id=request.channel_id,
                error=error.render(technical=True),
            )
        post = Post(
            user_id=self.bot_id,
            channel_id=request.channel_id,
            root_id=request.context.root_id,
            message=text,
        )
        try:
            self.api.send_ephemeral_post(request.user_id, post)
        except HostOperationError as exc:
            self.api.log_warning(
                "action.notify_failed",
                user_id=request.user_id,
                error=exc.render(technical=True),
            )
