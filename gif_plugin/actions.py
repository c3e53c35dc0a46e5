"""Interactive actions of the GIF preview post (Cancel, Shuffle, Send).

The preview post created by ``/gifs`` carries all the state of the
conversation in the context of its buttons. When a button is clicked the
host posts that context back:

    POST /shuffle
    Mattermost-User-Id: <user id>
    {"user_id": ..., "channel_id": ..., "post_id": ...,
     "context": {"keywords": ..., "caption": ..., "gifURL": ...,
                 "cursor": ..., "rootId": ...}}

Nothing is stored server-side between two clicks.
"""

from __future__ import annotations

import logging
from http import HTTPStatus

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from gif_provider.base import GifProvider
from gif_provider.errors import (
    ClientInputError,
    ErrorGenerator,
    HostOperationError,
    PluginError,
)

from .commands import (
    URL_CANCEL,
    URL_SEND,
    URL_SHUFFLE,
    generate_gif_caption,
    generate_shuffle_post_attachments,
)
from .config import DisplayMode
from .host import PERMISSION_CREATE_POST, PluginAPI, Post
from .notifier import UserNotifier

logger = logging.getLogger(__name__)

USER_ID_HEADER = "Mattermost-User-Id"


class ActionContext(BaseModel):
    """State carried by the buttons of a preview post."""

    model_config = ConfigDict(populate_by_name=True)

    keywords: str = Field(..., min_length=1)
    caption: str = ""
    gif_url: str = Field(..., min_length=1, alias="gifURL")
    cursor: str = ""
    root_id: str = Field(default="", alias="rootId")


class ActionRequest(BaseModel):
    """Body of a button callback sent by the host."""

    model_config = ConfigDict(extra="ignore")

    user_id: str = ""
    channel_id: str = ""
    post_id: str = ""
    context: ActionContext


def parse_action_request(body: bytes, errors: ErrorGenerator) -> ActionRequest:
    """Parse a callback body.

    Raises:
        ClientInputError: empty body, invalid JSON or missing context values.
    """
    if not body:
        raise errors.from_message("The action request body is empty", ClientInputError)
    try:
        return ActionRequest.model_validate_json(body)
    except ValidationError as exc:
        raise errors.from_error(
            "Could not read the action request", exc, ClientInputError
        ) from exc


class ActionHandler:
    """Runs the Cancel/Shuffle/Send transitions of a preview post."""

    def __init__(
        self,
        api: PluginAPI,
        provider: GifProvider,
        notifier: UserNotifier,
        error_generator: ErrorGenerator,
        *,
        bot_id: str,
        plugin_id: str,
        display_mode: DisplayMode = DisplayMode.EMBEDDED,
        preview_display_mode: DisplayMode = DisplayMode.EMBEDDED,
    ) -> None:
        self.api = api
        self.provider = provider
        self.notifier = notifier
        self.errors = error_generator
        self.bot_id = bot_id
        self.plugin_id = plugin_id
        self.display_mode = display_mode
        self.preview_display_mode = preview_display_mode
        self.routes = {
            URL_CANCEL: self.cancel,
            URL_SHUFFLE: self.shuffle,
            URL_SEND: self.send,
        }

    def dispatch(self, path: str, header_user_id: str | None, body: bytes) -> HTTPStatus:
        """Authenticate, authorize, then run the action mapped to `path`."""
        if not header_user_id:
            return HTTPStatus.UNAUTHORIZED
        handler = self.routes.get(path)
        if handler is None:
            return HTTPStatus.NOT_FOUND
        try:
            request = parse_action_request(body, self.errors)
        except ClientInputError as exc:
            logger.info("action.bad_request", extra={"error": exc.render()})
            return HTTPStatus.BAD_REQUEST
        if request.user_id != header_user_id:
            return HTTPStatus.BAD_REQUEST
        if not self.api.has_permission_to_channel(
            request.user_id, request.channel_id, PERMISSION_CREATE_POST
        ):
            return HTTPStatus.FORBIDDEN
        return handler(request)

    def cancel(self, request: ActionRequest) -> HTTPStatus:
        try:
            self.api.delete_ephemeral_post(request.user_id, request.post_id)
        except HostOperationError as exc:
            self.notifier.notify("Could not cancel the GIF preview", exc, request)
            return HTTPStatus.INTERNAL_SERVER_ERROR
        return HTTPStatus.OK

    def shuffle(self, request: ActionRequest) -> HTTPStatus:
        context = request.context
        try:
            gif_url, cursor = self.provider.get_gif_url(context.keywords, context.cursor)
        except PluginError as exc:
            self.notifier.notify("Unable to fetch a new Gif for shuffling", exc, request)
            return HTTPStatus.SERVICE_UNAVAILABLE

        if not gif_url:
            self.notifier.notify(
                f"No more GIFs found for '{context.keywords}'", None, request
            )
            return HTTPStatus.OK

        attribution = self.provider.get_attribution_message()
        post = Post(
            id=request.post_id,
            user_id=self.bot_id,
            channel_id=request.channel_id,
            root_id=context.root_id,
            message=generate_gif_caption(
                self.preview_display_mode,
                context.keywords,
                context.caption,
                gif_url,
                attribution,
            ),
            props={
                "attachments": generate_shuffle_post_attachments(
                    context.keywords,
                    context.caption,
                    gif_url,
                    cursor,
                    context.root_id,
                    self.plugin_id,
                )
            },
        )
        try:
            self.api.update_ephemeral_post(request.user_id, post)
        except HostOperationError as exc:
            self.notifier.notify("Could not update the GIF preview", exc, request)
            return HTTPStatus.INTERNAL_SERVER_ERROR
        return HTTPStatus.OK

    def send(self, request: ActionRequest) -> HTTPStatus:
        context = request.context
        try:
            self.api.delete_ephemeral_post(request.user_id, request.post_id)
        except HostOperationError as exc:
            # The GIF is still posted when the preview cannot be removed
            self.api.log_warning(
                "action.send.preview_not_deleted",
                user_id=request.user_id,
                post_id=request.post_id,
                error=exc.render(technical=True),
            )

        post = Post(
            user_id=request.user_id,
            channel_id=request.channel_id,
            root_id=context.root_id,
            message=generate_gif_caption(
                self.display_mode,
                context.keywords,
                context.caption,
                context.gif_url,
                self.provider.get_attribution_message(),
            ),
        )
        try:
            self.api.create_post(post)
        except HostOperationError as exc:
            self.notifier.notify("Could not create the GIF post", exc, request)
            return HTTPStatus.INTERNAL_SERVER_ERROR
        return HTTPStatus.OK
