"""Capability surface of the chat host.

The plugin never stores posts or checks permissions itself: it calls the
host through `PluginAPI`. `MattermostAPI` implements it over the Mattermost
REST API v4; tests substitute their own implementation.

Environment (through `PluginSettings`):
- GIF_PLUGIN_HOST_URL: Mattermost server root URL
- GIF_PLUGIN_HOST_TOKEN: bot access token
- GIF_PLUGIN_TEAM_ID: team owning the slash commands
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any

import requests
from pydantic import BaseModel, Field

from gif_provider.errors import ErrorGenerator, HostOperationError

logger = logging.getLogger(__name__)

PERMISSION_CREATE_POST = "create_post"


class Post(BaseModel):
    """A chat post, ephemeral or permanent."""

    id: str = ""
    user_id: str = ""
    channel_id: str = ""
    root_id: str = ""
    message: str = ""
    props: dict[str, Any] = Field(default_factory=dict)


class SlashCommand(BaseModel):
    """Slash command registration metadata."""

    trigger: str
    display_name: str = ""
    description: str = ""
    auto_complete: bool = True
    auto_complete_desc: str = ""
    auto_complete_hint: str = ""


class CommandArgs(BaseModel):
    """Context of a slash command invocation."""

    command: str
    user_id: str = ""
    channel_id: str = ""
    team_id: str = ""
    root_id: str = ""


class CommandResponse(BaseModel):
    """Answer to a slash command. An empty response posts nothing."""

    response_type: str = ""
    text: str = ""


RESPONSE_TYPE_IN_CHANNEL = "in_channel"
RESPONSE_TYPE_EPHEMERAL = "ephemeral"


class PluginAPI(ABC):
    """Operations the plugin needs from the chat host."""

    @abstractmethod
    def register_command(self, command: SlashCommand) -> None:
        """Register a slash command."""

    @abstractmethod
    def send_ephemeral_post(self, user_id: str, post: Post) -> Post:
        """Show `post` to `user_id` only."""

    @abstractmethod
    def update_ephemeral_post(self, user_id: str, post: Post) -> Post:
        """Replace the ephemeral post with the same id."""

    @abstractmethod
    def delete_ephemeral_post(self, user_id: str, post_id: str) -> None:
        """Remove an ephemeral post."""

    @abstractmethod
    def create_post(self, post: Post) -> Post:
        """Create a permanent post."""

    @abstractmethod
    def has_permission_to_channel(
        self, user_id: str, channel_id: str, permission: str
    ) -> bool:
        """Return True if `user_id` holds `permission` in `channel_id`."""

    def log_warning(self, message: str, **fields: Any) -> None:
        """Best-effort warning sink."""
        logger.warning(message, extra=fields)


class MattermostAPI(PluginAPI):
    """`PluginAPI` backed by the Mattermost REST API v4."""

    def __init__(
        self,
        base_url: str,
        token: str,
        error_generator: ErrorGenerator,
        *,
        team_id: str = "",
        command_url: str = "",
        timeout: float = 10,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.errors = error_generator
        self.team_id = team_id
        self.command_url = command_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def _call(
        self, method: str, path: str, payload: dict[str, Any] | None = None
    ) -> requests.Response:
        """Low-level REST call raising `HostOperationError` on failure."""
        url = f"{self.base_url}/api/v4{path}"
        headers = {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json; charset=utf-8",
        }
        data = json.dumps(payload) if payload is not None else None
        try:
            resp = self.session.request(
                method, url, data=data, headers=headers, timeout=self.timeout
            )
        except requests.RequestException as exc:
            raise self.errors.from_error(
                f"Could not reach the chat server ({method} {path})",
                exc,
                HostOperationError,
            ) from exc
        if not resp.ok:
            raise self.errors.from_message(
                f"The chat server rejected {method} {path} "
                f"({resp.status_code} {resp.reason or ''})".rstrip(),
                HostOperationError,
            )
        return resp

    @staticmethod
    def _post_payload(post: Post) -> dict[str, Any]:
        payload = post.model_dump(exclude_defaults=True)
        payload.setdefault("message", "")
        return payload

    @staticmethod
    def _to_post(resp: requests.Response, fallback: Post) -> Post:
        try:
            return Post.model_validate(resp.json())
        except ValueError:
            return fallback

    def register_command(self, command: SlashCommand) -> None:
        payload = {
            "team_id": self.team_id,
            "trigger": command.trigger,
            "method": "P",
            "url": self.command_url,
            "display_name": command.display_name,
            "description": command.description,
            "auto_complete": command.auto_complete,
            "auto_complete_desc": command.auto_complete_desc,
            "auto_complete_hint": command.auto_complete_hint,
        }
        self._call("POST", "/commands", payload)

    def send_ephemeral_post(self, user_id: str, post: Post) -> Post:
        resp = self._call(
            "POST",
            "/posts/ephemeral",
            {"user_id": user_id, "post": self._post_payload(post)},
        )
        return self._to_post(resp, post)

    def update_ephemeral_post(self, user_id: str, post: Post) -> Post:
        # The webapp replaces an ephemeral post when one with the same id arrives
        return self.send_ephemeral_post(user_id, post)

    def delete_ephemeral_post(self, user_id: str, post_id: str) -> None:
        self._call("DELETE", f"/posts/{post_id}")

    def create_post(self, post: Post) -> Post:
        resp = self._call("POST", "/posts", self._post_payload(post))
        return self._to_post(resp, post)

    def has_permission_to_channel(
        self, user_id: str, channel_id: str, permission: str
    ) -> bool:
        if permission != PERMISSION_CREATE_POST:
            return False
        try:
            self._call("GET", f"/channels/{channel_id}/members/{user_id}")
        except HostOperationError as exc:
            self.log_warning(
                "host.permission.denied",
                user_id=user_id,
                channel_id=channel_id,
                error=exc.render(),
            )
            return False
        return True
