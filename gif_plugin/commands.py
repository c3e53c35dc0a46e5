"""Slash command parsing and GIF post formatting.

Everything here is pure: no provider or host calls.
"""

from __future__ import annotations

import re
from typing import Any

from gif_provider.errors import CommandSyntaxError, ErrorGenerator

from .config import DisplayMode
from .host import SlashCommand

TRIGGER_GIF = "gif"
TRIGGER_GIFS = "gifs"

URL_CANCEL = "/cancel"
URL_SHUFFLE = "/shuffle"
URL_SEND = "/send"

CONTEXT_KEYWORDS = "keywords"
CONTEXT_CAPTION = "caption"
CONTEXT_GIF_URL = "gifURL"
CONTEXT_CURSOR = "cursor"
CONTEXT_ROOT_ID = "rootId"

# Words are written as `word(\s+word)*` so that a failed match stays linear
_WORDS = r'[^\s"]+(?:\s+[^\s"]+)*'
_COMMAND_RE = re.compile(
    rf'^\s*(?P<keywords>(?:"{_WORDS}\s*")+|{_WORDS}\s*)'
    rf'(?P<caption>\s+"\s*{_WORDS}\s*")?\s*$'
)


def get_hint_message(trigger: str) -> str:
    return f'[happy kitty] or /{trigger} "[happy kitty]" "[This is a custom caption]"'


def get_slash_commands() -> list[SlashCommand]:
    """Commands registered when the plugin starts."""
    return [
        SlashCommand(
            trigger=TRIGGER_GIF,
            display_name="Giphy Search",
            description="Post a GIF matching your search",
            auto_complete_desc="Post a GIF matching your search",
            auto_complete_hint=get_hint_message(TRIGGER_GIF),
        ),
        SlashCommand(
            trigger=TRIGGER_GIFS,
            display_name="Giphy Shuffle",
            description="Preview a GIF",
            auto_complete_desc="Let you preview and shuffle a GIF before posting for real",
            auto_complete_hint=get_hint_message(TRIGGER_GIFS),
        ),
    ]


def parse_command_line(
    command_line: str, trigger: str, errors: ErrorGenerator
) -> tuple[str, str]:
    """Split a slash command into ``(keywords, caption)``.

    Keywords are either bare words or one or more quoted phrases; an
    optional trailing quoted phrase is the caption.

    Raises:
        CommandSyntaxError: the text matches neither form.
    """
    prefix = re.compile(rf"^\s*/?{re.escape(trigger)}(?=\s|$)")
    match = _COMMAND_RE.match(prefix.sub("", command_line, count=1))
    if match is None:
        raise errors.from_message(
            "Could not read the command, try one of the following syntax: "
            f"/{trigger} {get_hint_message(trigger)}",
            CommandSyntaxError,
        )
    keywords = (match.group("keywords") or "").strip().strip('"').strip()
    caption = (match.group("caption") or "").strip().strip('"').strip()
    return keywords, caption


def generate_gif_caption(
    display_mode: DisplayMode,
    keywords: str,
    caption: str,
    gif_url: str,
    attribution_message: str,
) -> str:
    """Compose the message of a GIF post."""
    caption_or_keywords = caption or f"**/gif [{keywords}]({gif_url})**"
    if display_mode == DisplayMode.FULL_URL:
        return f"{caption_or_keywords} \n\n{gif_url} *{attribution_message}*"
    return (
        f"{caption_or_keywords} \n\n*{attribution_message}* "
        f"\n\n![GIF for '{keywords}']({gif_url})"
    )


def generate_button(
    name: str, url_action: str, context: dict[str, Any], plugin_id: str
) -> dict[str, Any]:
    """Interactive button calling back the plugin HTTP handler."""
    return {
        "id": name.lower(),
        "name": name,
        "type": "button",
        "integration": {
            "url": f"/plugins/{plugin_id}{url_action}",
            "context": context,
        },
    }


def generate_shuffle_post_attachments(
    keywords: str,
    caption: str,
    gif_url: str,
    cursor: str,
    root_id: str,
    plugin_id: str,
) -> list[dict[str, Any]]:
    """Attachments holding the Cancel/Shuffle/Send buttons of a preview."""
    context = {
        CONTEXT_KEYWORDS: keywords,
        CONTEXT_CAPTION: caption,
        CONTEXT_GIF_URL: gif_url,
        CONTEXT_CURSOR: cursor,
        CONTEXT_ROOT_ID: root_id,
    }
    actions = [
        generate_button("Cancel", URL_CANCEL, context, plugin_id),
        generate_button("Shuffle", URL_SHUFFLE, context, plugin_id),
        generate_button("Send", URL_SEND, context, plugin_id),
    ]
    return [{"actions": actions}]
