"""Tests for slash command parsing and GIF post formatting."""

from __future__ import annotations

import pytest

from gif_plugin.commands import (
    TRIGGER_GIF,
    TRIGGER_GIFS,
    generate_gif_caption,
    generate_shuffle_post_attachments,
    get_hint_message,
    get_slash_commands,
    parse_command_line,
)
from gif_plugin.config import DisplayMode
from gif_provider.errors import CommandSyntaxError


class TestParseCommandLine:
    """Keywords and caption extraction."""

    @pytest.mark.parametrize(
        "command, keywords, caption",
        [
            ("/gif happy kitty", "happy kitty", ""),
            ("/gif kitty", "kitty", ""),
            ('/gif "happy kitty" "custom caption"', "happy kitty", "custom caption"),
            ('/gif "happy kitty"', "happy kitty", ""),
            ('/gif happy kitty "custom caption"', "happy kitty", "custom caption"),
            ('   /gif    happy   kitty   ', "happy   kitty", ""),
            ('/gif kitty " padded caption "', "kitty", "padded caption"),
            ('gif "happy kitty" "custom caption"', "happy kitty", "custom caption"),
            ("/gif gifted giraffe", "gifted giraffe", ""),
        ],
    )
    def test_valid_commands(
        self, errors, command: str, keywords: str, caption: str
    ) -> None:
        assert parse_command_line(command, TRIGGER_GIF, errors) == (keywords, caption)

    def test_gifs_trigger(self, errors) -> None:
        assert parse_command_line('/gifs "cat" "meow"', TRIGGER_GIFS, errors) == (
            "cat",
            "meow",
        )

    @pytest.mark.parametrize(
        "command",
        [
            '/gif "happy kitty',
            '/gif happy "kitty',
            "/gif",
            "/gif    ",
            '/gif kitty "caption" "another"',
        ],
    )
    def test_invalid_commands(self, errors, command: str) -> None:
        with pytest.raises(CommandSyntaxError) as exc_info:
            parse_command_line(command, TRIGGER_GIF, errors)
        assert "try one of the following syntax" in str(exc_info.value)
        assert get_hint_message(TRIGGER_GIF) in str(exc_info.value)

    def test_long_invalid_command_fails_fast(self, errors) -> None:
        command = "/gif " + " ".join(["word"] * 40) + ' "unbalanced'
        with pytest.raises(CommandSyntaxError):
            parse_command_line(command, TRIGGER_GIF, errors)


class TestGenerateGifCaption:
    """Post message formatting."""

    def test_embedded_with_caption(self) -> None:
        text = generate_gif_caption(
            DisplayMode.EMBEDDED, "kitty", "Hello", "https://gif/1", "Powered by GIPHY"
        )
        assert text == (
            "Hello \n\n*Powered by GIPHY* \n\n![GIF for 'kitty'](https://gif/1)"
        )

    def test_embedded_without_caption(self) -> None:
        text = generate_gif_caption(
            DisplayMode.EMBEDDED, "kitty", "", "https://gif/1", "Powered by GIPHY"
        )
        assert text == (
            "**/gif [kitty](https://gif/1)** \n\n*Powered by GIPHY* "
            "\n\n![GIF for 'kitty'](https://gif/1)"
        )

    def test_full_url_with_caption(self) -> None:
        text = generate_gif_caption(
            DisplayMode.FULL_URL, "kitty", "Hello", "https://gif/1", "Powered by GIPHY"
        )
        assert text == "Hello \n\nhttps://gif/1 *Powered by GIPHY*"

    def test_full_url_without_caption(self) -> None:
        text = generate_gif_caption(
            DisplayMode.FULL_URL, "kitty", "", "https://gif/1", "Powered by Gfycat"
        )
        assert text == "**/gif [kitty](https://gif/1)** \n\nhttps://gif/1 *Powered by Gfycat*"


def test_shuffle_post_attachments() -> None:
    attachments = generate_shuffle_post_attachments(
        "kitty", "caption", "https://gif/1", "3", "root", "plugin-id"
    )
    assert len(attachments) == 1
    actions = attachments[0]["actions"]
    assert [a["name"] for a in actions] == ["Cancel", "Shuffle", "Send"]
    assert [a["integration"]["url"] for a in actions] == [
        "/plugins/plugin-id/cancel",
        "/plugins/plugin-id/shuffle",
        "/plugins/plugin-id/send",
    ]
    for action in actions:
        assert action["type"] == "button"
        assert action["integration"]["context"] == {
            "keywords": "kitty",
            "caption": "caption",
            "gifURL": "https://gif/1",
            "cursor": "3",
            "rootId": "root",
        }


def test_slash_commands() -> None:
    commands = {c.trigger: c for c in get_slash_commands()}
    assert set(commands) == {"gif", "gifs"}
    assert commands["gif"].description == "Post a GIF matching your search"
    assert commands["gifs"].display_name == "Giphy Shuffle"
    assert commands["gifs"].auto_complete_hint == get_hint_message("gifs")
