"""Tests for the slash command entry points of the plugin."""

from __future__ import annotations

from unittest.mock import Mock

import pytest

from gif_plugin.config import DisplayMode, PluginSettings
from gif_plugin.host import CommandArgs, CommandResponse, PluginAPI
from gif_plugin.plugin import GifPlugin
from gif_provider.base import GifProvider
from gif_provider.errors import HostOperationError, TransportError
from gif_provider.giphy import GiphyProvider

GIPHY_BODY = '{"data": [{"images": {"fixed_height_small": {"url": "https://gif/1"}}}]}'


@pytest.fixture
def settings() -> PluginSettings:
    return PluginSettings(
        _env_file=None,
        giphy_api_key="apikey",
        bot_user_id="bot",
        plugin_id="plugin-id",
        display_mode=DisplayMode.FULL_URL,
    )


@pytest.fixture
def api() -> Mock:
    return Mock(spec=PluginAPI)


@pytest.fixture
def provider() -> Mock:
    provider = Mock(spec=GifProvider)
    provider.get_gif_url.return_value = ("https://gif/1", "1")
    provider.get_attribution_message.return_value = "Powered by GIPHY"
    return provider


@pytest.fixture
def plugin(settings, api, provider, errors) -> GifPlugin:
    return GifPlugin(settings, api, provider, errors)


def _args(command: str) -> CommandArgs:
    return CommandArgs(
        command=command, user_id="jane", channel_id="town-square", root_id="root"
    )


class TestGifCommand:
    def test_posts_gif_in_channel(self, plugin, provider) -> None:
        response = plugin.execute_command(_args('/gif happy kitty "So happy"'))
        provider.get_gif_url.assert_called_once_with("happy kitty", "")
        assert response.response_type == "in_channel"
        assert response.text == "So happy \n\nhttps://gif/1 *Powered by GIPHY*"

    def test_no_result(self, plugin, provider, api) -> None:
        provider.get_gif_url.return_value = ("", "")
        response = plugin.execute_command(_args("/gif nothing"))
        assert response.response_type == "ephemeral"
        assert "No GIF found for 'nothing'" in response.text
        api.create_post.assert_not_called()

    def test_syntax_error(self, plugin, provider) -> None:
        response = plugin.execute_command(_args('/gif "unbalanced'))
        assert response.response_type == "ephemeral"
        assert "Could not read the command" in response.text
        provider.get_gif_url.assert_not_called()

    def test_provider_error(self, plugin, provider, errors) -> None:
        provider.get_gif_url.side_effect = errors.from_error(
            "Error calling the Giphy API", ConnectionError("down"), TransportError
        )
        response = plugin.execute_command(_args("/gif kitty"))
        assert response.response_type == "ephemeral"
        assert response.text == "Error calling the Giphy API"

    def test_unknown_trigger(self, plugin) -> None:
        response = plugin.execute_command(_args("/jif kitty"))
        assert response.response_type == "ephemeral"
        assert "Unknown command" in response.text


class TestGifsCommand:
    def test_sends_ephemeral_preview(self, plugin, api) -> None:
        response = plugin.execute_command(_args('/gifs "happy kitty"'))
        assert response == CommandResponse()

        user_id, post = api.send_ephemeral_post.call_args.args
        assert user_id == "jane"
        assert post.user_id == "bot"
        assert post.channel_id == "town-square"
        assert post.root_id == "root"
        # Previews always embed the image
        assert "![GIF for 'happy kitty'](https://gif/1)" in post.message

        actions = post.props["attachments"][0]["actions"]
        assert [a["name"] for a in actions] == ["Cancel", "Shuffle", "Send"]
        assert actions[0]["integration"]["url"] == "/plugins/plugin-id/cancel"
        assert actions[1]["integration"]["context"] == {
            "keywords": "happy kitty",
            "caption": "",
            "gifURL": "https://gif/1",
            "cursor": "1",
            "rootId": "root",
        }

    def test_host_failure(self, plugin, api) -> None:
        api.send_ephemeral_post.side_effect = HostOperationError("no ephemeral")
        response = plugin.execute_command(_args("/gifs kitty"))
        assert response.response_type == "ephemeral"
        assert response.text == "no ephemeral"


class TestOnActivate:
    def test_registers_both_commands(self, plugin, api) -> None:
        plugin.on_activate()
        triggers = [c.args[0].trigger for c in api.register_command.call_args_list]
        assert triggers == ["gif", "gifs"]

    def test_registration_failure(self, plugin, api) -> None:
        api.register_command.side_effect = HostOperationError("denied")
        with pytest.raises(HostOperationError) as exc_info:
            plugin.on_activate()
        assert "Unable to define the following command: gif" in str(exc_info.value)


def test_from_settings_builds_configured_provider(
    settings, api, http_client_factory
) -> None:
    client = http_client_factory(200, GIPHY_BODY)
    plugin = GifPlugin.from_settings(settings, api=api, http_client=client)
    assert isinstance(plugin.provider, GiphyProvider)
    assert plugin.provider.http_client is client

    response = plugin.execute_command(_args("/gif kitty"))
    assert response.text.startswith("**/gif [kitty](https://gif/1)**")
