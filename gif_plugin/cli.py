"""Click CLI for the GIF plugin."""

from __future__ import annotations

import json
import logging

import click
from dotenv import load_dotenv

from gif_provider.errors import PluginError

from .config import PluginSettings

load_dotenv()


@click.group()
@click.option("--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """GIF plugin CLI."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


@cli.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True, help="Bind address")
@click.option("--port", type=int, default=8080, show_default=True, help="Bind port")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development")
def serve_cmd(host: str, port: int, reload: bool) -> None:
    """Serve the slash command and action endpoints."""
    import uvicorn

    uvicorn.run(
        "gif_plugin.api:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


@cli.command("search")
@click.argument("keywords", nargs=-1, required=True)
@click.option("--cursor", default="", help="Pagination cursor from a previous search")
@click.option(
    "--json",
    "output_json",
    is_flag=True,
    help="Output raw JSON instead of formatted text",
)
def search_cmd(keywords: tuple[str, ...], cursor: str, output_json: bool) -> None:
    """Search one GIF with the configured provider."""
    from .plugin import GifPlugin

    query = " ".join(keywords)
    try:
        plugin = GifPlugin.from_settings(PluginSettings())
        url, next_cursor = plugin.provider.get_gif_url(query, cursor)
    except PluginError as exc:
        raise click.ClickException(exc.render(technical=True)) from exc

    if output_json:
        click.echo(json.dumps({"url": url, "cursor": next_cursor}, indent=2))
    elif url:
        click.echo(url)
        click.echo(f"Next cursor: {next_cursor}")
    else:
        click.echo(f"No GIF found for '{query}'")


@cli.command("register-commands")
def register_commands_cmd() -> None:
    """Register /gif and /gifs on the chat server."""
    from .plugin import GifPlugin

    try:
        GifPlugin.from_settings(PluginSettings()).on_activate()
    except PluginError as exc:
        raise click.ClickException(exc.render(technical=True)) from exc
    click.echo("Commands registered: /gif, /gifs")


if __name__ == "__main__":
    cli()
