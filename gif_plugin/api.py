"""FastAPI app exposing the plugin to the chat host.

Routes:
- POST /command: slash command webhook (``/gif`` and ``/gifs``)
- POST /cancel, /shuffle, /send: button callbacks of the preview post
- GET /healthz
"""

from __future__ import annotations

import logging
import os
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.concurrency import run_in_threadpool

from .actions import USER_ID_HEADER
from .host import CommandArgs
from .plugin import GifPlugin

logger = logging.getLogger(__name__)


def _command_args(fields: dict[str, Any]) -> CommandArgs:
    """Build the command arguments from a slash command webhook payload.

    The host sends the trigger in ``command`` and the rest of the line in
    ``text``.
    """
    command = str(fields.get("command") or "").strip()
    text = str(fields.get("text") or "").strip()
    if command and not command.startswith("/"):
        command = "/" + command
    return CommandArgs(
        command=f"{command} {text}".strip(),
        user_id=str(fields.get("user_id") or ""),
        channel_id=str(fields.get("channel_id") or ""),
        team_id=str(fields.get("team_id") or ""),
        root_id=str(fields.get("root_id") or ""),
    )


def create_app(plugin: GifPlugin | None = None) -> FastAPI:
    """Create the HTTP app serving `plugin` (built from settings by default)."""
    app = FastAPI(title="GIF Plugin")
    app.state.plugin = plugin or GifPlugin.from_settings()

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok", "provider": app.state.plugin.provider.name}

    @app.post("/command")
    async def command(request: Request) -> dict[str, Any]:
        content_type = request.headers.get("Content-Type", "")
        if content_type.startswith("application/json"):
            try:
                fields = await request.json()
            except ValueError as e:
                raise HTTPException(status_code=400, detail=f"invalid payload: {e}")
            if not isinstance(fields, dict):
                raise HTTPException(status_code=400, detail="invalid payload")
        else:
            fields = dict(await request.form())

        args = _command_args(fields)
        if not args.command:
            raise HTTPException(status_code=400, detail="missing command")
        logger.info(
            "command.received",
            extra={"user_id": args.user_id, "channel_id": args.channel_id},
        )
        response = await run_in_threadpool(app.state.plugin.execute_command, args)
        return response.model_dump(exclude_defaults=True)

    @app.post("/{action}")
    async def action(action: str, request: Request) -> dict[str, Any]:
        body: bytes = await request.body()
        status = await run_in_threadpool(
            app.state.plugin.actions.dispatch,
            "/" + action,
            request.headers.get(USER_ID_HEADER),
            body,
        )
        logger.info("action.handled", extra={"action": action, "status": int(status)})
        if status != HTTPStatus.OK:
            raise HTTPException(status_code=int(status), detail=status.phrase)
        return {"update": {}}

    return app


# Lambda handler (via Mangum) when running inside AWS Lambda
if os.getenv("AWS_LAMBDA_FUNCTION_NAME"):
    # Lazy import to avoid hard dependency outside Lambda runtime
    from mangum import Mangum  # type: ignore

    handler = Mangum(create_app())
