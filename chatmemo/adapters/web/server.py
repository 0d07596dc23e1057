"""FastAPI application: webhook routes, health endpoint and Discord startup."""

import asyncio
import contextlib
import sys
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from chatmemo.config import AppConfig, log_enabled
from chatmemo.adapters.web import webhook_routes
from chatmemo.adapters.web.webhook_routes import webhook_router
from chatmemo.launcher import create_discord_bot


def _log(msg: str, level: str = "info"):
    if log_enabled(level):
        print(msg, file=sys.stderr)


app = FastAPI(title="chatmemo")
app.include_router(webhook_router)

_config = AppConfig.from_env()
discord_bot = create_discord_bot(_config, webhook_routes.store)
# held so the running bot task is not garbage-collected
_discord_task: Optional[asyncio.Task] = None


class HealthResponse(BaseModel):
    status: str
    grafana_version: Optional[str] = None
    grafana_database: Optional[str] = None


@app.get("/health", response_model=HealthResponse)
async def health():
    """Report whether the annotation store is reachable."""
    store = webhook_routes.store
    if not store.is_configured:
        raise HTTPException(status_code=503, detail="Grafana store not configured")
    try:
        result = await store.check()
    except RuntimeError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return HealthResponse(status="ok", grafana_version=result.version, grafana_database=result.database)


@app.on_event("startup")
async def startup_event():
    """Start the Discord bot alongside the web server if configured."""
    global _discord_task
    if not discord_bot:
        _log("Discord bot not configured (set DISCORD_ENABLED and DISCORD_BOT_TOKEN)")
        return

    _log("Starting Discord bot...")

    async def _start_discord():
        try:
            await discord_bot.start(_config.discord.bot_token)
        except Exception as e:
            _log(f"Discord bot failed to start: {e}", "error")

    _discord_task = asyncio.create_task(_start_discord())


@app.on_event("shutdown")
async def shutdown_event():
    global _discord_task
    if discord_bot and not discord_bot.is_closed():
        await discord_bot.close()
    if _discord_task is not None:
        if not _discord_task.done():
            _discord_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await _discord_task
        _discord_task = None
