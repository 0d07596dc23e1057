"""Launcher for the memo daemon (Discord bot and/or webhook server)."""

import argparse
import asyncio
import sys
from typing import List, Optional

from chatmemo.config import AppConfig, log_enabled, set_log_level
from chatmemo.adapters.storage.grafana_store import GrafanaStore
from chatmemo.domain.handler import MemoHandler
from chatmemo.domain.memo_parser import MemoParser


def _log(msg: str, level: str = "info"):
    if log_enabled(level):
        print(msg, file=sys.stderr)


def build_handler(config: AppConfig, source: str, store: Optional[GrafanaStore] = None) -> MemoHandler:
    """Wire parser and store into a handler tagging memos with source."""
    parser = MemoParser.from_config(config.parser)
    if store is None:
        store = GrafanaStore.from_config(config.grafana)
    return MemoHandler(parser, store, source=source)


def create_discord_bot(config: AppConfig, store: Optional[GrafanaStore] = None):
    """Create the Discord bot, or None when Discord is disabled."""
    if not config.discord.enabled:
        return None
    if not config.discord.bot_token:
        _log("Discord enabled but DISCORD_BOT_TOKEN not set — skipping", "warn")
        return None

    from chatmemo.adapters.discord.adapter import DiscordMemoBot

    return DiscordMemoBot(build_handler(config, "discord", store))


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="memod", description="Store chat memos as Grafana annotations.")
    parser.add_argument("env_file", nargs="?", default=None, help="path to a .env config file")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    config = AppConfig.from_env(args.env_file)
    set_log_level(config.log_level)

    store = GrafanaStore.from_config(config.grafana)
    if not store.is_configured:
        _log("Grafana store not configured. Set GRAFANA_API_KEY and GRAFANA_API_URL.", "error")
        return 1
    try:
        asyncio.run(store.check())
    except RuntimeError as e:
        _log(f"Grafana store is unhealthy: {e}", "error")
        return 1

    if config.webhook.enabled:
        import uvicorn

        from chatmemo.adapters.web.server import app

        _log(f"Memo starting web server on port {config.port}")
        uvicorn.run(app, host="0.0.0.0", port=config.port)
        return 0

    bot = create_discord_bot(config, store)
    if bot is None:
        _log("No services enabled. Set DISCORD_ENABLED or WEBHOOK_ENABLED.", "error")
        return 1

    _log("Memo starting discord bot")
    bot.run(config.discord.bot_token)
    return 0


if __name__ == "__main__":
    sys.exit(main())
