"""Discord adapter — bridges discord.Client to MemoHandler.

DiscordMemoBot converts Discord messages to IncomingMessage, lets the
handler parse and store them, and posts the handler's reply back.
"""

import sys

import discord

from chatmemo.config import log_enabled
from chatmemo.domain.handler import MemoHandler
from chatmemo.ports.inbound import IncomingMessage

# Discord rejects messages longer than this
MAX_MESSAGE_LENGTH = 2000


def _log(msg: str, level: str = "info"):
    if log_enabled(level):
        print(msg, file=sys.stderr)


class DiscordMemoBot(discord.Client):
    """Thin Discord client that delegates every message to MemoHandler."""

    def __init__(self, handler: MemoHandler, **discord_kwargs):
        intents = discord.Intents.default()
        intents.message_content = True
        super().__init__(intents=intents, **discord_kwargs)
        self._handler = handler

    def _to_incoming(self, message: discord.Message) -> IncomingMessage:
        """Convert a Discord message to platform-agnostic IncomingMessage."""
        is_direct = isinstance(message.channel, discord.DMChannel)
        channel_name = None if is_direct else getattr(message.channel, "name", None)
        return IncomingMessage(
            content=message.content,
            author_name=message.author.name,
            channel_name=channel_name,
            is_bot=message.author.bot,
            is_direct=is_direct,
        )

    async def on_ready(self):
        _log(f"[discord] logged in as {self.user}")

    async def on_message(self, message: discord.Message):
        # Ignore own messages
        if not self.user or message.author == self.user:
            return

        incoming = self._to_incoming(message)
        _log(f"[discord] new message: {incoming.content!r}", "debug")

        reply = await self._handler.handle(incoming)
        if reply:
            await message.channel.send(reply[:MAX_MESSAGE_LENGTH])
