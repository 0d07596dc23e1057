"""MemoHandler — platform-agnostic glue between chat adapters and the store.

Builds the context tags for a message, runs the parser, stores the memo and
decides what (if anything) to reply.
"""

import sys
from typing import Optional

from chatmemo.config import log_enabled
from chatmemo.domain.errors import EmptyMessage, MemoError, NotUnderstood
from chatmemo.domain.memo_parser import MemoParser
from chatmemo.domain.tags import base_tags
from chatmemo.ports.inbound import IncomingMessage
from chatmemo.ports.outbound import MemoStorePort


def _log(msg: str, level: str = "info"):
    if log_enabled(level):
        print(msg, file=sys.stderr)


HELP_MESSAGE = (
    "Hi. I only support memo requests, in this format:\n"
    "`memo [<offset> | <timestamp>] <description> [<key:value> ...]`\n"
    "- offset: how long ago, e.g. `90s`, `5min3s`, `2h` (default 25s)\n"
    "- timestamp: RFC 3339 with offset, e.g. `2024-05-01T12:34:56Z`\n"
    "- trailing `key:value` words become tags (`author:` and `chan:` are set for you)"
)

SAVED_MESSAGE = "Memo saved"


class MemoHandler:
    """Turns incoming chat messages into stored memos. No discord import."""

    def __init__(self, parser: MemoParser, store: MemoStorePort, source: Optional[str] = None):
        self._parser = parser
        self._store = store
        self._source = source

    @property
    def source(self) -> Optional[str]:
        return self._source

    async def handle(self, msg: IncomingMessage) -> Optional[str]:
        """Process one message. Returns the reply text, or None to stay quiet."""
        if msg.is_bot:
            return None

        channel = msg.channel_name if msg.channel_name is not None else "(direct)"
        tags = base_tags(msg.author_name, msg.channel_name, self._source)

        try:
            memo = self._parser.parse(msg.content, tags, directed=msg.is_direct)
        except NotUnderstood:
            return HELP_MESSAGE
        except EmptyMessage as e:
            # attachment-only messages arrive with empty content
            if not msg.content.strip():
                return None
            _log(f"Received invalid memo request on channel {channel}, from user {msg.author_name}. message is: {msg.content}")
            # only answer in direct messages; shared channels stay quiet
            if not msg.is_direct:
                return None
            return f"bad memo request: {e}"
        except MemoError as e:
            _log(f"Received invalid memo request on channel {channel}, from user {msg.author_name}. message is: {msg.content}")
            return f"bad memo request: {e}"

        if memo is None:
            return None

        _log(f"Received a valid memo request on channel {channel}, from user {msg.author_name}. message is: {msg.content}")
        result = await self._store.save(memo)
        if not result.success:
            _log(f"memo from {msg.author_name} not saved: {result.error}", "warn")
            return f"memo failed: {result.error}"

        _log(f"memo saved (annotation id={result.annotation_id})", "debug")
        return SAVED_MESSAGE
