"""Inbound port — platform-agnostic message representation."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class IncomingMessage:
    """Discord/webhook/CLI-agnostic message representation."""

    content: str
    author_name: str
    channel_name: Optional[str] = None  # None for direct messages
    is_bot: bool = False
    is_direct: bool = False
