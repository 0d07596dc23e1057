"""Memo command parser.

Turns a chat message such as ``memo 5min3s deployed v2 env:prod`` into a
Memo: the trigger is matched and stripped, the first word may set the
timestamp, trailing ``key:value`` words become tags, and the rest is the
description.

Pure Python, no framework dependencies.
"""

from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence, Tuple

from chatmemo.config import log_enabled
from chatmemo.domain.errors import EmptyMessage, NotUnderstood
from chatmemo.domain.models import Memo
from chatmemo.domain.tags import RESERVED_TAG_KEYS, build_tags, split_trailing_tags
from chatmemo.domain.timeparse import parse_duration, parse_timestamp
from chatmemo.infrastructure.clock import SystemClock

if TYPE_CHECKING:
    from chatmemo.config import ParserConfig
    from chatmemo.ports.outbound import ClockPort


def _log(msg: str, level: str = "info"):
    if log_enabled(level):
        print(msg, file=sys.stderr)


DEFAULT_TRIGGER = "memo "
DEFAULT_ALTERNATE_PREFIXES = ("memo:", "mrbot:", "memobot:")
# a memo is usually typed shortly after the fact
DEFAULT_OFFSET = timedelta(seconds=25)


def _as_utc(ts: datetime) -> datetime:
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


class MemoParser:
    """Parses memo commands. Holds configuration only, no per-call state."""

    def __init__(
        self,
        trigger: str = DEFAULT_TRIGGER,
        alternate_prefixes: Tuple[str, ...] = DEFAULT_ALTERNATE_PREFIXES,
        reserved_tag_keys: Tuple[str, ...] = RESERVED_TAG_KEYS,
        default_offset: timedelta = DEFAULT_OFFSET,
        clock: Optional[ClockPort] = None,
    ):
        if not trigger.strip():
            raise ValueError("trigger must contain a non-whitespace character")
        self._trigger = trigger
        self._alternate_prefixes = tuple(alternate_prefixes)
        self._reserved_tag_keys = tuple(reserved_tag_keys)
        self._default_offset = default_offset
        self._clock = clock or SystemClock()

    @classmethod
    def from_config(cls, config: ParserConfig, clock: Optional[ClockPort] = None) -> "MemoParser":
        return cls(
            trigger=config.trigger,
            alternate_prefixes=config.alternate_prefixes,
            reserved_tag_keys=config.reserved_tag_keys,
            default_offset=timedelta(seconds=config.default_offset_seconds),
            clock=clock,
        )

    @property
    def trigger(self) -> str:
        return self._trigger

    def parse(
        self,
        message: str,
        base_tags: Iterable[str] = (),
        directed: bool = False,
    ) -> Optional[Memo]:
        """Parse a raw chat message.

        Returns None when the message is not meant for us. With
        directed=True (e.g. a direct message) such text raises
        NotUnderstood instead.

        Raises:
            EmptyMessage: nothing to use as description.
            NotUnderstood: addressed to us but not a memo command.
            ReservedTagConflict: a trailing tag sets a reserved key.
        """
        text = message.strip()
        if not text:
            raise EmptyMessage()

        body = self.match_trigger(text, directed=directed)
        if body is None:
            return None
        return self.parse_body(body, base_tags)

    def match_trigger(self, text: str, directed: bool = False) -> Optional[str]:
        """Return the text after the trigger, or None if not for us."""
        if text.startswith(self._trigger):
            return text[len(self._trigger):]
        if text == self._trigger.strip():
            return ""

        if directed or text.startswith(self._alternate_prefixes):
            _log(f"message {text!r} seems directed at us but is not understood, sending help", "debug")
            raise NotUnderstood()

        # probably not meant for us; stay quiet so shared channels aren't spammed
        _log(f"message {text!r} not for us, ignoring", "trace")
        return None

    def parse_body(self, body: str, base_tags: Iterable[str] = ()) -> Memo:
        """Parse the command text that follows the trigger."""
        words = body.split()
        if not words:
            raise EmptyMessage()

        timestamp, words = self.resolve_timestamp(words)
        description, extra_tags = split_trailing_tags(words)
        tags = build_tags(base_tags, extra_tags, self._reserved_tag_keys)
        if not description:
            raise EmptyMessage()

        return Memo(timestamp=timestamp, description=" ".join(description), tags=tags)

    def resolve_timestamp(self, words: Sequence[str]) -> Tuple[datetime, List[str]]:
        """Resolve the memo time from the first word.

        A duration means "that long ago", an RFC 3339 timestamp is used
        as-is. Either one is consumed; any other word is left for the
        description and the default offset applies.
        """
        now = _as_utc(self._clock.now())
        if not words:
            return now - self._default_offset, []

        first = words[0]
        duration = parse_duration(first)
        if duration is not None:
            try:
                return now - duration, list(words[1:])
            except OverflowError:
                _log(f"duration {first!r} reaches before year 1, keeping it as text", "debug")

        ts = parse_timestamp(first)
        if ts is not None:
            return ts, list(words[1:])

        return now - self._default_offset, list(words)
