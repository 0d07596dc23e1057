"""Domain layer — pure Python, no framework dependencies."""

from chatmemo.domain.models import Memo
from chatmemo.domain.errors import EmptyMessage, MemoError, NotUnderstood, ReservedTagConflict
from chatmemo.domain.memo_parser import MemoParser
from chatmemo.domain.tags import RESERVED_TAG_KEYS, base_tags, build_tags, split_trailing_tags
from chatmemo.domain.timeparse import parse_duration, parse_timestamp

__all__ = [
    "Memo",
    "MemoError",
    "EmptyMessage",
    "NotUnderstood",
    "ReservedTagConflict",
    "MemoParser",
    "RESERVED_TAG_KEYS",
    "base_tags",
    "build_tags",
    "split_trailing_tags",
    "parse_duration",
    "parse_timestamp",
]
