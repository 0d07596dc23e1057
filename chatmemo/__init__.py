"""chatmemo — turn chat messages into Grafana annotations."""

from chatmemo.config import __version__, AppConfig
from chatmemo.domain import (
    EmptyMessage,
    Memo,
    MemoError,
    MemoParser,
    NotUnderstood,
    ReservedTagConflict,
)

__all__ = [
    "__version__",
    "AppConfig",
    "Memo",
    "MemoParser",
    "MemoError",
    "EmptyMessage",
    "NotUnderstood",
    "ReservedTagConflict",
]
