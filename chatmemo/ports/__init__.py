"""Port interfaces (Hexagonal Architecture)."""

from chatmemo.ports.inbound import IncomingMessage
from chatmemo.ports.outbound import ClockPort, MemoStorePort, SaveResult

__all__ = [
    "IncomingMessage",
    "ClockPort",
    "MemoStorePort",
    "SaveResult",
]
