"""Outbound ports — interfaces for external system adapters."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol, runtime_checkable

from chatmemo.domain.models import Memo


@dataclass
class SaveResult:
    """Result of storing a memo."""

    success: bool
    annotation_id: Optional[int] = None
    error: Optional[str] = None


@runtime_checkable
class ClockPort(Protocol):
    """Time source, swapped for a mock in tests."""

    def now(self) -> datetime: ...


@runtime_checkable
class MemoStorePort(Protocol):
    """Interface for the annotation store."""

    @property
    def is_configured(self) -> bool: ...

    async def save(self, memo: Memo) -> SaveResult: ...
