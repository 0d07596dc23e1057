"""Domain data models — pure Python dataclasses."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import List

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass
class Memo:
    """A parsed memo, ready to be stored as an annotation."""

    timestamp: datetime  # always UTC
    description: str
    tags: List[str] = field(default_factory=list)  # sorted, may repeat

    def epoch_millis(self) -> int:
        return (self.timestamp - EPOCH) // timedelta(milliseconds=1)
