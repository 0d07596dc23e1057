"""Tag handling — trailing tag extraction, base tags and merging.

Pure Python, no framework dependencies.
"""

from typing import Iterable, List, Optional, Sequence, Tuple

from chatmemo.domain.errors import ReservedTagConflict

TAG_SEPARATOR = ":"

# Keys the system assigns from message context; users may not set them
RESERVED_TAG_KEYS: Tuple[str, ...] = ("author:", "chan:")

MEMO_TAG = "memo"


def split_trailing_tags(words: Sequence[str]) -> Tuple[List[str], List[str]]:
    """Split words into (description words, trailing tags).

    Scans backwards and stops at the first word without a separator.
    Tags keep their left-to-right order.
    """
    pos = len(words)
    while pos > 0 and TAG_SEPARATOR in words[pos - 1]:
        pos -= 1
    return list(words[:pos]), list(words[pos:])


def find_reserved_tag(
    tags: Iterable[str],
    reserved: Tuple[str, ...] = RESERVED_TAG_KEYS,
) -> Optional[str]:
    """Return the first tag using a reserved key, or None."""
    for tag in tags:
        if tag.startswith(reserved):
            return tag
    return None


def build_tags(
    base_tags: Iterable[str],
    extra_tags: Iterable[str],
    reserved: Tuple[str, ...] = RESERVED_TAG_KEYS,
) -> List[str]:
    """Merge base and user-supplied tags into one sorted list.

    Duplicates are kept. Raises ReservedTagConflict when an extra tag
    uses a reserved key.
    """
    extra_tags = list(extra_tags)
    conflict = find_reserved_tag(extra_tags, reserved)
    if conflict is not None:
        raise ReservedTagConflict(conflict)
    return sorted([*base_tags, *extra_tags])


def base_tags(
    author: str,
    channel: Optional[str] = None,
    source: Optional[str] = None,
    marker: Optional[str] = MEMO_TAG,
) -> List[str]:
    """Contextual tags for a message. No channel tag without a channel."""
    tags = []
    if marker:
        tags.append(marker)
    tags.append(f"author:{author}")
    if channel is not None:
        tags.append(f"chan:{channel}")
    if source is not None:
        tags.append(f"source:{source}")
    return tags
