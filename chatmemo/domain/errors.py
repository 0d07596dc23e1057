"""Parse errors raised by the memo command parser.

A message that is simply not addressed to us is not an error: the parser
returns None for it.
"""


class MemoError(Exception):
    """Base class for memo requests that cannot become a record."""

    message = "bad memo request"

    def __init__(self, message: str = ""):
        super().__init__(message or self.message)


class EmptyMessage(MemoError):
    """Nothing left to use as description."""

    message = "empty message"


class NotUnderstood(MemoError):
    """Addressed to us, but not in the memo command format."""

    message = "message could not be understood"


class ReservedTagConflict(MemoError):
    """A trailing tag tried to set a key the system assigns itself."""

    message = "cannot override author or chan tag"

    def __init__(self, tag: str = ""):
        super().__init__()
        self.tag = tag
