"""Error sink — ordered, de-duplicated messages for one field's checks."""

from collections.abc import Iterator


class ErrorSink:
    """Collects failure messages while one field's constraints run.

    ``push`` keeps insertion order and ignores a message already present,
    so a field never reports the same text twice. The validator clears the
    sink before each field and copies ``drain()`` into the field's error set.
    """

    __slots__ = ("_messages",)

    def __init__(self) -> None:
        self._messages: dict[str, None] = {}

    def clear(self) -> None:
        """Drop every collected message."""
        self._messages.clear()

    def push(self, message: str) -> None:
        """Record *message* unless the same text is already collected."""
        self._messages.setdefault(message, None)

    def drain(self) -> list[str]:
        """Return the collected messages in order. Does not clear."""
        return list(self._messages)

    def __iter__(self) -> Iterator[str]:
        return iter(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __bool__(self) -> bool:
        return bool(self._messages)

    def __repr__(self) -> str:
        return f"ErrorSink({list(self._messages)!r})"
