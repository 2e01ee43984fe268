"""Chat messages and the bounded chat history."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass

LINE_WIDTH = 26
TEXT_BUFFER_LINES = 2
TEXT_BUFFER_SIZE = LINE_WIDTH * TEXT_BUFFER_LINES + 1
MAX_AUTHOR_LENGTH = LINE_WIDTH - 1
MAX_MESSAGE_LENGTH = TEXT_BUFFER_SIZE - 1
CHAT_HISTORY_SIZE = 6


@dataclass(frozen=True)
class ChatMessage:
    """A message and its author, cut to the lengths the screen can show."""

    author: str
    message: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "author", self.author[:MAX_AUTHOR_LENGTH])
        object.__setattr__(self, "message", self.message[:MAX_MESSAGE_LENGTH])


class ChatHistory:
    """The most recent chat messages, iterated newest first."""

    def __init__(self, size: int = CHAT_HISTORY_SIZE) -> None:
        if size < 1:
            raise ValueError("history size must be at least 1")
        self._entries: deque[ChatMessage] = deque(maxlen=size)

    @property
    def size(self) -> int:
        return self._entries.maxlen or 0

    def record(self, msg: ChatMessage) -> None:
        """Add ``msg``, dropping the oldest entry when full."""
        self._entries.append(msg)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ChatMessage]:
        return reversed(self._entries)