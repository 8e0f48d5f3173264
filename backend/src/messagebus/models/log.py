from collections import deque
from itertools import islice
from typing import Any, Deque, List, Optional

from ..schemas import Message
from ..utilities import UNBOUNDED_LOG_SIZE, get_logger

logger = get_logger("log")


class MessageLog:
    '''
    Append-only message log of a single topic, oldest message first.

    Ids are handed out from a counter that never goes back, so the retained
    messages always carry strictly increasing ids. While the log is bounded,
    the oldest messages are evicted right after each append; the only gap in
    the id sequence is therefore at the front.
    '''

    def __init__(self, topic_name: str, max_log_size: int = UNBOUNDED_LOG_SIZE):
        if max_log_size < UNBOUNDED_LOG_SIZE:
            raise ValueError(f"max_log_size must be >= {UNBOUNDED_LOG_SIZE}, got {max_log_size}")
        self.topic_name = topic_name
        self.max_log_size = max_log_size
        self.next_message_id = 0
        self.messages: Deque[Message] = deque()

    def __len__(self) -> int:
        return len(self.messages)

    def __iter__(self):
        return iter(self.messages)

    @property
    def bounded(self) -> bool:
        return self.max_log_size != UNBOUNDED_LOG_SIZE

    @property
    def newest(self) -> Optional[Message]:
        return self.messages[-1] if self.messages else None

    @property
    def newest_id(self) -> Optional[int]:
        newest = self.newest
        return newest.id if newest is not None else None

    def append(self, payload: Any) -> Message:
        message = Message(id=self.next_message_id, payload=payload)
        self.next_message_id += 1
        self.messages.append(message)
        self.evict()
        return message

    def evict(self) -> int:
        """Drop the oldest messages until the log fits ``max_log_size``."""
        if not self.bounded:
            return 0
        evicted = 0
        while len(self.messages) > self.max_log_size:
            self.messages.popleft()
            evicted += 1
        if evicted:
            logger.debug("topic %r evicted %d message(s), oldest retained id %s",
                         self.topic_name, evicted,
                         self.messages[0].id if self.messages else None)
        return evicted

    def messages_after(self, cursor: Optional[int]) -> List[Message]:
        """Retained messages with an id strictly greater than ``cursor``.

        A ``None`` cursor, or one pointing at an already evicted message,
        yields the whole retained log.
        """
        if cursor is None or not self.messages:
            return list(self.messages)
        # retained ids are contiguous, so the offset can be computed directly
        start = max(cursor - self.messages[0].id + 1, 0)
        return list(islice(self.messages, start, None))

    def snapshot(self) -> List[Message]:
        return list(self.messages)
