import threading
from typing import Callable, Dict, Iterator, List, Optional

from ..schemas import Message

SubscriptionCallback = Callable[[Message], None]


class Subscription:
    ''' A callback bound to one topic, with a cursor into that topic's log.'''

    def __init__(self, id: int, topic_name: str, callback: SubscriptionCallback,
                 last_seen_message_id: Optional[int] = None, active: bool = True,
                 lock=None):
        self.id = id
        self._topic_name = topic_name
        self.callback = callback
        self.last_seen_message_id = last_seen_message_id
        self.active = active
        # owning topic's lock; flips of `active` are serialized with fan-out
        self._lock = lock if lock is not None else threading.RLock()

    @property
    def topic_name(self) -> str:
        return self._topic_name

    def advance(self, message_id: Optional[int]):
        """Move the cursor forward to ``message_id``; never moves it back."""
        if message_id is None:
            return
        if self.last_seen_message_id is None or message_id > self.last_seen_message_id:
            self.last_seen_message_id = message_id

    def unsubscribe(self):
        """Stop delivery. The record stays registered and can be resumed by id."""
        with self._lock:
            self.active = False

    def __repr__(self):
        return (f"Subscription(id={self.id!r}, topic={self._topic_name!r}, "
                f"last_seen_message_id={self.last_seen_message_id!r}, active={self.active!r})")


class SubscriptionRegistry:
    '''
    Subscriptions of a single topic in registration order, indexed by id.

    Entries are never removed; the order is the fan-out order of every send.
    '''

    def __init__(self, topic_name: str):
        self.topic_name = topic_name
        self.next_subscription_id = 0
        self._by_id: Dict[int, Subscription] = {}
        self._ordered: List[Subscription] = []

    def __len__(self) -> int:
        return len(self._ordered)

    def __iter__(self) -> Iterator[Subscription]:
        return iter(self._ordered)

    def __getitem__(self, index: int) -> Subscription:
        return self._ordered[index]

    def effective_id(self, requested: Optional[int]) -> int:
        return requested if requested is not None else self.next_subscription_id

    def find(self, subscription_id: int) -> Optional[Subscription]:
        return self._by_id.get(subscription_id)

    def add(self, subscription: Subscription):
        if subscription.id in self._by_id:
            raise ValueError(f"subscription {subscription.id} already registered on {self.topic_name!r}")
        self._by_id[subscription.id] = subscription
        self._ordered.append(subscription)
        self.next_subscription_id += 1

    def snapshot(self) -> List[Subscription]:
        return list(self._ordered)

    def active(self) -> List[Subscription]:
        return [s for s in self._ordered if s.active]
