"""In-process publish/subscribe bus with bounded topic logs and backlog replay."""

from .schemas import BacklogStrategy, Message, SubscriptionOptions
from .models import Bus, Topic, Subscription
from .registry import get_bus

__all__ = [
    "BacklogStrategy",
    "Message",
    "SubscriptionOptions",
    "Bus",
    "Topic",
    "Subscription",
    "get_bus",
]
