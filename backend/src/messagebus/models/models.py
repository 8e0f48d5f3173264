import threading
from typing import Any, Dict, List, Optional

from ..schemas import BacklogStrategy, Message, SubscriptionOptions
from ..utilities import UNBOUNDED_LOG_SIZE, get_logger
from .backlog import replay_backlog
from .log import MessageLog
from .subscriptions import Subscription, SubscriptionCallback, SubscriptionRegistry

logger = get_logger("models")


# ------------ In-memory structures ------------
class Topic:
    '''
    A named message log plus the subscriptions listening to it.

    Every operation runs under the topic's re-entrant lock, callbacks included,
    so a callback may itself send or subscribe on the same topic. Operations
    on different topics never contend.
    '''

    def __init__(self, name: str, max_log_size: int = UNBOUNDED_LOG_SIZE):
        self.name = name
        self.log = MessageLog(name, max_log_size)
        self.subscriptions = SubscriptionRegistry(name)
        self.lock = threading.RLock()
        # stats
        self.messages_sent = 0

    @property
    def max_log_size(self) -> int:
        return self.log.max_log_size

    @property
    def next_message_id(self) -> int:
        return self.log.next_message_id

    @property
    def next_subscription_id(self) -> int:
        return self.subscriptions.next_subscription_id

    def subscribe(self, callback: SubscriptionCallback,
                  options: Optional[SubscriptionOptions] = None) -> Subscription:
        """Subscribe ``callback``, or update the subscription already holding ``options.id``.

        A new subscription is replayed the retained log according to
        ``options.backlog_strategy`` before this returns. An existing one keeps
        its identity; when it is (re)activated and has fallen behind, it is
        replayed only the messages newer than its cursor.
        """
        if not callable(callback):
            raise TypeError(f"callback must be callable, got {type(callback).__name__}")
        options = options if options is not None else SubscriptionOptions()

        with self.lock:
            subscription_id = self.subscriptions.effective_id(options.id)
            existing = self.subscriptions.find(subscription_id)
            if existing is None:
                return self._create_subscription(subscription_id, callback, options)
            return self._resume_subscription(existing, callback, options)

    def _create_subscription(self, subscription_id: int, callback: SubscriptionCallback,
                             options: SubscriptionOptions) -> Subscription:
        backlog = self.log.snapshot()
        newest_id = backlog[-1].id if backlog else None
        replayed = self._replay(subscription_id, options.backlog_strategy, backlog, callback)

        subscription = Subscription(subscription_id, self.name, callback,
                                    last_seen_message_id=newest_id,
                                    active=options.start_active,
                                    lock=self.lock)
        self.subscriptions.add(subscription)
        logger.debug("topic %r: subscription %s created (%s backlog, %d replayed, active=%s)",
                     self.name, subscription_id, options.backlog_strategy.value,
                     replayed, options.start_active)
        return subscription

    def _resume_subscription(self, subscription: Subscription, callback: SubscriptionCallback,
                             options: SubscriptionOptions) -> Subscription:
        newest_id = self.log.newest_id
        replayed = 0
        if (options.start_active
                and newest_id is not None
                and subscription.last_seen_message_id != newest_id):
            backlog = self.log.messages_after(subscription.last_seen_message_id)
            replayed = self._replay(subscription.id, options.backlog_strategy, backlog, callback)

        subscription.callback = callback
        subscription.active = options.start_active
        subscription.advance(newest_id)
        logger.debug("topic %r: subscription %s resumed (%s backlog, %d replayed, active=%s)",
                     self.name, subscription.id, options.backlog_strategy.value,
                     replayed, options.start_active)
        return subscription

    def _replay(self, subscription_id: int, strategy: BacklogStrategy,
                candidates: List[Message], callback: SubscriptionCallback) -> int:
        try:
            return replay_backlog(strategy, candidates, callback)
        except Exception:
            logger.warning("topic %r: subscription %s callback failed during backlog replay",
                           self.name, subscription_id)
            raise

    def send(self, payload: Any) -> Message:
        """Append ``payload`` to the log and deliver it to every active subscription.

        Subscriptions are visited in registration order. A callback exception
        propagates to the caller; subscriptions after the failing one are not
        visited for this message.
        """
        with self.lock:
            message = self.log.append(payload)
            self.messages_sent += 1
            # snapshot: subscriptions added by a callback start with the next send
            for subscription in self.subscriptions.snapshot():
                if not subscription.active:
                    continue
                try:
                    subscription.callback(message)
                except Exception:
                    logger.warning("topic %r: subscription %s callback failed on message %s",
                                   self.name, subscription.id, message.id)
                    raise
                subscription.advance(message.id)
        return message

    def unsubscribe(self, subscription: Subscription):
        if subscription.topic_name != self.name:
            raise ValueError(f"subscription {subscription.id} belongs to topic "
                             f"{subscription.topic_name!r}, not {self.name!r}")
        subscription.unsubscribe()

    def __repr__(self):
        return (f"Topic(name={self.name!r}, max_log_size={self.max_log_size}, "
                f"messages={len(self.log)}, subscriptions={len(self.subscriptions)})")


class Bus:
    ''' Directory of topics by name. Topics are created on first request and never removed.'''

    def __init__(self):
        self._topics: Dict[str, Topic] = {}
        self._lock = threading.Lock()

    def get_topic(self, name: str, max_log_size: int = UNBOUNDED_LOG_SIZE) -> Topic:
        """Return topic ``name``, creating it with ``max_log_size`` if it does not exist yet.

        An existing topic keeps the ``max_log_size`` it was created with.
        """
        with self._lock:
            topic = self._topics.get(name)
            if topic is None:
                topic = Topic(name, max_log_size)
                self._topics[name] = topic
                logger.debug("topic %r created (max_log_size=%d)", name, max_log_size)
            return topic

    def find_topic(self, name: str) -> Topic:
        with self._lock:
            topic = self._topics.get(name)
            if topic is None:
                raise KeyError(name)
            return topic

    @property
    def topics(self) -> List[Topic]:
        with self._lock:
            return list(self._topics.values())

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._topics

    def __len__(self) -> int:
        with self._lock:
            return len(self._topics)
