from .log import MessageLog
from .backlog import select_backlog, replay_backlog
from .subscriptions import Subscription, SubscriptionCallback, SubscriptionRegistry
from .models import Topic, Bus
