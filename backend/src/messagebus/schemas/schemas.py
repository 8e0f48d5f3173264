from enum import Enum
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..utilities import DEFAULT_BACKLOG_STRATEGY, UNBOUNDED_LOG_SIZE, now


class BacklogStrategy(str, Enum):
    ''' What a new or resumed subscription receives from the retained log.'''

    IGNORE = "ignore"  # nothing
    LATEST = "latest"  # the newest message only
    FULL = "full"      # every message, oldest first


class Message(BaseModel):
    ''' A published message. Read-only once created.'''

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=0)
    payload: Any = None
    timestamp: datetime = Field(default_factory=now)


class SubscriptionOptions(BaseModel):
    '''
    Per-call subscription configuration, resolved once at the subscribe boundary.

    id               -- subscription id; None picks the topic's next free counter value
    backlog_strategy -- replay policy for messages already in the log
    start_active     -- whether the subscription receives sends right away
    '''

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: Optional[int] = None
    backlog_strategy: BacklogStrategy = BacklogStrategy(DEFAULT_BACKLOG_STRATEGY)
    start_active: bool = True


class CreateTopicRequest(BaseModel):
    name: str
    max_log_size: int = Field(default=UNBOUNDED_LOG_SIZE, ge=UNBOUNDED_LOG_SIZE)
