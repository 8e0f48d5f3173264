from typing import Callable, Sequence

from ..schemas import BacklogStrategy, Message


def select_backlog(strategy: BacklogStrategy, candidates: Sequence[Message]) -> Sequence[Message]:
    """Messages a subscription should be replayed from ``candidates`` (oldest first)."""
    strategy = BacklogStrategy(strategy)
    if strategy is BacklogStrategy.FULL:
        return list(candidates)
    if strategy is BacklogStrategy.LATEST:
        return [candidates[-1]] if candidates else []
    return []


def replay_backlog(strategy: BacklogStrategy, candidates: Sequence[Message],
                   callback: Callable[[Message], None]) -> int:
    """Invoke ``callback`` for the backlog picked by ``strategy``; return the call count.

    Exceptions raised by the callback propagate and stop the replay.
    """
    backlog = select_backlog(strategy, candidates)
    for message in backlog:
        callback(message)
    return len(backlog)
