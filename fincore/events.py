import logging
from datetime import datetime
from typing import Callable, Dict, List, NamedTuple

__all__ = [
    'Event', 'EventBus',
    'GOAL_CREATED', 'CONTRIBUTION_ADDED', 'GOAL_COMPLETED',
    'contribution_summary_handler', 'goal_completed_handler', 'register_default_handlers',
]

logger = logging.getLogger(__name__)


class Event(NamedTuple):
    name: str
    ts: str
    payload: dict


Handler = Callable[[Event, dict], dict]


class EventBus:
    """Synchronous in-process pub/sub; handlers run in subscription order."""

    def __init__(self):
        self._subscribers: Dict[str, List[Handler]] = {}

    def subscribe(self, name: str, handler: Handler) -> None:
        self._subscribers.setdefault(name, []).append(handler)

    def unsubscribe(self, name: str, handler: Handler) -> None:
        handlers = self._subscribers.get(name, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, name: str, payload: dict) -> List[dict]:
        handlers = self._subscribers.get(name)
        if not handlers:
            return []

        event = Event(name=name, ts=datetime.now().isoformat(), payload=payload)
        logger.debug("Publishing %s to %d handler(s)", name, len(handlers))
        return [handler(event, payload) for handler in handlers]


GOAL_CREATED = "GOAL_CREATED"
CONTRIBUTION_ADDED = "CONTRIBUTION_ADDED"
GOAL_COMPLETED = "GOAL_COMPLETED"


def contribution_summary_handler(event: Event, payload: dict) -> dict:
    amount = payload.get("amount", 0)
    credited = payload.get("credited", amount)
    return {
        "message": f"Successfully added ${amount:.2f} to your savings goal!",
        "credited": credited,
        "capped": round(amount - credited, 2),
    }


def goal_completed_handler(event: Event, payload: dict) -> dict:
    title = payload.get("title", "")
    target = payload.get("target_amount", 0)
    return {"message": f"Goal '{title}' reached its ${target:.2f} target!"}


def register_default_handlers(bus: EventBus) -> EventBus:
    bus.subscribe(CONTRIBUTION_ADDED, contribution_summary_handler)
    bus.subscribe(GOAL_COMPLETED, goal_completed_handler)
    return bus
