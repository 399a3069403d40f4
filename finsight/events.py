import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, List, NamedTuple, Union

from finsight.store import Store, save_store

__all__ = [
    'EventBus', 'Event', 'TRANSACTIONS_CHANGED', 'BUDGETS_CHANGED',
    'ALERT_DISMISSED', 'STORE_EVENTS', 'persist_handler',
]

logger = logging.getLogger(__name__)


class Event(NamedTuple):
    name: str
    ts: str
    payload: dict


Handler = Callable[[Event, dict], dict]


class EventBus:
    def __init__(self):
        self._subscribers: Dict[str, List[Handler]] = {}

    def subscribe(self, name: str, handler: Handler) -> None:
        self._subscribers.setdefault(name, []).append(handler)

    def publish(self, name: str, payload: dict) -> List[dict]:
        handlers = self._subscribers.get(name, [])
        if not handlers:
            return []

        event = Event(name=name, ts=datetime.now().isoformat(), payload=payload)
        logger.debug("Publishing %s to %d handler(s)", name, len(handlers))
        return [handler(event, payload) for handler in handlers]

    def unsubscribe(self, name: str, handler: Handler) -> None:
        if handler in self._subscribers.get(name, []):
            self._subscribers[name].remove(handler)


TRANSACTIONS_CHANGED = "TRANSACTIONS_CHANGED"
BUDGETS_CHANGED = "BUDGETS_CHANGED"
ALERT_DISMISSED = "ALERT_DISMISSED"

STORE_EVENTS = (TRANSACTIONS_CHANGED, BUDGETS_CHANGED, ALERT_DISMISSED)


def persist_handler(path: Union[str, Path]) -> Handler:
    """Build a handler that rewrites the store file from payload["store"]."""

    def _persist(event: Event, payload: dict) -> dict:
        store = payload.get("store")
        if not isinstance(store, Store):
            return {}
        save_store(store, path)
        return {"saved": str(path), "event": event.name}

    return _persist
