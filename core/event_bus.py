import asyncio
import logging
import weakref
from collections import deque
from datetime import datetime, timezone
from typing import Any, Dict, Optional

logger = logging.getLogger("event_bus")


class EventBus:
    """In-process notification fan-out for the /events stream.

    Subscribers get their own bounded queue; a full queue drops the event
    for that subscriber only. New subscribers are replayed the last few
    notifications.
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._subscribers = set()
            cls._instance._history = deque(maxlen=50)
        return cls._instance

    def notify(self, title: str, message: str, source: str = "app", data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        event = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "type": "notification",
            "source": source,
            "title": title,
            "message": message,
            "data": data or {},
        }

        self._history.append(event)

        dead = []
        for ref in list(self._subscribers):
            q = ref()
            if q is None:
                dead.append(ref)
                continue
            try:
                q.put_nowait(event)
            except asyncio.QueueFull:
                logger.warning("Dropping notification due to full subscriber queue")

        for ref in dead:
            self._subscribers.discard(ref)

        return event

    def subscribe(self, max_queue_size: int = 100) -> asyncio.Queue:
        q = asyncio.Queue(maxsize=max_queue_size)
        self._subscribers.add(weakref.ref(q))

        for event in list(self._history)[-5:]:
            try:
                q.put_nowait(event)
            except asyncio.QueueFull:
                break

        return q

    def unsubscribe(self, q: asyncio.Queue):
        for ref in list(self._subscribers):
            if ref() is q:
                self._subscribers.discard(ref)

    def recent(self, limit: int = 10):
        # [-0:] would be the whole history
        if limit <= 0:
            return []
        return list(self._history)[-limit:]

    def reset(self):
        self._subscribers.clear()
        self._history.clear()


event_bus = EventBus()
