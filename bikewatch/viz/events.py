# bikewatch/viz/events.py
from __future__ import annotations

from typing import Any, Callable

VIEWPORT_MOVE = "move"
VIEWPORT_ZOOM = "zoom"
VIEWPORT_RESIZE = "resize"
TIME_CHANGE = "time"

VIEWPORT_EVENTS = (VIEWPORT_MOVE, VIEWPORT_ZOOM, VIEWPORT_RESIZE)

Handler = Callable[[Any], None]


class EventDispatcher:
    """
    Ordered list of (event_kind, handler) pairs. notify() calls the matching
    handlers synchronously, in subscription order.
    """

    def __init__(self):
        self._subs: list[tuple[str, Handler]] = []

    def subscribe(self, kind: str, handler: Handler) -> Callable[[], None]:
        pair = (kind, handler)
        self._subs.append(pair)

        def _unsubscribe():
            if pair in self._subs:
                self._subs.remove(pair)

        return _unsubscribe

    def notify(self, kind: str, payload: Any = None) -> int:
        # snapshot so handlers may (un)subscribe while we iterate
        handlers = [h for k, h in self._subs if k == kind]
        for h in handlers:
            h(payload)
        return len(handlers)

    def handlers(self, kind: str) -> list[Handler]:
        return [h for k, h in self._subs if k == kind]
