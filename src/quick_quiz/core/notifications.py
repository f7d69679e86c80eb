"""Process-scoped notification service.

A :class:`NotificationCenter` is created once by the command that owns the
interactive session and handed to whatever needs to raise or display
notices. Observers subscribe a callback and receive the tuple of visible
notifications every time it changes.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, replace
from typing import Callable, Literal

__all__ = [
    "Notification",
    "NotificationCenter",
    "NotificationLevel",
    "Subscriber",
]

NotificationLevel = Literal["info", "success", "warning", "error"]

_LEVELS: frozenset[str] = frozenset({"info", "success", "warning", "error"})

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    """A single notice shown to the person taking the quiz."""

    id: str
    title: str
    description: str = ""
    level: NotificationLevel = "info"
    open: bool = True


Subscriber = Callable[[tuple[Notification, ...]], None]


class NotificationCenter:
    """Keeps the visible notifications and fans changes out to subscribers.

    At most ``limit`` notifications are kept; adding one beyond the limit
    drops the oldest.
    """

    def __init__(self, *, limit: int = 1) -> None:
        if limit < 1:
            raise ValueError("limit must be >= 1")
        self._limit = limit
        self._items: list[Notification] = []
        self._subscribers: list[Subscriber] = []
        self._ids = itertools.count(1)

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def active(self) -> tuple[Notification, ...]:
        """Notifications that are still open, newest first."""

        return tuple(item for item in self._items if item.open)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register ``callback``; the returned callable unsubscribes it."""

        self._subscribers.append(callback)
        return lambda: self.unsubscribe(callback)

    def unsubscribe(self, callback: Subscriber) -> None:
        try:
            self._subscribers.remove(callback)
        except ValueError:
            return

    def notify(
        self,
        title: str,
        description: str = "",
        *,
        level: NotificationLevel = "info",
    ) -> Notification:
        if level not in _LEVELS:
            raise ValueError(f"Unknown notification level '{level}'.")
        item = Notification(
            id=str(next(self._ids)),
            title=title,
            description=description,
            level=level,
        )
        self._items = [item, *self._items][: self._limit]
        logger.debug(
            "notification raised",
            extra={"notification_id": item.id, "level": level},
        )
        self._publish()
        return item

    def dismiss(self, notification_id: str | None = None) -> None:
        """Close one notification, or all of them when no id is given."""

        self._items = [
            replace(item, open=False)
            if notification_id is None or item.id == notification_id
            else item
            for item in self._items
        ]
        self._publish()

    def clear(self) -> None:
        self._items = []
        self._publish()

    def _publish(self) -> None:
        snapshot = self.active
        for callback in list(self._subscribers):
            callback(snapshot)
