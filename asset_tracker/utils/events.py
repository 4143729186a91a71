import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChangeEvent:
    entity_type: str
    action:      str
    entity_id:   int | None
    version:     int
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        return {
            "entityType": self.entity_type,
            "action":     self.action,
            "entityId":   self.entity_id,
            "version":    self.version,
            "occurredAt": self.occurred_at.isoformat(),
        }


Subscriber = Callable[[ChangeEvent], None]


class ChangeNotifier:
    """
    Publish/subscribe channel for data changes.

    Services publish once their transaction has committed; dashboards either
    subscribe in-process or poll `version` through GET /api/changes and refetch
    when it moves.

    Usage:
        db.commit()
        notifier.publish("Complaint", "UPDATE", complaint.comp_id)
    """

    def __init__(self):
        self._lock        = threading.Lock()
        self._version     = 0
        self._last_event: ChangeEvent | None = None
        self._subscribers: list[Subscriber] = []

    @property
    def version(self) -> int:
        return self._version

    @property
    def last_event(self) -> ChangeEvent | None:
        return self._last_event

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback; returns a function that removes it again."""
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)
        return unsubscribe

    def publish(self, entity_type: str, action: str, entity_id: int | None = None) -> ChangeEvent:
        with self._lock:
            self._version += 1
            event = ChangeEvent(entity_type, action, entity_id, self._version)
            self._last_event = event
            subscribers = list(self._subscribers)

        for callback in subscribers:
            try:
                callback(event)
            except Exception:
                # The write already committed; a broken reader must not turn it into a 500
                logger.exception(f"Change subscriber {callback!r} failed for {event}")
        return event


def log_change(event: ChangeEvent) -> None:
    logger.info(f"[{event.action}] {event.entity_type} #{event.entity_id} (version {event.version})")


notifier = ChangeNotifier()
notifier.subscribe(log_change)
