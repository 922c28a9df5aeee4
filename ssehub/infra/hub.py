from __future__ import annotations
import logging, threading
from typing import List, Optional, Set

from ssehub.infra.subscription import Subscriber, Subscription

logger = logging.getLogger("infra.hub")

DEFAULT_MAILBOX_CAPACITY = 100


class Hub:
    """Fans published messages out to every registered subscriber.

    Each subscriber gets its own bounded mailbox. Publishing never waits on
    a subscriber: when a mailbox is full the message is dropped for that
    subscriber only. The registry lock is held just long enough to mutate or
    snapshot the set, never while enqueueing.

    ``publish`` must run on the event loop that serves the subscriptions.
    """

    def __init__(self, mailbox_capacity: int = DEFAULT_MAILBOX_CAPACITY) -> None:
        if mailbox_capacity < 1:
            raise ValueError("mailbox_capacity must be >= 1")
        self.mailbox_capacity = mailbox_capacity
        self._subscribers: Set[Subscriber] = set()
        self._lock = threading.Lock()
        self._closed = False
        self._published = 0
        self._dropped = 0

    def register(self, capacity: Optional[int] = None) -> Subscription:
        cap = self.mailbox_capacity if capacity is None else capacity
        if cap < 1:
            raise ValueError("capacity must be >= 1")
        sub = Subscriber(capacity=cap)
        with self._lock:
            if self._closed:
                sub.stopped.set()
            self._subscribers.add(sub)
            count = len(self._subscribers)
        logger.debug(
            "subscriber registered",
            extra={"subscriber_id": sub.id, "event": "register", "subscribers": count},
        )
        return Subscription(self, sub)

    def unregister(self, subscription: Subscription) -> None:
        sub = subscription.subscriber
        with self._lock:
            if sub not in self._subscribers:
                return
            self._subscribers.discard(sub)
            count = len(self._subscribers)
        logger.debug(
            "subscriber unregistered",
            extra={
                "subscriber_id": sub.id,
                "event": "unregister",
                "subscribers": count,
                "dropped": sub.dropped,
            },
        )

    def publish(self, message: str) -> int:
        """Offer ``message`` to every mailbox; return how many accepted it."""
        with self._lock:
            targets: List[Subscriber] = list(self._subscribers)
            self._published += 1
        delivered = 0
        for sub in targets:
            if sub.offer(message):
                delivered += 1
                continue
            with self._lock:
                self._dropped += 1
            logger.debug(
                "mailbox full, message dropped",
                extra={"subscriber_id": sub.id, "event": "drop", "dropped": sub.dropped},
            )
        return delivered

    def close(self) -> None:
        """Stop every live subscription; later registrations start stopped."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            targets = list(self._subscribers)
        for sub in targets:
            sub.stopped.set()
        logger.info(
            "hub closed", extra={"event": "hub_closed", "subscribers": len(targets)}
        )

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    @property
    def published(self) -> int:
        return self._published

    @property
    def dropped(self) -> int:
        return self._dropped

    def __len__(self) -> int:
        return self.subscriber_count
