from __future__ import annotations
import asyncio, uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ssehub.infra.hub import Hub


class SubscriptionClosed(RuntimeError):
    """Raised when a closed subscription is read from."""


@dataclass(eq=False)
class Subscriber:
    """Bounded mailbox owned by a single subscription.

    Hashed by identity so the hub registry can hold it in a set.
    """

    capacity: int
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])
    dropped: int = 0
    mailbox: asyncio.Queue = field(init=False)
    stopped: asyncio.Event = field(init=False, default_factory=asyncio.Event)

    def __post_init__(self) -> None:
        self.mailbox = asyncio.Queue(maxsize=self.capacity)

    def offer(self, message: str) -> bool:
        try:
            self.mailbox.put_nowait(message)
        except asyncio.QueueFull:
            self.dropped += 1
            return False
        return True


class Subscription:
    """One client's view of the hub, from register until close.

    Messages come out in the order they were published. ``next`` returns
    ``None`` once the stream has ended: the caller's cancel event fired or
    the hub shut down. Use it as an async context manager so ``close`` runs
    on every exit path::

        async with hub.register() as sub:
            async for message in sub:
                ...
    """

    def __init__(self, hub: "Hub", subscriber: Subscriber) -> None:
        self._hub = hub
        self._subscriber = subscriber
        self._closed = False

    @property
    def id(self) -> str:
        return self._subscriber.id

    @property
    def subscriber(self) -> Subscriber:
        return self._subscriber

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def pending(self) -> int:
        return self._subscriber.mailbox.qsize()

    @property
    def dropped(self) -> int:
        return self._subscriber.dropped

    def _ended(self, cancel: Optional[asyncio.Event]) -> bool:
        return self._subscriber.stopped.is_set() or (
            cancel is not None and cancel.is_set()
        )

    async def next(
        self,
        cancel: Optional[asyncio.Event] = None,
        timeout: Optional[float] = None,
    ) -> Optional[str]:
        """Wait for the next message.

        Returns ``None`` when ``cancel`` is set or the hub has stopped this
        subscriber; cancellation wins over messages still in the mailbox.
        Raises ``asyncio.TimeoutError`` when ``timeout`` elapses first, and
        ``SubscriptionClosed`` after ``close``.
        """
        if self._closed:
            raise SubscriptionClosed(f"subscription {self.id} is closed")
        if self._ended(cancel):
            return None
        mailbox = self._subscriber.mailbox
        if not mailbox.empty():
            return mailbox.get_nowait()

        getter = asyncio.ensure_future(mailbox.get())
        waiters = [getter, asyncio.ensure_future(self._subscriber.stopped.wait())]
        if cancel is not None:
            waiters.append(asyncio.ensure_future(cancel.wait()))
        try:
            done, _ = await asyncio.wait(
                waiters, timeout=timeout, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            # a cancelled Queue.get() does not consume an item
            for w in waiters:
                if not w.done():
                    w.cancel()
        if getter in done:
            return getter.result()
        if done:
            return None
        raise asyncio.TimeoutError(f"no message within {timeout}s")

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._hub.unregister(self)

    async def __aenter__(self) -> "Subscription":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __aiter__(self) -> "Subscription":
        return self

    async def __anext__(self) -> str:
        message = await self.next()
        if message is None:
            raise StopAsyncIteration
        return message

    def __repr__(self) -> str:
        state = "closed" if self._closed else "active"
        return f"<Subscription {self.id} {state} pending={self.pending}>"
