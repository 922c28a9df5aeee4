from __future__ import annotations
import threading


class MessageCounter:
    """Numbers the messages produced by ``/say``: "hello 1", "hello 2", ..."""

    def __init__(self, prefix: str = "hello", start: int = 0) -> None:
        self.prefix = prefix
        self._value = start
        self._lock = threading.Lock()

    @property
    def value(self) -> int:
        return self._value

    def next_message(self) -> str:
        with self._lock:
            self._value += 1
            n = self._value
        return f"{self.prefix} {n}"


counter = MessageCounter()
