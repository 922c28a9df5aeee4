from __future__ import annotations
import re
from ssehub.core.config import settings
from ssehub.infra.hub import Hub

# the only line terminators the event-stream format recognises
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def format_event(message: str) -> str:
    # one data field per line; a single-line message becomes "data: <message>\n\n"
    lines = _LINE_BREAK.split(message)
    return "".join(f"data: {line}\n" for line in lines) + "\n"


def format_comment(text: str) -> str:
    return f": {text}\n\n" if text else ":\n\n"


hub = Hub(mailbox_capacity=settings.MAILBOX_CAPACITY)
