from ssehub.core.producer import MessageCounter, counter
from ssehub.infra.hub import Hub
from ssehub.infra.sse import hub


def get_hub() -> Hub:
    return hub


def get_counter() -> MessageCounter:
    return counter
