import asyncio
import logging
from ssehub.api.events_stream import sse_events
from ssehub.core.logging import correlation_id_var
from ssehub.infra.hub import Hub
from ssehub.infra.sse import format_comment, format_event


def test_format_event_single_line():
    assert format_event("hello 1") == "data: hello 1\n\n"
    assert format_event("") == "data: \n\n"


def test_format_event_splits_lines():
    assert format_event("a\nb") == "data: a\ndata: b\n\n"


def test_format_comment():
    assert format_comment("keep-alive") == ": keep-alive\n\n"
    assert format_comment("") == ":\n\n"


def test_stream_yields_events_until_cancelled():
    async def scenario():
        hub = Hub(mailbox_capacity=3)
        sub = hub.register()
        cancel = asyncio.Event()
        hub.publish("hello 1")
        hub.publish("hello 2")
        agen = sse_events(sub, cancel)
        chunks = [await agen.__anext__() for _ in range(3)]
        cancel.set()
        try:
            await agen.__anext__()
        except StopAsyncIteration:
            chunks.append(None)
        return chunks, sub.closed, len(hub)

    chunks, closed, remaining = asyncio.run(scenario())
    assert chunks == [": ok\n\n", "data: hello 1\n\n", "data: hello 2\n\n", None]
    assert closed
    assert remaining == 0


def test_stream_sends_heartbeat_when_idle():
    async def scenario():
        hub = Hub()
        sub = hub.register()
        agen = sse_events(sub, heartbeat=0.01)
        chunks = [await agen.__anext__(), await agen.__anext__()]
        await agen.aclose()
        return chunks, sub.closed

    chunks, closed = asyncio.run(scenario())
    assert chunks == [": ok\n\n", ": keep-alive\n\n"]
    assert closed


def test_stream_closes_when_task_is_cancelled():
    async def scenario():
        hub = Hub()
        sub = hub.register()

        async def serve():
            async for _ in sse_events(sub):
                pass

        task = asyncio.create_task(serve())
        await asyncio.sleep(0.01)
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        return sub.closed, len(hub)

    assert asyncio.run(scenario()) == (True, 0)


def test_format_event_keeps_non_sse_separators():
    for message in ("temp ok\x0cend", "a b", "x\x0by\x1cz\x85w"):
        assert format_event(message) == f"data: {message}\n\n"


def test_format_event_splits_on_crlf_and_cr():
    assert format_event("a\r\nb\rc") == "data: a\ndata: b\ndata: c\n\n"


def test_stream_logs_carry_subscriber_correlation_id(caplog):
    async def scenario():
        hub = Hub()
        sub = hub.register()
        cancel = asyncio.Event()
        agen = sse_events(sub, cancel)
        await agen.__anext__()
        cancel.set()
        try:
            await agen.__anext__()
        except StopAsyncIteration:
            pass
        return sub.id

    with caplog.at_level(logging.INFO, logger="api.events_stream"):
        sub_id = asyncio.run(scenario())
    records = [r for r in caplog.records if r.name == "api.events_stream"]
    assert [r.event for r in records] == ["connect", "end"]
    assert all(r.correlation_id == sub_id for r in records)
    assert correlation_id_var.get() == "-"
