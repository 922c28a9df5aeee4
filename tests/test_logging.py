import json
import logging
from ssehub.core.logging import JsonFormatter, correlation_id_var, setup_logging
from ssehub.core.producer import MessageCounter


def test_json_formatter_includes_extras():
    record = logging.LogRecord(
        "infra.hub", logging.INFO, __file__, 1, "mailbox full", None, None
    )
    record.subscriber_id = "abc123"
    record.dropped = 2
    token = correlation_id_var.set("abc123")
    try:
        out = json.loads(JsonFormatter().format(record))
    finally:
        correlation_id_var.reset(token)
    assert out["message"] == "mailbox full"
    assert out["level"] == "INFO"
    assert out["subscriber_id"] == "abc123"
    assert out["dropped"] == 2
    assert out["correlation_id"] == "abc123"
    assert "event" not in out


def test_setup_logging_installs_single_handler():
    setup_logging()
    setup_logging()
    root = logging.getLogger()
    json_handlers = [h for h in root.handlers if isinstance(h.formatter, JsonFormatter)]
    assert len(json_handlers) == 1


def test_message_counter():
    c = MessageCounter()
    assert [c.next_message() for _ in range(3)] == ["hello 1", "hello 2", "hello 3"]
    assert c.value == 3
