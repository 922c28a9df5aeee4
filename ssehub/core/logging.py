from __future__ import annotations
import json, logging, sys, time, contextvars
from typing import Any, Dict
from ssehub.core.config import settings

correlation_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "correlation_id", default="-"
)

_EXTRAS = ("subscriber_id", "event", "subscribers", "dropped", "delivered")


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        base: Dict[str, Any] = {
            "ts": time.strftime(
                "%Y-%m-%dT%H:%M:%S",
                time.gmtime(getattr(record, "created", time.time())),
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "correlation_id": getattr(
                record, "correlation_id", correlation_id_var.get("-")
            ),
        }
        for k in _EXTRAS:
            if hasattr(record, k):
                base[k] = getattr(record, k)
        if record.exc_info:
            base["exc"] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False)


def setup_logging() -> None:
    # root -> JSON to stdout
    root = logging.getLogger()
    root.setLevel(logging.getLevelName((settings.LOG_LEVEL or "INFO").upper()))
    # Route uvicorn logs through root JSON handler
    for lg in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        lgr = logging.getLogger(lg)
        lgr.handlers.clear()
        lgr.propagate = True
        lgr.setLevel(root.level)
    # stdout handler, installed once
    for h in root.handlers:
        if isinstance(h.formatter, JsonFormatter):
            return
    sh = logging.StreamHandler(sys.stdout)
    sh.setFormatter(JsonFormatter())
    root.addHandler(sh)
