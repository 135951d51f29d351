"""JSON log records for the ``tablequery`` loggers.

Warnings about skipped filters and ignored sort keys carry their details in
``extra={"event": {...}}``; ``JsonFormatter`` puts that payload next to the
message so a log pipeline can group them by model and filter key.
"""
import json
import logging
from contextvars import ContextVar
from datetime import datetime, timezone

LIBRARY_LOGGER = "tablequery"
HANDLER_NAME = "tablequery-json"

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None) or request_id_ctx.get(),
            "event": getattr(record, "event", None),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack_info"] = self.formatStack(record.stack_info)
        return json.dumps(
            {key: value for key, value in payload.items() if value is not None},
            ensure_ascii=True,
            default=str,
        )


def configure_logging(level: str, logger_name: str = LIBRARY_LOGGER) -> logging.Handler:
    """Attach a JSON stream handler to the library's own logger.

    Handlers installed by the host application, on the root logger or
    anywhere else, are left in place. Calling this again replaces the
    handler it added before instead of stacking a second one.
    """
    logger = logging.getLogger(logger_name)
    for existing in list(logger.handlers):
        if existing.get_name() == HANDLER_NAME:
            logger.removeHandler(existing)
    handler = logging.StreamHandler()
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    logger.setLevel(level.upper())
    return handler
