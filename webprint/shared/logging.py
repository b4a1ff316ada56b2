"""
Logging setup with request-scoped context.

Every record gets a ``request_id`` attribute taken from the active
RequestContext, so log lines from a render job can be tied back to the HTTP
request that started it.
"""

import logging
import sys
from contextvars import ContextVar

from .types import RequestContext

_request_context: ContextVar[RequestContext | None] = ContextVar(
    "webprint_request_context", default=None
)

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(request_id)s] %(name)s: %(message)s"


class RequestContextFilter(logging.Filter):
    """Inject request context fields into log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        ctx = _request_context.get()
        record.request_id = ctx.request_id if ctx else "-"
        record.actor = ctx.actor if ctx else "system"
        return True


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once; safe to call repeatedly."""
    root = logging.getLogger()
    root.setLevel(level.upper())

    for handler in root.handlers:
        if getattr(handler, "_webprint", False):
            return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(RequestContextFilter())
    handler._webprint = True  # type: ignore[attr-defined]
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get a module logger."""
    return logging.getLogger(name)


def set_request_context(ctx: RequestContext) -> None:
    _request_context.set(ctx)


def get_request_context() -> RequestContext | None:
    return _request_context.get()


def clear_request_context() -> None:
    _request_context.set(None)
