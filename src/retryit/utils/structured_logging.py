r"""Structured logging utilities for retry runs.

Every retry run emits its lifecycle events (attempt, wait, failure,
fallback, timeout) through the ``retryit`` loggers. This module provides a
JSON formatter for those records and a per-run identifier that lets log
aggregation systems group together all events of one run.

The library never installs handlers: structured output is opt-in.

Example:
    Enable structured logging for retryit:

    ```python
    import logging
    from retryit.utils.structured_logging import StructuredFormatter

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())

    logger = logging.getLogger("retryit")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    ```
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "bind_run_id",
    "get_run_id",
    "log_structured",
    "new_run_id",
    "reset_run_id",
]

import contextvars
import json
import logging
import time
import uuid
from typing import Any

_run_id: contextvars.ContextVar[str | None] = contextvars.ContextVar("retryit_run_id", default=None)

# Attributes present on every LogRecord; anything else came from ``extra``.
_RESERVED_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)


def new_run_id() -> str:
    """Generate a short random identifier for a retry run.

    Returns:
        A 12 character hexadecimal string.
    """
    return uuid.uuid4().hex[:12]


def get_run_id() -> str | None:
    """Get the identifier of the retry run bound to the current context.

    Returns:
        The current run id, or ``None`` outside of a run.

    Example:
        ```pycon
        >>> from retryit.utils.structured_logging import bind_run_id, get_run_id, reset_run_id
        >>> token = bind_run_id("run-123")
        >>> get_run_id()
        'run-123'
        >>> reset_run_id(token)

        ```
    """
    return _run_id.get()


def bind_run_id(run_id: str | None = None) -> contextvars.Token[str | None]:
    """Bind a run id to the current context.

    The id is stored in a context variable, so concurrent runs in
    different tasks never see each other's id.

    Args:
        run_id: The id to bind. A fresh one is generated if omitted.

    Returns:
        A token to pass to ``reset_run_id`` to restore the previous id.
    """
    return _run_id.set(run_id if run_id is not None else new_run_id())


def reset_run_id(token: contextvars.Token[str | None]) -> None:
    """Restore the run id that was bound before ``bind_run_id``.

    Args:
        token: The token returned by ``bind_run_id``.
    """
    _run_id.reset(token)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for retry lifecycle events.

    Standard fields in the JSON output:
        - timestamp: ISO 8601 timestamp (UTC, millisecond precision)
        - level: Log level name
        - logger: Logger name
        - message: Log message
        - run_id: Id of the retry run, if the record was emitted inside one

    Any field passed through ``extra`` (for instance ``attempt`` or
    ``delay``) is copied into the output. Values that are not JSON
    serializable are rendered with ``repr``.

    Example:
        ```pycon
        >>> import json
        >>> import logging
        >>> from io import StringIO
        >>> from retryit.utils.structured_logging import StructuredFormatter
        >>> stream = StringIO()
        >>> handler = logging.StreamHandler(stream)
        >>> handler.setFormatter(StructuredFormatter())
        >>> logger = logging.getLogger("retryit.doctest")
        >>> logger.addHandler(handler)
        >>> logger.setLevel(logging.INFO)
        >>> logger.info("attempt failed", extra={"attempt": 2})
        >>> json.loads(stream.getvalue())["attempt"]
        2

        ```
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        run_id = getattr(record, "run_id", None) or get_run_id()
        if run_id is not None:
            log_data["run_id"] = run_id

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and key not in log_data and key != "run_id":
                log_data[key] = value

        return json.dumps(log_data, default=repr)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: ARG002
        return (
            time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
            + f".{int(record.msecs):03d}Z"
        )


def log_structured(
    logger: logging.Logger,
    level: int,
    message: str,
    **extra: Any,
) -> None:
    """Log a message with structured fields and the current run id.

    Args:
        logger: Logger to use.
        level: Log level (e.g., ``logging.DEBUG``).
        message: Log message.
        **extra: Additional structured fields to include in the record.

    Example:
        ```pycon
        >>> import logging
        >>> from retryit.utils.structured_logging import log_structured
        >>> log_structured(logging.getLogger("retryit"), logging.DEBUG, "waiting", delay=0.1)

        ```
    """
    if not logger.isEnabledFor(level):
        return
    logger.log(level, message, extra={"run_id": get_run_id(), **extra})
