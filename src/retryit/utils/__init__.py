r"""Utility functions for retry policies and logging."""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "bind_run_id",
    "get_run_id",
    "log_structured",
    "reset_run_id",
    "validate_callable",
    "validate_retry_params",
    "validate_timeout",
]

from retryit.utils.structured_logging import (
    StructuredFormatter,
    bind_run_id,
    get_run_id,
    log_structured,
    reset_run_id,
)
from retryit.utils.validation import (
    validate_callable,
    validate_retry_params,
    validate_timeout,
)
