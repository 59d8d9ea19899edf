"""Scoped logging context.

Everything logged inside ``bind_request_context`` carries the bound keys:
HTTP requests bind the caller and path, dispatch binds the notification.

Usage:
    with bind_request_context(notification_id="65f...", recipient="65a..."):
        logger.info("dispatching_notification")
"""

import uuid
from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog


@contextmanager
def bind_request_context(
    correlation_id: Optional[str] = None, **context: Any
) -> Generator[None, None, None]:
    """Bind ``context`` (None values dropped) plus a correlation id.

    A correlation id is generated when none is given. Keys are unbound on
    exit, so nested scopes for different notifications do not leak.
    """
    bound = {key: value for key, value in context.items() if value is not None}
    bound["correlation_id"] = correlation_id or str(uuid.uuid4())

    structlog.contextvars.bind_contextvars(**bound)
    try:
        yield
    finally:
        structlog.contextvars.unbind_contextvars(*bound.keys())


def get_correlation_id() -> Optional[str]:
    return structlog.contextvars.get_contextvars().get("correlation_id")
