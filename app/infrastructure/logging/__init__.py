"""Structured logging (structlog).

    from infrastructure.logging import get_module_logger

    logger = get_module_logger()
    logger.info("module_initialized")

``configure_logging`` is called once by the application lifespan.
"""

from infrastructure.logging.context import bind_request_context, get_correlation_id
from infrastructure.logging.formatters import (
    SENSITIVE_PATTERNS,
    add_app_info,
    mask_email_addresses,
    mask_sensitive_data,
    truncate_large_values,
)
from infrastructure.logging.setup import configure_logging, get_module_logger

__all__ = [
    "configure_logging",
    "get_module_logger",
    "bind_request_context",
    "get_correlation_id",
    "SENSITIVE_PATTERNS",
    "add_app_info",
    "mask_email_addresses",
    "mask_sensitive_data",
    "truncate_large_values",
]
