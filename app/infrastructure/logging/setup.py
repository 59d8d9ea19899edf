"""Structured logging setup.

Call ``configure_logging`` once at startup (the application lifespan does);
modules obtain loggers with ``get_module_logger``.

Usage:
    from infrastructure.logging import get_module_logger

    logger = get_module_logger()
    logger.info("notification_dispatched", sent=["push", "email"])
"""

import inspect
import logging
import sys
from typing import TYPE_CHECKING, Any, List, Optional

import structlog
from structlog.stdlib import BoundLogger

from infrastructure.logging.formatters import (
    add_app_info,
    mask_email_addresses,
    mask_sensitive_data,
    truncate_large_values,
)

if TYPE_CHECKING:
    from infrastructure.configuration import Settings


def _is_test_environment() -> bool:
    return "pytest" in sys.modules


def _silence_for_tests() -> BoundLogger:
    logging.root.setLevel(logging.CRITICAL + 1)
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", level=logging.CRITICAL + 1, force=True)
    return structlog.stdlib.get_logger()


def build_processors(settings: "Settings", prod_mode: bool) -> List[Any]:
    """Processor chain: context, masking, then a JSON or console renderer."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
        add_app_info(
            settings.APP_NAME,
            settings.GIT_SHA,
            "production" if prod_mode else "development",
        ),
        mask_sensitive_data(),
        mask_email_addresses(),
        truncate_large_values(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        (
            structlog.processors.JSONRenderer()
            if prod_mode
            else structlog.dev.ConsoleRenderer()
        ),
    ]


def configure_logging(
    settings: Optional["Settings"] = None,
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Configure structlog and the stdlib root logger.

    Output is silenced entirely under pytest.

    Args:
        settings: Settings instance; loaded from the environment when omitted.
        log_level: Override for ``settings.LOG_LEVEL``.
        is_production: Override for JSON (production) vs console output.

    Returns:
        Configured logger instance
    """
    if _is_test_environment():
        return _silence_for_tests()

    if settings is None:
        from infrastructure.configuration import Settings

        settings = Settings()

    prod_mode = settings.is_production if is_production is None else is_production

    structlog.configure(
        processors=build_processors(settings, prod_mode),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    level = (log_level or settings.LOG_LEVEL).upper()
    logging.basicConfig(
        format="%(message)s", level=getattr(logging, level, logging.INFO)
    )
    return structlog.stdlib.get_logger()


# Module-level logger (auto-configured on import)
logger: BoundLogger = configure_logging()


def get_module_logger() -> BoundLogger:
    """Logger bound to the calling module.

    Example:
        # In infrastructure/notifications/dispatcher.py
        logger = get_module_logger()
        # context: {"component": "dispatcher",
        #           "module_path": "infrastructure.notifications.dispatcher"}
    """
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    module = inspect.getmodule(caller) if caller is not None else None
    if module is None:
        return logger.bind(component="unknown")

    return logger.bind(
        component=module.__name__.rsplit(".", 1)[-1],
        module_path=module.__name__,
    )
