"""structlog processors installed by ``configure_logging``.

Dispatch logs carry recipient data (addresses, push tokens, bot tokens),
so masking runs before any renderer sees the event.
"""

import re
from typing import Any, Callable, Optional

Processor = Callable[[Any, str, dict[str, Any]], dict[str, Any]]

# Keys whose values are never logged (substring match, case-insensitive).
SENSITIVE_PATTERNS = frozenset(
    {
        "password",
        "secret",
        "token",
        "api_key",
        "apikey",
        "authorization",
        "credential",
        "private_key",
        "cookie",
    }
)

EMAIL_PATTERN = re.compile(r"([A-Za-z0-9._%+-])[A-Za-z0-9._%+-]*@([A-Za-z0-9.-]+\.[A-Za-z]+)")


def add_app_info(
    app_name: str, app_version: str = "unknown", environment: Optional[str] = None
) -> Processor:
    """Stamp every entry with the application name, version and environment."""
    static = {"app_name": app_name, "app_version": app_version}
    if environment:
        static["environment"] = environment

    def processor(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.update(static)
        return event_dict

    return processor


def mask_sensitive_data(
    mask_value: str = "***REDACTED***",
    additional_patterns: Optional[frozenset[str]] = None,
) -> Processor:
    """Replace values whose key matches a sensitive pattern.

    Push tokens, bot tokens and unsubscribe tokens all fall under ``token``,
    which is why delivery code logs counts (``invalid_count``) instead.
    """
    patterns = SENSITIVE_PATTERNS | (additional_patterns or frozenset())

    def processor(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        return {
            key: (
                mask_value
                if value is not None and any(p in key.lower() for p in patterns)
                else value
            )
            for key, value in event_dict.items()
        }

    return processor


def mask_email_addresses() -> Processor:
    """Shorten email addresses in string values to ``a***@example.com``."""

    def processor(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        for key, value in event_dict.items():
            if key != "event" and isinstance(value, str) and "@" in value:
                event_dict[key] = EMAIL_PATTERN.sub(r"\1***@\2", value)
        return event_dict

    return processor


def truncate_large_values(max_length: int = 500) -> Processor:
    """Cut long strings (messages, rendered HTML) to ``max_length`` characters."""

    def processor(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        for key, value in event_dict.items():
            if isinstance(value, str) and len(value) > max_length:
                event_dict[key] = (
                    value[:max_length] + f"...[truncated, {len(value)} chars total]"
                )
        return event_dict

    return processor
