"""Outcome classes for provider calls."""

from enum import Enum


class OperationStatus(Enum):
    """How a provider call ended.

    NOT_FOUND is reserved for delivery targets the provider no longer
    knows (an unregistered push token, a blocked chat) so callers can prune
    them.
    """

    SUCCESS = "success"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
    NOT_FOUND = "not_found"
