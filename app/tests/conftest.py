import sys
from pathlib import Path

# Ensure the application package root is on sys.path so importing application
# modules (e.g. `infrastructure.notifications`) works during collection.
project_root = str(Path(__file__).resolve().parents[1])
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import pytest  # noqa: E402
from unittest.mock import MagicMock  # noqa: E402

from infrastructure.idempotency import InMemoryCache  # noqa: E402
from infrastructure.notifications import DeduplicationGuard  # noqa: E402
from tests.factories.notifications import (  # noqa: E402
    make_notification,
    make_recipient,
    make_transaction_notification,
    make_user_document,
)


@pytest.fixture
def notification_factory():
    return make_notification


@pytest.fixture
def transaction_notification_factory():
    return make_transaction_notification


@pytest.fixture
def recipient_factory():
    """Factory for Recipient objects.

    Example:
        recipient = recipient_factory(push=False, email_enabled=True)
    """
    return make_recipient


@pytest.fixture
def user_document_factory():
    return make_user_document


@pytest.fixture
def dedup_guard():
    """A fresh in-memory deduplication guard for each test."""
    return DeduplicationGuard(InMemoryCache(max_entries=1000), ttl_seconds=3600)


@pytest.fixture
def mock_user_repository(recipient_factory):
    users = MagicMock()
    users.find_recipient.return_value = recipient_factory()
    users.remove_push_tokens.return_value = 1
    return users
