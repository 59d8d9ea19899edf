"""Unit tests for NotificationService."""

from unittest.mock import MagicMock

import pytest
from pymongo.errors import PyMongoError

from modules.notifications import NotificationService

USER = "65f0c1d2e3a4b5c6d7e8f901"


@pytest.fixture
def repository():
    return MagicMock()


@pytest.fixture
def outbox():
    return MagicMock()


@pytest.fixture
def service(repository, outbox):
    return NotificationService(repository, outbox)


@pytest.mark.unit
class TestCreateNotification:
    def test_persists_then_publishes(self, service, repository, outbox, notification_factory):
        created = notification_factory()
        repository.create.return_value = created

        result = service.create_notification(
            {
                "recipient": USER,
                "type": "badge_earned",
                "title": "Badge",
                "message": "You earned a badge",
            }
        )

        assert result is created
        assert repository.create.call_args.args[0].title == "Badge"
        outbox.publish.assert_called_once_with(created)

    def test_invalid_data_is_rejected_before_storage(self, service, repository):
        with pytest.raises(ValueError):
            service.create_notification({"recipient": USER, "type": "nope", "title": "t", "message": "m"})

        repository.create.assert_not_called()

    def test_store_failure_propagates_without_publishing(
        self, service, repository, outbox, notification_factory
    ):
        repository.create.side_effect = PyMongoError("down")

        with pytest.raises(PyMongoError):
            service.create_notification(notification_factory(notification_id=None))

        outbox.publish.assert_not_called()


@pytest.mark.unit
class TestQueries:
    def test_get_user_notifications_pages(self, service, repository, notification_factory):
        repository.find.return_value = [notification_factory()]
        repository.count.return_value = 21

        result = service.get_user_notifications(USER, is_read=False, limit=10, page=3)

        filters = repository.find.call_args.args[0]
        assert filters == {"recipient": USER, "isArchived": False, "isRead": False}
        assert repository.find.call_args.kwargs == {"skip": 20, "limit": 10}
        assert result["pagination"] == {"total": 21, "pages": 3, "page": 3, "limit": 10}
        assert len(result["notifications"]) == 1

    def test_read_filter_omitted_when_unset(self, service, repository):
        repository.find.return_value = []
        repository.count.return_value = 0

        result = service.get_user_notifications(USER)

        assert "isRead" not in repository.find.call_args.args[0]
        assert result["pagination"]["pages"] == 0

    def test_rejects_non_positive_paging(self, service):
        with pytest.raises(ValueError):
            service.get_user_notifications(USER, page=0)

    def test_mark_as_read_scoped_to_owner(self, service, repository):
        service.mark_as_read("n1", USER)

        repository.update_one.assert_called_once_with(
            {"_id": "n1", "recipient": USER}, {"isRead": True}
        )

    def test_mark_all_as_read(self, service, repository):
        repository.update_many.return_value = 4

        assert service.mark_all_as_read(USER) == 4
        repository.update_many.assert_called_once_with(
            {"recipient": USER, "isRead": False}, {"isRead": True}
        )

    def test_archive(self, service, repository):
        service.archive_notification("n1", USER)

        repository.update_one.assert_called_once_with(
            {"_id": "n1", "recipient": USER}, {"isArchived": True}
        )

    def test_delete(self, service, repository):
        repository.delete_one.return_value = None

        assert service.delete_notification("n1", USER) is None
        repository.delete_one.assert_called_once_with({"_id": "n1", "recipient": USER})

    def test_unread_count(self, service, repository):
        repository.count.return_value = 2

        assert service.get_unread_count(USER) == 2
        repository.count.assert_called_once_with(
            {"recipient": USER, "isRead": False, "isArchived": False}
        )
