"""Unit tests for the FCM push sender."""

from unittest.mock import MagicMock

import pytest
import requests

from integrations.firebase import PushSender


def response(status_code=200, body=None):
    mock = MagicMock()
    mock.status_code = status_code
    mock.ok = status_code < 400
    mock.json.return_value = body if body is not None else {"name": "projects/p/messages/1"}
    mock.text = str(body)
    return mock


def fcm_error(status, error_code=None):
    details = (
        [{"@type": "type.googleapis.com/google.firebase.fcm.v1.FcmError", "errorCode": error_code}]
        if error_code
        else []
    )
    return {"error": {"code": 400, "status": status, "details": details}}


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def sender(session):
    return PushSender("demo-project", session=session)


@pytest.mark.unit
class TestPushSender:
    def test_posts_one_message_per_token(self, sender, session):
        session.post.return_value = response()

        report = sender.send_multicast(["a", "b"], "Title", "Body", {"amount": "10"})

        assert report.success_count == 2
        assert report.failure_count == 0
        url = session.post.call_args.args[0]
        assert url == "https://fcm.googleapis.com/v1/projects/demo-project/messages:send"
        message = session.post.call_args.kwargs["json"]["message"]
        assert message["token"] == "b"
        assert message["notification"] == {"title": "Title", "body": "Body"}
        assert message["data"] == {"amount": "10"}

    def test_unregistered_tokens_are_reported_invalid(self, sender, session):
        session.post.side_effect = [
            response(404, fcm_error("NOT_FOUND", "UNREGISTERED")),
            response(),
        ]

        report = sender.send_multicast(["abc", "def"], "T", "B", {})

        assert report.success_count == 1
        assert report.failure_count == 1
        assert report.invalid_targets == ["abc"]

    def test_message_level_invalid_argument_prunes_nothing(self, sender, session):
        body = fcm_error("INVALID_ARGUMENT")
        body["error"]["message"] = "Message is too big"
        session.post.return_value = response(400, body)

        report = sender.send_multicast(["good-1", "good-2"], "T", "B", {})

        assert report.failure_count == 2
        assert report.invalid_targets == []

    def test_invalid_argument_naming_the_token_is_invalid_target(self, sender, session):
        body = fcm_error("INVALID_ARGUMENT")
        body["error"]["details"] = [
            {
                "@type": "type.googleapis.com/google.rpc.BadRequest",
                "fieldViolations": [
                    {"field": "message.token", "description": "Invalid registration token"}
                ],
            }
        ]
        session.post.return_value = response(400, body)

        report = sender.send_multicast(["bad"], "T", "B", {})

        assert report.invalid_targets == ["bad"]

    def test_bare_404_without_fcm_error_prunes_nothing(self, sender, session):
        not_found = response(404)
        not_found.json.side_effect = ValueError("not json")
        session.post.return_value = not_found

        report = sender.send_multicast(["a"], "T", "B", {})

        assert report.failure_count == 1
        assert report.invalid_targets == []

    def test_transient_errors_are_not_pruned(self, sender, session):
        session.post.side_effect = [
            response(503, fcm_error("UNAVAILABLE")),
            requests.ConnectionError("reset"),
        ]

        report = sender.send_multicast(["a", "b"], "T", "B", {})

        assert report.failure_count == 2
        assert report.invalid_targets == []
