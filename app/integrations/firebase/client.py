"""Firebase Cloud Messaging client (HTTP v1 API).

Sends one request per device token through an authorized session built
from a service account file, and reports which tokens FCM no longer
accepts so callers can prune them.
"""

from typing import Any, Dict, Optional, Sequence

import requests
from google.auth.transport.requests import AuthorizedSession
from google.oauth2 import service_account

from infrastructure.logging import get_module_logger
from infrastructure.notifications.models import PushDeliveryReport
from infrastructure.operations import OperationResult, OperationStatus

logger = get_module_logger()

FCM_SCOPES = ["https://www.googleapis.com/auth/firebase.messaging"]
FCM_SEND_URL = "https://fcm.googleapis.com/v1/projects/{project_id}/messages:send"

# FCM error codes meaning the registration token will never work again.
INVALID_TARGET_CODES = frozenset({"UNREGISTERED", "NOT_FOUND"})


class PushSender:
    """Multicast push sender over FCM HTTP v1.

    Args:
        project_id: Firebase project id
        credentials_file: Path to a service account JSON key
        timeout_seconds: Per-request timeout
        session: Pre-built session (tests); built from the key file otherwise

    Example:
        sender = PushSender("my-project", "/secrets/firebase.json")
        report = sender.send_multicast(["tok-1", "tok-2"], "Hi", "Body", {"k": "v"})
        report.invalid_targets  # tokens to prune
    """

    def __init__(
        self,
        project_id: str,
        credentials_file: Optional[str] = None,
        timeout_seconds: int = 10,
        session: Optional[requests.Session] = None,
    ):
        self._url = FCM_SEND_URL.format(project_id=project_id)
        self._timeout = timeout_seconds
        if session is None:
            credentials = service_account.Credentials.from_service_account_file(
                credentials_file, scopes=FCM_SCOPES
            )
            session = AuthorizedSession(credentials)
        self._session = session
        logger.info("initialized_push_sender", project_id=project_id)

    def send_multicast(
        self,
        tokens: Sequence[str],
        title: str,
        body: str,
        data: Dict[str, str],
    ) -> PushDeliveryReport:
        """Send the same message to every token.

        Never raises for per-token failures; they are counted and, when FCM
        says the token is dead, listed in ``invalid_targets``.
        """
        report = PushDeliveryReport()
        for token in tokens:
            result = self._send_one(token, title, body, data)
            if result.is_success:
                report.success_count += 1
                continue
            report.failure_count += 1
            if result.status == OperationStatus.NOT_FOUND:
                report.invalid_targets.append(token)

        logger.info(
            "push_multicast_completed",
            target_count=len(tokens),
            success_count=report.success_count,
            failure_count=report.failure_count,
            invalid_count=len(report.invalid_targets),
        )
        return report

    def _send_one(
        self, token: str, title: str, body: str, data: Dict[str, str]
    ) -> OperationResult:
        message = {
            "message": {
                "token": token,
                "notification": {"title": title, "body": body},
                "data": {key: str(value) for key, value in data.items()},
            }
        }
        try:
            response = self._session.post(self._url, json=message, timeout=self._timeout)
        except requests.RequestException as e:
            logger.warning("push_request_failed", error=str(e))
            return OperationResult.transient_error(str(e), error_code="REQUEST_FAILED")

        if response.ok:
            return OperationResult.success(data=response.json())

        error = _fcm_error(response)
        error_code = _fcm_error_code(error)
        if _is_dead_target(error, error_code):
            return OperationResult.not_found(
                "Push target no longer registered", error_code=error_code
            )

        logger.warning(
            "push_send_rejected",
            status_code=response.status_code,
            error_code=error_code,
        )
        if response.status_code == 404:
            # A 404 without an FCM error body says nothing about the token.
            return OperationResult.permanent_error(response.text, error_code=error_code)
        return OperationResult.from_http_failure(
            response.status_code, response.text, error_code=error_code
        )


def _fcm_error(response: requests.Response) -> Dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    error = body.get("error") if isinstance(body, dict) else None
    return error if isinstance(error, dict) else {}


def _fcm_error_code(error: Dict[str, Any]) -> Optional[str]:
    """Most specific error code in an FCM error body."""
    for detail in error.get("details", []):
        if detail.get("errorCode"):
            return detail["errorCode"]
    return error.get("status")


def _is_dead_target(error: Dict[str, Any], error_code: Optional[str]) -> bool:
    """True only when FCM blames the registration token itself.

    ``INVALID_ARGUMENT`` also covers message problems (size, data keys), so
    it counts only when a field violation or the message names the token.
    """
    if error_code in INVALID_TARGET_CODES:
        return True
    if error_code != "INVALID_ARGUMENT":
        return False
    for detail in error.get("details", []):
        for violation in detail.get("fieldViolations", []):
            if violation.get("field") == "message.token":
                return True
    return "registration token" in str(error.get("message", "")).lower()
