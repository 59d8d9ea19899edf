"""Telegram Bot API client for chat notifications."""

import html
from typing import Any, Dict, Optional

import requests

from infrastructure.logging import get_module_logger
from infrastructure.operations import OperationResult

logger = get_module_logger()


def chat_id_for(recipient: str) -> str:
    """Numeric ids are used as-is; handles are addressed as ``@handle``."""
    value = str(recipient).strip()
    if value.lstrip("-").isdigit():
        return value
    return f"@{value.lstrip('@')}"


def _is_absolute_url(url: Optional[str]) -> bool:
    return bool(url) and url.startswith(("http://", "https://"))


class ChatNotifier:
    """Send HTML-formatted messages through a Telegram bot.

    Example:
        notifier = ChatNotifier(bot_token="123:abc")
        notifier.send_notification("987654321", "Hello", "Body text",
                                   action_url="https://app.example.com/x",
                                   action_text="Open")
    """

    def __init__(
        self,
        bot_token: str,
        api_url: str = "https://api.telegram.org",
        timeout_seconds: int = 10,
        session: Optional[requests.Session] = None,
    ):
        self._send_url = f"{api_url.rstrip('/')}/bot{bot_token}/sendMessage"
        self._timeout = timeout_seconds
        self._session = session or requests.Session()

    def send_notification(
        self,
        recipient: str,
        title: str,
        body: str,
        action_url: Optional[str] = None,
        action_text: Optional[str] = None,
    ) -> bool:
        """Generic notification; True when Telegram accepted the message."""
        text = f"<b>{html.escape(title)}</b>\n\n{html.escape(body)}"
        button = None
        if _is_absolute_url(action_url):
            button = {"text": action_text or "Open", "url": action_url}
        elif action_url:
            text += f"\n\n{html.escape(action_text or 'Link')}: {html.escape(action_url)}"
        return self._send(recipient, text, button).is_success

    def send_transaction_notification(
        self,
        recipient: str,
        title: str,
        body: str,
        transaction: Dict[str, Any],
        detail_url: str,
    ) -> bool:
        """Transaction summary with a link to its detail page."""
        lines = [
            f"<b>{html.escape(title)}</b>",
            "",
            html.escape(body),
            "",
            "<b>Transaction Details</b>",
            f"ID: <code>{html.escape(str(transaction.get('id', '')))}</code>",
            f"Type: {html.escape(str(transaction.get('type', 'Transaction')))}",
            f"Amount: {html.escape(str(transaction.get('amount', 0)))}",
            f"Balance: {html.escape(str(transaction.get('balance', 0)))}",
            f"Status: {html.escape(str(transaction.get('status', 'Unknown')))}",
        ]
        button = None
        if _is_absolute_url(detail_url):
            button = {"text": "View Transaction", "url": detail_url}
        return self._send(recipient, "\n".join(lines), button).is_success

    def _send(
        self, recipient: str, text: str, button: Optional[Dict[str, str]]
    ) -> OperationResult:
        payload: Dict[str, Any] = {
            "chat_id": chat_id_for(recipient),
            "text": text,
            "parse_mode": "HTML",
            "disable_web_page_preview": True,
        }
        if button:
            payload["reply_markup"] = {"inline_keyboard": [[button]]}

        try:
            response = self._session.post(
                self._send_url, json=payload, timeout=self._timeout
            )
        except requests.RequestException as e:
            logger.error("telegram_request_failed", error=str(e))
            return OperationResult.transient_error(str(e), error_code="REQUEST_FAILED")

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.ok and body.get("ok"):
            return OperationResult.success(data=body.get("result"))

        logger.error(
            "telegram_send_failed",
            status_code=response.status_code,
            description=body.get("description"),
        )
        return OperationResult.from_http_failure(
            response.status_code,
            body.get("description") or f"HTTP {response.status_code}",
            error_code=str(body.get("error_code") or response.status_code),
        )
