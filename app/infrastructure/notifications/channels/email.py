"""Email channel: strategy-selected template, with a plain HTML fallback."""

from typing import TYPE_CHECKING

from infrastructure.logging import get_module_logger
from infrastructure.notifications.channels.base import NotificationChannel
from infrastructure.notifications.models import Notification, NotificationResult
from infrastructure.notifications.preferences import Recipient
from infrastructure.notifications.strategies import (
    fallback_email_html,
    select_email_content,
)

if TYPE_CHECKING:
    from integrations.email.client import EmailSender
    from integrations.email.templates import TemplateLoader

logger = get_module_logger()


class EmailChannel(NotificationChannel):
    """Email notification channel.

    Renders the template chosen by the email strategy table and sends it.
    When loading, rendering or sending fails, a minimal HTML email with the
    message and action link is sent instead. A failing fallback is logged
    and reported as FAILED; this channel never raises.
    """

    def __init__(
        self,
        sender: "EmailSender",
        templates: "TemplateLoader",
        app_name: str,
        base_url: str,
    ):
        self._sender = sender
        self._templates = templates
        self._app_name = app_name
        self._base_url = base_url

    @property
    def channel_name(self) -> str:
        return "email"

    def is_enabled(self, recipient: Recipient) -> bool:
        return recipient.notifications.email

    def send(
        self, notification: Notification, recipient: Recipient
    ) -> NotificationResult:
        if not recipient.email:
            logger.info("email_skipped_no_address", recipient=recipient.id)
            return self.skipped(notification, "Recipient has no email address")

        content = None
        try:
            content = select_email_content(
                notification, recipient, self._app_name, self._base_url
            )
            render = self._templates.load_template(content.template)
            html = render(content.data)
            self._sender.send(recipient.email, content.subject, html)
        except Exception as e:
            logger.error(
                "email_template_failed",
                recipient=recipient.id,
                template=content.template if content else None,
                notification_type=notification.type,
                error=str(e),
            )
            subject = content.subject if content else notification.title
            return self._send_fallback(notification, recipient, subject)

        logger.info(
            "email_sent",
            recipient=recipient.id,
            template=content.template,
        )
        return self.sent(notification, f"Sent using template {content.template}")

    def _send_fallback(
        self, notification: Notification, recipient: Recipient, subject: str
    ) -> NotificationResult:
        try:
            self._sender.send(recipient.email, subject, fallback_email_html(notification))
        except Exception as e:
            logger.error(
                "email_fallback_failed",
                recipient=recipient.id,
                notification_type=notification.type,
                error=str(e),
                exc_info=True,
            )
            return self.failed(
                notification, f"Fallback email failed: {e}", error_code="EMAIL_FAILED"
            )

        logger.info("email_fallback_sent", recipient=recipient.id)
        return self.sent(notification, "Sent fallback email")
