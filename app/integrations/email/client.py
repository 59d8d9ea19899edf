"""SMTP email sender."""

import smtplib
from email.message import EmailMessage
from typing import Optional

from infrastructure.logging import get_module_logger

logger = get_module_logger()


class EmailSender:
    """Send HTML email over SMTP.

    Opens one connection per message. Errors propagate to the caller.
    """

    def __init__(
        self,
        host: str,
        port: int = 587,
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = True,
        sender: str = "no-reply@localhost",
        timeout_seconds: int = 30,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.sender = sender
        self.timeout_seconds = timeout_seconds

    def build_message(self, to: str, subject: str, html: str) -> EmailMessage:
        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = self.sender
        message["To"] = to
        message.set_content("This message requires an HTML capable email client.")
        message.add_alternative(html, subtype="html")
        return message

    def send(self, to: str, subject: str, html: str) -> None:
        message = self.build_message(to, subject, html)
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout_seconds) as smtp:
            if self.use_tls:
                smtp.starttls()
            if self.username and self.password:
                smtp.login(self.username, self.password)
            smtp.send_message(message)
        logger.info("smtp_email_sent", to=to, subject=subject)
