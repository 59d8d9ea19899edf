"""Outbound email integration: SMTP sender and HTML templates."""

from integrations.email.client import EmailSender
from integrations.email.templates import TemplateLoader

__all__ = ["EmailSender", "TemplateLoader"]
