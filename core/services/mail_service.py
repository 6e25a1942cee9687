# =============================================================================
# core/services/mail_service.py - Contact-Form Mail Dispatch
# =============================================================================
# Sends the "thank you" reply for a contact-form submission:
# 1. Load the HTML template from disk
# 2. Substitute the sender's name for the {{name}} placeholder
# 3. Deliver one message over SMTP (aiosmtplib)
#
# Template and transport failures are logged in full and surfaced as
# generic 500 errors.
# =============================================================================

import asyncio
import html
import logging
from email.message import EmailMessage
from pathlib import Path

import aiosmtplib

from app.exceptions import MailDeliveryError, MailTemplateError
from core.models import ContactForm

logger = logging.getLogger(__name__)

NAME_PLACEHOLDER = "{{name}}"


class MailService:
    """
    Thin async SMTP sender with one HTML template.

    Example:
        mail = MailService(host="smtp.example.com", port=465, sender="hello@example.com",
                           template_path="templates/mail.html")
        await mail.send_contact_reply(form)
    """

    def __init__(
        self,
        host: str,
        port: int,
        sender: str,
        template_path: str | Path,
        subject: str = "Thank you for your message!",
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = True,
        timeout: float = 30.0,
    ):
        self.host = host
        self.port = port
        self.sender = sender
        self.template_path = Path(template_path)
        self.subject = subject
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    async def load_template(self) -> str:
        """
        Read the reply template.

        Raises:
            MailTemplateError: Template missing or unreadable
        """
        try:
            return await asyncio.to_thread(self.template_path.read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Could not load mail template {self.template_path}: {e}", exc_info=True)
            raise MailTemplateError() from e

    @staticmethod
    def render(template: str, name: str) -> str:
        """Replace the first {{name}} with the HTML-escaped display name."""
        return template.replace(NAME_PLACEHOLDER, html.escape(name), 1)

    def build_message(self, to: str, subject: str, html_body: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to
        message["Subject"] = subject
        message.set_content("Please view this message in an HTML-capable mail client.")
        message.add_alternative(html_body, subtype="html")
        return message

    async def send(self, to: str, subject: str, html_body: str) -> None:
        """
        Deliver one HTML message.

        Raises:
            MailDeliveryError: SMTP refused, connection failed or timed out
        """
        message = self.build_message(to, subject, html_body)
        try:
            await aiosmtplib.send(
                message,
                hostname=self.host,
                port=self.port,
                username=self.username,
                password=self.password,
                use_tls=self.use_tls,
                timeout=self.timeout,
            )
        except (aiosmtplib.SMTPException, OSError, asyncio.TimeoutError) as e:
            logger.error(f"Error sending email to {to}: {e}", exc_info=True)
            raise MailDeliveryError() from e
        logger.info(f"Sent '{subject}' to {to}")

    async def send_contact_reply(self, form: ContactForm) -> None:
        """Render the template for `form.full_name` and mail it to `form.contact`."""
        template = await self.load_template()
        await self.send(form.contact, self.subject, self.render(template, form.full_name))
