# =============================================================================
# tests/test_mail_service.py - Contact Reply Mail Tests
# =============================================================================
# The SMTP transport is mocked; these tests check templating, message
# construction and error mapping.
# =============================================================================

import asyncio
from unittest.mock import AsyncMock, patch

import aiosmtplib
import pytest

from app.exceptions import MailDeliveryError, MailTemplateError
from core.models import ContactForm
from core.services import MailService


@pytest.fixture
def template(tmp_path):
    path = tmp_path / "mail.html"
    path.write_text("<p>Hi {{name}}, thanks!</p><p>{{name}}</p>", encoding="utf-8")
    return path


@pytest.fixture
def mailer(template):
    return MailService(
        host="smtp.example.com",
        port=465,
        sender="studio@example.com",
        template_path=template,
        subject="Thank you for your message!",
    )


@pytest.fixture
def form():
    return ContactForm(fullName="Ada Lovelace", contact="ada@example.com", message="Hello")


class TestRender:

    def test_first_placeholder_replaced(self):
        assert MailService.render("Hi {{name}} / {{name}}", "Ada") == "Hi Ada / {{name}}"

    def test_name_is_escaped(self):
        assert MailService.render("Hi {{name}}", "<b>Ada</b>") == "Hi &lt;b&gt;Ada&lt;/b&gt;"

    def test_missing_template(self, tmp_path):
        mailer = MailService("smtp.example.com", 465, "studio@example.com", tmp_path / "nope.html")

        with pytest.raises(MailTemplateError):
            asyncio.run(mailer.load_template())


class TestSendContactReply:

    def test_sends_rendered_html_to_contact(self, mailer, form):
        with patch("core.services.mail_service.aiosmtplib.send", new_callable=AsyncMock) as send:
            asyncio.run(mailer.send_contact_reply(form))

        message = send.call_args.args[0]
        assert message["To"] == "ada@example.com"
        assert message["From"] == "studio@example.com"
        assert message["Subject"] == "Thank you for your message!"
        html_part = message.get_body(preferencelist=("html",))
        assert "Hi Ada Lovelace, thanks!" in html_part.get_content()
        assert send.call_args.kwargs["hostname"] == "smtp.example.com"
        assert send.call_args.kwargs["port"] == 465

    def test_smtp_failure_becomes_delivery_error(self, mailer, form):
        failure = AsyncMock(side_effect=aiosmtplib.SMTPConnectError("refused"))
        with patch("core.services.mail_service.aiosmtplib.send", failure):
            with pytest.raises(MailDeliveryError) as exc_info:
                asyncio.run(mailer.send_contact_reply(form))

        assert exc_info.value.status_code == 500

    def test_timeout_becomes_delivery_error(self, mailer, form):
        failure = AsyncMock(side_effect=asyncio.TimeoutError())
        with patch("core.services.mail_service.aiosmtplib.send", failure):
            with pytest.raises(MailDeliveryError):
                asyncio.run(mailer.send_contact_reply(form))
