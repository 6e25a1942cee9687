# =============================================================================
# app/routers/mail.py - Contact Form Endpoint
# =============================================================================
# POST /send-mail: validate the contact form, then send the templated
# thank-you reply to the address the visitor gave.
# =============================================================================

from fastapi import APIRouter, Request

from app.dependencies import MailServiceDep
from app.routers.common import read_json_body
from core.models import ContactForm
from core.validation import SchemaKind, validate

router = APIRouter()


@router.post("/send-mail")
async def send_mail(request: Request, mail: MailServiceDep) -> dict:
    """
    Send the contact-form reply.

    Field errors are reported before any template or SMTP work starts.

    Raises:
        400: One entry per missing/invalid field
        500: Template could not be loaded or SMTP failed
    """
    form: ContactForm = validate(SchemaKind.CONTACT, await read_json_body(request))
    await mail.send_contact_reply(form)
    return {"status": "success", "message": "Email sent successfully!"}
