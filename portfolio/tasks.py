import logging
from datetime import datetime, timezone

from celery import shared_task
from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.utils.html import escape

logger = logging.getLogger(__name__)


def _render_html(name: str, email: str, subject: str, message: str) -> str:
    return (
        '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">'
        "<h2>New Contact Form Submission</h2>"
        f"<p><strong>Name:</strong> {escape(name)}</p>"
        f'<p><strong>Email:</strong> <a href="mailto:{escape(email)}">{escape(email)}</a></p>'
        f"<p><strong>Subject:</strong> {escape(subject)}</p>"
        f'<p style="white-space: pre-wrap;">{escape(message)}</p>'
        f"<p>Reply directly to this email to respond to {escape(name)}.</p>"
        "</div>"
    )


@shared_task
def send_contact_email(name: str, email: str, subject: str, message: str, recipient: str) -> str:
    body = (
        "New Contact Form Submission\n\n"
        f"Name: {name}\nEmail: {email}\nSubject: {subject}\n\n"
        f"Message:\n{message}\n\n"
        "---\nThis email was sent from your portfolio contact form.\n"
        f"Reply directly to this email to respond to {name}.\n"
    )
    mail = EmailMultiAlternatives(
        subject=f"Portfolio Contact: {subject}",
        body=body,
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=[recipient],
        reply_to=[email],
    )
    mail.attach_alternative(_render_html(name, email, subject, message), "text/html")
    try:
        mail.send()
    except Exception:
        logger.exception("contact email to %s failed", recipient)
        raise
    logger.info("contact email from %s sent to %s", email, recipient)
    return f"sent:{datetime.now(timezone.utc).isoformat()}"
