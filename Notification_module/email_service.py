"""
Transactional email over SMTP (welcome message for early access signups).
"""
import html
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr

from config import settings
from Utils.datetime_utils import now_utc
from .notification_errors import EmailDeliveryError

logger = logging.getLogger(__name__)

WELCOME_TEXT_TEMPLATE = """Hi {first_name},

Thanks for joining the early access list. You're on it!

We'll email you as soon as your spot opens up, along with a few tips to get
the most out of your first lessons.

See you soon,
The Lingua team
"""

WELCOME_HTML_TEMPLATE = """<!DOCTYPE html>
<html>
  <body style="font-family: system-ui, -apple-system, sans-serif; color: #0f172a;">
    <h2>Hi {first_name},</h2>
    <p>Thanks for joining the early access list. You're on it!</p>
    <p>We'll email you as soon as your spot opens up, along with a few tips to get
    the most out of your first lessons.</p>
    <p>See you soon,<br>The Lingua team</p>
    <p style="color: #64748b; font-size: 12px;">&copy; {year} Lingua</p>
  </body>
</html>
"""


def _sender() -> str:
    address = (settings.MAIL_FROM_ADDRESS or settings.SMTP_USERNAME or "").strip()
    if not address:
        raise EmailDeliveryError("Sender address is not configured (MAIL_FROM_ADDRESS)")
    return address


def build_welcome_message(to_email: str, first_name: str) -> MIMEMultipart:
    """Build the multipart (plain text + HTML) welcome email."""
    message = MIMEMultipart("alternative")
    message["Subject"] = settings.WELCOME_EMAIL_SUBJECT
    message["From"] = formataddr((settings.MAIL_FROM_NAME, _sender()))
    message["To"] = to_email

    name = first_name.strip() or "there"
    message.attach(MIMEText(WELCOME_TEXT_TEMPLATE.format(first_name=name), "plain", "utf-8"))
    message.attach(MIMEText(
        WELCOME_HTML_TEMPLATE.format(first_name=html.escape(name), year=now_utc().year),
        "html",
        "utf-8",
    ))
    return message


def send_email(to_email: str, message: MIMEMultipart) -> None:
    """
    Deliver a prepared message through the configured SMTP server.
    Raises EmailDeliveryError on any SMTP or connection failure.
    """
    host = (settings.SMTP_HOST or "").strip()
    if not host:
        logger.error("SMTP not configured (SMTP_HOST missing)")
        raise EmailDeliveryError("SMTP server is not configured")

    sender_address = _sender()
    smtp_class = smtplib.SMTP_SSL if settings.SMTP_USE_SSL else smtplib.SMTP

    logger.info(
        f"Sending email to {to_email} | SMTP: {host}:{settings.SMTP_PORT} | "
        f"TLS: {settings.SMTP_USE_TLS} | SSL: {settings.SMTP_USE_SSL}"
    )
    try:
        with smtp_class(host, settings.SMTP_PORT, timeout=settings.SMTP_TIMEOUT_SECONDS) as server:
            if settings.SMTP_USE_TLS and not settings.SMTP_USE_SSL:
                server.starttls()

            if settings.SMTP_USERNAME and settings.SMTP_PASSWORD:
                server.login(settings.SMTP_USERNAME, settings.SMTP_PASSWORD)

            server.sendmail(sender_address, [to_email], message.as_string())
    # Non-ASCII addresses fail to encode without SMTPUTF8 (UnicodeEncodeError)
    except (smtplib.SMTPException, OSError, UnicodeError) as e:
        logger.error(f"Failed to send email to {to_email}: {e}")
        raise EmailDeliveryError("Failed to send email", details=str(e)) from e

    logger.info(f"Email sent successfully to {to_email}")


def send_welcome_email(to_email: str, first_name: str) -> None:
    """Send the early access welcome email to a new subscriber."""
    message = build_welcome_message(to_email, first_name)
    send_email(to_email, message)
