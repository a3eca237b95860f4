# app/services/notification_service.py
"""
Outbound email — staff notice on new bookings, customer confirmation on accept.

send_email() never raises: every failure (unconfigured transport, refused
login, network error) comes back as a failed NotificationOutcome, and the
caller decides whether that fails its own operation.
"""

import asyncio
import html as html_lib
import smtplib
import ssl
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import formataddr
from typing import Optional

from app.config import settings
from app.models.booking import Booking
from app.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class MailMessage:
    to: str
    subject: str
    text: str
    html: Optional[str] = None
    from_name: Optional[str] = None


@dataclass
class NotificationOutcome:
    success: bool
    error: Optional[str] = None


# ── Message builders ─────────────────────────────────────────────────────────
def build_staff_notice(booking: Booking) -> MailMessage:
    """Plain-text dump of a new booking for the office inbox."""
    text = (
        f"Vehicle: {booking.vehicle}\n"
        f"Pickup Date: {booking.pickup_date}\n"
        f"Return Date: {booking.return_date}\n"
        f"Location: {booking.location}\n"
        f"Name: {booking.name}\n"
        f"Email: {booking.email}\n"
        f"Contact: {booking.contact}\n"
    )
    return MailMessage(
        to=settings.STAFF_EMAIL or settings.MAIL_SENDER or "",
        subject="New Car Booking",
        text=text,
    )


def build_confirmation(booking: Booking) -> MailMessage:
    """Customer-facing confirmation with HTML and plain-text parts."""
    business = settings.BUSINESS_NAME
    # Customer-supplied fields are escaped in the HTML part only
    safe = {attr: html_lib.escape(str(getattr(booking, attr)))
            for attr in ("name", "vehicle", "pickup_date", "return_date", "location", "contact")}
    html = f"""
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px; background-color: #f8f9fa;">
  <div style="text-align: center; background-color: #60a5fa; color: white; padding: 20px; border-radius: 10px 10px 0 0;">
    <h1 style="margin: 0; font-size: 24px;">🎉 Booking Confirmed!</h1>
  </div>
  <div style="background-color: white; padding: 30px; border-radius: 0 0 10px 10px;">
    <p style="font-size: 18px; color: #333;">Dear <strong>{safe["name"]}</strong>,</p>
    <p style="font-size: 16px; color: #555;">Great news! Your car rental booking has been <strong>accepted</strong> and confirmed.</p>
    <div style="background-color: #f0f9ff; padding: 20px; border-radius: 8px; margin: 20px 0; border-left: 4px solid #60a5fa;">
      <h3 style="color: #1e40af; margin-top: 0;">📋 Booking Details:</h3>
      <p><strong>Vehicle:</strong> {safe["vehicle"]}</p>
      <p><strong>Pickup Date:</strong> {safe["pickup_date"]}</p>
      <p><strong>Return Date:</strong> {safe["return_date"]}</p>
      <p><strong>Location:</strong> {safe["location"]}</p>
      <p><strong>Contact:</strong> {safe["contact"]}</p>
    </div>
    <p style="font-size: 16px; color: #555;">Please ensure you have the following documents ready for pickup:</p>
    <ul style="color: #555;">
      <li>Valid CNIC (National ID)</li>
      <li>Valid Driving License</li>
    </ul>
    <p style="font-size: 16px; color: #555;">If you have any questions or need to make changes, please contact us immediately.</p>
    <div style="text-align: center; margin-top: 30px; padding-top: 20px; border-top: 1px solid #e5e7eb;">
      <p style="color: #6b7280; font-size: 14px;">Thank you for choosing <strong>{html_lib.escape(business)}</strong>!</p>
      <p style="color: #6b7280; font-size: 14px;">📍 Main Office: {settings.BUSINESS_ADDRESS}</p>
      <p style="color: #6b7280; font-size: 14px;">📞 Contact: {settings.BUSINESS_PHONES}</p>
    </div>
  </div>
</div>
"""
    text = (
        f"Dear {booking.name},\n\n"
        f"Your car rental booking has been ACCEPTED and confirmed!\n\n"
        f"Booking Details:\n"
        f"- Vehicle: {booking.vehicle}\n"
        f"- Pickup Date: {booking.pickup_date}\n"
        f"- Return Date: {booking.return_date}\n"
        f"- Location: {booking.location}\n"
        f"- Contact: {booking.contact}\n\n"
        f"Please ensure you have:\n"
        f"- Valid CNIC (National ID)\n"
        f"- Valid Driving License\n\n"
        f"If you have any questions, contact us at {settings.BUSINESS_PHONES}.\n\n"
        f"Thank you for choosing {business}!\n"
        f"📍 Main Office: {settings.BUSINESS_ADDRESS}\n"
    )
    return MailMessage(
        to=booking.email,
        subject="Your Booking is Confirmed! 🚗",
        text=text,
        html=html,
        from_name=business,
    )


# ── Transport ────────────────────────────────────────────────────────────────
def _to_email_message(message: MailMessage) -> EmailMessage:
    msg = EmailMessage()
    sender = settings.MAIL_SENDER
    msg["From"] = formataddr((message.from_name, sender)) if message.from_name else sender
    msg["To"] = message.to
    msg["Subject"] = message.subject
    msg.set_content(message.text)
    if message.html:
        msg.add_alternative(message.html, subtype="html")
    return msg


def _deliver(msg: EmailMessage):
    """Blocking SMTP send. Runs in a worker thread."""
    timeout = settings.SMTP_TIMEOUT_SECONDS
    context = ssl.create_default_context()
    if settings.SMTP_USE_SSL:
        smtp = smtplib.SMTP_SSL(settings.SMTP_HOST, settings.SMTP_PORT, timeout=timeout, context=context)
    else:
        smtp = smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=timeout)
    with smtp:
        if not settings.SMTP_USE_SSL:
            smtp.starttls(context=context)
        if settings.SMTP_USER and settings.SMTP_PASSWORD:
            smtp.login(settings.SMTP_USER, settings.SMTP_PASSWORD)
        smtp.send_message(msg)


async def send_email(message: MailMessage) -> NotificationOutcome:
    """Send one message. Failure is returned, never raised."""
    if not settings.MAIL_CONFIGURED:
        logger.warning(f"[MAIL] Transport not configured — '{message.subject}' not sent")
        return NotificationOutcome(success=False, error="Email transport is not configured")
    if not message.to:
        return NotificationOutcome(success=False, error="No recipient")

    try:
        await asyncio.to_thread(_deliver, _to_email_message(message))
    except Exception as e:
        logger.error(f"[MAIL] Failed to send '{message.subject}' to {message.to}: {e}")
        return NotificationOutcome(success=False, error=str(e))

    logger.info(f"[MAIL] Sent '{message.subject}' to {message.to}")
    return NotificationOutcome(success=True)
