import smtplib
import requests
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from typing import Tuple

from app.core.config import settings
from app.core.logger import logger
from app.models.booking import Location

SENDGRID_URL = "https://api.sendgrid.com/v3/mail/send"

def _format_amount(value: float) -> str:
    value = float(value)
    return str(int(value)) if value.is_integer() else str(value)

def build_invoice(service_name: str, total_cost: float, duration: float, location: Location) -> Tuple[str, str]:
    """Returns (subject, body) of the invoice email."""
    subject = f"Invoice for {service_name} - Care.xyz"
    body = (
        "Thank you for your booking!\n"
        "\n"
        f"Service: {service_name}\n"
        f"Duration: {_format_amount(duration)} hours\n"
        f"Location: {location.area}, {location.city}\n"
        f"Total Cost: ${_format_amount(total_cost)}\n"
        "\n"
        "Status: Pending\n"
    )
    return subject, body

def _send_via_sendgrid(subject: str, body: str, to_email: str) -> bool:
    payload = {
        "personalizations": [{"to": [{"email": to_email}]}],
        "from": {"email": settings.EMAIL_USER},
        "subject": subject,
        "content": [{"type": "text/plain", "value": body}],
    }
    headers = {
        "Authorization": f"Bearer {settings.SENDGRID_API_KEY}",
        "Content-Type": "application/json"
    }

    try:
        response = requests.post(SENDGRID_URL, json=payload, headers=headers, timeout=10)
        if response.status_code in (200, 202):
            logger.info(f"✅ Email sent to {to_email} via SendGrid: '{subject}'")
            return True
        logger.error(f"❌ SendGrid Error {response.status_code}: {response.text}")
        return False
    except Exception as e:
        logger.error(f"❌ Exception sending email via SendGrid: {e}")
        return False

def send_email(subject: str, body: str, to_email: str) -> bool:
    """
    Sends a plain-text email, through SendGrid when an API key is configured, SMTP otherwise.
    Returns: True if successful, False otherwise.
    """
    if not to_email:
        logger.error("❌ No recipient email given.")
        return False

    if not settings.EMAIL_USER:
        logger.error("❌ EMAIL_USER missing in .env.")
        return False

    if settings.SENDGRID_API_KEY:
        return _send_via_sendgrid(subject, body, to_email)

    if not settings.EMAIL_PASS:
        logger.error("❌ SMTP credentials missing in .env.")
        return False

    try:
        msg = MIMEMultipart()
        msg['From'] = settings.EMAIL_USER
        msg['To'] = to_email
        msg['Subject'] = subject

        msg.attach(MIMEText(body, 'plain'))

        with smtplib.SMTP(settings.SMTP_SERVER, settings.SMTP_PORT, timeout=10) as server:
            server.starttls()
            server.login(settings.EMAIL_USER, settings.EMAIL_PASS)
            server.sendmail(settings.EMAIL_USER, to_email, msg.as_string())

        logger.info(f"✅ Email sent to {to_email} with subject: '{subject}'")
        return True
    except Exception as e:
        logger.error(f"❌ Failed to send email: {e}")
        return False

def send_invoice(user_email: str, service_name: str, total_cost: float, duration: float, location: Location) -> bool:
    subject, body = build_invoice(service_name, total_cost, duration, location)
    logger.info(f"📤 Sending invoice for {service_name} to {user_email}")
    return send_email(subject, body, user_email)
