# core/notifications.py
import smtplib
from email.mime.text import MIMEText
from typing import List, Optional

from core.config import settings
from core.logging_config import logger


# -----------------------------------------------------
# 📧 Send email (SMTP)
# -----------------------------------------------------
def send_email(subject: str, body: str, recipients: Optional[List[str]] = None) -> bool:
    """
    Send a plain-text email via SMTP.
    Returns False (and logs) when SMTP is not configured or there is no
    recipient; raises on delivery errors so callers decide whether to care.
    """
    recipient_list = [r for r in (recipients or []) if r]
    if not recipient_list:
        logger.warning("No recipients specified — skipping email.")
        return False

    smtp_host = settings.SMTP_HOST
    smtp_port = settings.SMTP_PORT
    smtp_user = settings.SMTP_USER
    smtp_pass = settings.SMTP_PASS

    if not all([smtp_host, smtp_port, smtp_user, smtp_pass]):
        logger.info("Email credentials missing — skipping email.")
        return False

    msg = MIMEText(body, "plain")
    msg["From"] = settings.SMTP_FROM or smtp_user
    msg["To"] = ", ".join(recipient_list)
    msg["Subject"] = subject

    with smtplib.SMTP_SSL(smtp_host, smtp_port) as server:
        server.login(smtp_user, smtp_pass)
        server.send_message(msg)

    logger.info(f"Email sent to {', '.join(recipient_list)}")
    return True


# -----------------------------------------------------
# Approval decision notice
# -----------------------------------------------------
APPROVAL_MESSAGES = {
    "approved": (
        "PropertyHub - Your account has been approved",
        "Your PropertyHub account has been approved.\n"
        "You can now sign in and manage your properties:\n{url}\n",
    ),
    "rejected": (
        "PropertyHub - Account update",
        "Unfortunately, your PropertyHub account was not approved.\n"
        "Please contact the administrator for more information.\n",
    ),
}


def notify_approval_decision(email: Optional[str], full_name: Optional[str], status: str) -> bool:
    """Best-effort notice to the account holder; never raises."""
    if status not in APPROVAL_MESSAGES or not email:
        return False

    subject, template = APPROVAL_MESSAGES[status]
    greeting = f"Hello {full_name},\n\n" if full_name else "Hello,\n\n"
    body = greeting + template.format(url=settings.FRONTEND_URL)

    try:
        return send_email(subject, body, recipients=[email])
    except Exception as e:
        logger.warning(f"Approval notice to {email} failed: {e}")
        return False
