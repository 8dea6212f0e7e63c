# =============================================================================
# lib/mailer.py - Outgoing Email
# =============================================================================
# Sends plain-text email over SMTP. Used for password reset links.
# With no SMTP_HOST configured (development) the message is logged instead.
# =============================================================================

import logging
import smtplib
from email.message import EmailMessage

from app.exceptions import EmailDeliveryError

logger = logging.getLogger(__name__)


class Mailer:
    """SMTP sender configured from settings."""

    def __init__(
        self,
        host: str = "",
        port: int = 587,
        username: str = "",
        password: str = "",
        from_email: str = "noreply@devcamper.io",
        from_name: str = "DevCamper",
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.from_email = from_email
        self.from_name = from_name

    def send(self, to: str, subject: str, body: str) -> None:
        """
        Send a message.

        Raises:
            EmailDeliveryError: If the SMTP conversation fails
        """
        if not self.host:
            logger.info(f"SMTP_HOST not set, email to {to} not sent. Subject: {subject}\n{body}")
            return

        message = EmailMessage()
        message["From"] = f"{self.from_name} <{self.from_email}>"
        message["To"] = to
        message["Subject"] = subject
        message.set_content(body)

        try:
            with smtplib.SMTP(self.host, self.port, timeout=10) as smtp:
                smtp.starttls()
                if self.username:
                    smtp.login(self.username, self.password)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email to {to}: {e}")
            raise EmailDeliveryError(str(e))

        logger.info(f"Email sent to {to}: {subject}")
