# =============================================================================
# tests/test_mailer.py - Mailer Tests
# =============================================================================
# Unit tests for lib/mailer.py with smtplib mocked.
#
# Run with: pytest tests/test_mailer.py -v
# =============================================================================

import smtplib
from unittest.mock import patch

import pytest

from app.exceptions import EmailDeliveryError
from lib.mailer import Mailer


class TestMailer:
    """Tests for Mailer.send."""

    def test_without_host_only_logs(self):
        """Test that no SMTP connection is made when SMTP_HOST is empty."""
        with patch("lib.mailer.smtplib.SMTP") as mock_smtp:
            Mailer(host="").send("user@gmail.com", "Subject", "Body")

        mock_smtp.assert_not_called()

    def test_sends_over_smtp(self):
        """Test STARTTLS, login and send."""
        mailer = Mailer(host="smtp.mailtrap.io", port=2525, username="u", password="p")

        with patch("lib.mailer.smtplib.SMTP") as mock_smtp:
            mailer.send("user@gmail.com", "Password reset token", "Reset link")

        mock_smtp.assert_called_once_with("smtp.mailtrap.io", 2525, timeout=10)
        smtp = mock_smtp.return_value.__enter__.return_value
        smtp.starttls.assert_called_once()
        smtp.login.assert_called_once_with("u", "p")

        message = smtp.send_message.call_args.args[0]
        assert message["To"] == "user@gmail.com"
        assert message["Subject"] == "Password reset token"
        assert message["From"] == "DevCamper <noreply@devcamper.io>"

    def test_smtp_failure(self):
        """Test that SMTP errors become EmailDeliveryError."""
        mailer = Mailer(host="smtp.mailtrap.io")

        with patch("lib.mailer.smtplib.SMTP") as mock_smtp:
            mock_smtp.return_value.__enter__.return_value.send_message.side_effect = (
                smtplib.SMTPException("rejected")
            )
            with pytest.raises(EmailDeliveryError) as exc_info:
                mailer.send("user@gmail.com", "Subject", "Body")

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Email could not be sent"
