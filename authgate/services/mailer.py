"""Outgoing email delivery over SMTP."""

import logging
from email.message import EmailMessage

import aiosmtplib

from authgate.config import Settings, get_settings
from authgate.errors import DeliveryError

logger = logging.getLogger(__name__)


class EmailSender:
    """Sends plain-text messages through the configured SMTP server."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    def build_message(self, to_address: str, subject: str, body: str) -> EmailMessage:
        """Create the MIME message for a single recipient."""
        message = EmailMessage()
        if self.settings.sender_address:
            message["From"] = self.settings.sender_address
        message["To"] = to_address
        message["Subject"] = subject
        message.set_content(body)
        return message

    async def send(self, to_address: str, subject: str, body: str) -> None:
        """Deliver one message. Raises DeliveryError on any SMTP or network failure."""
        message = self.build_message(to_address, subject, body)
        try:
            await aiosmtplib.send(
                message,
                hostname=self.settings.smtp_host,
                port=self.settings.smtp_port,
                username=self.settings.smtp_username,
                password=self.settings.smtp_password,
                use_tls=self.settings.smtp_use_tls,
                start_tls=self.settings.smtp_start_tls,
                timeout=self.settings.smtp_timeout,
            )
        except (aiosmtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email to {to_address}: {e}")
            raise DeliveryError() from e
        logger.info(f"Email sent to {to_address}")


def get_email_sender() -> EmailSender:
    """Get email sender instance."""
    return EmailSender()
