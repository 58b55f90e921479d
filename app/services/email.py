"""
Error reporting by e-mail
Sends the traceback of unhandled request errors to the configured recipients
"""

import os
import smtplib
import logging
import traceback
from email.mime.text import MIMEText
from datetime import datetime

logger = logging.getLogger(__name__)


class EmailService:
    """Service for sending error reports via SMTP"""

    def __init__(self):
        self.enabled = os.getenv("ENABLE_ERROR_EMAILS", "false").lower() in {
            "1",
            "true",
            "yes",
        }
        self.smtp_host = os.getenv("SMTP_HOST")
        self.smtp_port = int(os.getenv("SMTP_PORT", "587"))
        self.smtp_user = os.getenv("SMTP_USER")
        self.smtp_pass = os.getenv("SMTP_PASS")
        self.smtp_use_tls = os.getenv("SMTP_USE_TLS", "true").lower() in {
            "1",
            "true",
            "yes",
        }
        self.from_addr = os.getenv("ERROR_FROM", "errors@sportsclub.local")
        self.to_addrs = [
            addr.strip()
            for addr in os.getenv("ERROR_TO", "").split(",")
            if addr.strip()
        ]

    def is_configured(self) -> bool:
        return bool(
            self.enabled
            and self.smtp_host
            and self.smtp_user
            and self.smtp_pass
            and self.to_addrs
        )

    def build_error_message(self, error_data: dict) -> MIMEText:
        """
        Build the plain-text report

        Args:
            error_data: path, method, client, user, exception, timestamp
        """
        exception = error_data.get("exception")
        if exception is not None:
            trace = "".join(
                traceback.format_exception(
                    type(exception), exception, exception.__traceback__
                )
            )
        else:
            trace = "No traceback available"

        body = (
            f"Time:     {error_data.get('timestamp', datetime.utcnow().isoformat())} UTC\n"
            f"Endpoint: {error_data.get('method', '?')} {error_data.get('path', '?')}\n"
            f"User:     {error_data.get('user', 'Anonymous')}\n"
            f"Client:   {error_data.get('client', 'unknown')}\n\n"
            f"{trace}"
        )

        msg = MIMEText(body, "plain", "utf-8")
        msg["Subject"] = f"[Sports Club API][{os.getenv('ENV', 'development')}] ERROR"
        msg["From"] = self.from_addr
        msg["To"] = ", ".join(self.to_addrs)
        return msg

    def send_error_email(self, error_data: dict) -> bool:
        if not self.is_configured():
            return False

        try:
            msg = self.build_error_message(error_data)
            server = smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=10)
            if self.smtp_use_tls:
                server.starttls()
            server.login(self.smtp_user, self.smtp_pass)
            server.send_message(msg)
            server.quit()
            logger.info(f"Error email sent to {', '.join(self.to_addrs)}")
            return True

        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send error email: {e}")
            return False


# Global email service instance
email_service = EmailService()
