"""
Email adapter for the Castle Clothing backend.

The default implementation uses SMTP, reading credentials from Settings.
Sending is blocking, so it runs in the threadpool and is awaited by callers.
"""

from __future__ import annotations

from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
import smtplib
import ssl

from starlette.concurrency import run_in_threadpool

from .config import Settings
from .errors import ServiceError
from .logger import get_logger

logger = get_logger(__name__)


class MailError(ServiceError):
    status_code = 500
    code = "mail_error"


class SMTPMailer:
    """Send HTML e-mails through the configured SMTP relay."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def is_configured(self) -> bool:
        s = self.settings
        return bool(s.smtp_host and s.smtp_port and s.smtp_user and s.smtp_password and s.smtp_from)

    def _build_message(self, subject: str, to_email: str, html_body: str, text_body: str | None) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = self.settings.smtp_from
        msg["To"] = to_email
        plain = text_body or html_body
        msg.attach(MIMEText(plain, "plain", "utf-8"))
        msg.attach(MIMEText(html_body, "html", "utf-8"))
        return msg

    def send_sync(self, subject: str, to_email: str, html_body: str, text_body: str | None = None) -> None:
        if not self.is_configured():
            raise MailError("Configuracion SMTP ausente")
        settings = self.settings
        msg = self._build_message(subject, to_email, html_body, text_body)
        port = settings.smtp_port or 465
        try:
            if port == 465:
                context = ssl.create_default_context()
                with smtplib.SMTP_SSL(settings.smtp_host, port, context=context) as server:
                    server.login(settings.smtp_user, settings.smtp_password)
                    server.sendmail(settings.smtp_from, [to_email], msg.as_string())
            else:
                with smtplib.SMTP(settings.smtp_host, port) as server:
                    server.ehlo()
                    server.starttls(context=ssl.create_default_context())
                    server.login(settings.smtp_user, settings.smtp_password)
                    server.sendmail(settings.smtp_from, [to_email], msg.as_string())
        except (smtplib.SMTPException, OSError) as exc:
            raise MailError(f"Falla al enviar a {to_email}: {exc}") from exc
        logger.info("MAIL_SENT", extra={"to": to_email, "subject": subject})

    async def send(self, subject: str, to_email: str, html_body: str, text_body: str | None = None) -> None:
        await run_in_threadpool(self.send_sync, subject, to_email, html_body, text_body)
