"""
Email delivery.

Senders share one contract: ``send(to, subject, html, text) -> bool``. They
report failure by returning False rather than raising, so callers can record
the outcome without error handling of their own.
"""

import re
import smtplib
import ssl
from abc import ABC, abstractmethod
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from hostel_laundry.config.settings import Settings, settings as default_settings
from hostel_laundry.core.logging import get_logger

logger = get_logger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parents[2] / "templates" / "email"

LAUNDRY_READY_SUBJECT = "Your Laundry Batch {batch_number} is Ready for Pickup!"
GENERIC_SUBJECT = "Laundry Ready for Pickup"


def html_to_text(html: str) -> str:
    return re.sub(r"\s+", " ", re.sub(r"<[^>]*>", " ", html)).strip()


class EmailSender(ABC):
    """Delivery sink for rendered emails"""

    @abstractmethod
    def send(self, to: str, subject: str, html: str, text: Optional[str] = None) -> bool:
        ...


class SMTPEmailSender(EmailSender):
    """Sends through an SMTP relay, with STARTTLS when enabled"""

    def __init__(self, config: Settings):
        self.smtp_server = config.SMTP_HOST
        self.smtp_port = config.SMTP_PORT
        self.username = config.SMTP_USER
        self.password = config.SMTP_PASSWORD
        self.use_tls = config.SMTP_TLS
        self.from_address = config.EMAIL_FROM_ADDRESS or config.SMTP_USER
        self.from_name = config.EMAIL_FROM_NAME

    def _build_message(self, to: str, subject: str, html: str, text: Optional[str]) -> MIMEMultipart:
        msg = MIMEMultipart('alternative')
        msg['Subject'] = subject
        msg['From'] = formataddr((self.from_name, self.from_address))
        msg['To'] = to
        msg.attach(MIMEText(text or html_to_text(html), 'plain', 'utf-8'))
        msg.attach(MIMEText(html, 'html', 'utf-8'))
        return msg

    def send(self, to: str, subject: str, html: str, text: Optional[str] = None) -> bool:
        msg = self._build_message(to, subject, html, text)
        try:
            with smtplib.SMTP(self.smtp_server, self.smtp_port, timeout=30) as server:
                if self.use_tls:
                    server.starttls(context=ssl.create_default_context())
                if self.username and self.password:
                    server.login(self.username, self.password)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email to {to}: {e}")
            return False

        logger.info(f"Email sent successfully to {to}")
        return True


class LoggingEmailSender(EmailSender):
    """Demo sink: logs the message and reports success"""

    def send(self, to: str, subject: str, html: str, text: Optional[str] = None) -> bool:
        logger.info(
            f"[DEMO] Email would be sent to {to}: {subject}",
            extra={"email_to": to, "email_subject": subject, "email_body": text or html_to_text(html)},
        )
        return True


class UnconfiguredEmailSender(EmailSender):
    """Live mode without SMTP settings: nothing is sent"""

    def send(self, to: str, subject: str, html: str, text: Optional[str] = None) -> bool:
        logger.warning(
            f"No email service configured; email to {to} was NOT sent. "
            "Set SMTP_HOST, SMTP_USERNAME and SMTP_PASSWORD to enable delivery.",
            extra={"email_to": to, "email_subject": subject},
        )
        return False


def create_email_sender(config: Settings, demo: bool) -> EmailSender:
    if demo:
        return LoggingEmailSender()
    if config.is_email_configured():
        return SMTPEmailSender(config)
    return UnconfiguredEmailSender()


class EmailService:
    """Renders laundry emails from templates and hands them to a sender"""

    def __init__(self, sender: EmailSender, config: Optional[Settings] = None):
        self.sender = sender
        self.settings = config or default_settings
        self.env = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            autoescape=select_autoescape(['html', 'xml']),
            trim_blocks=True,
        )

    def render(self, template_name: str, **context) -> str:
        context.setdefault("sender_name", self.settings.EMAIL_FROM_NAME)
        return self.env.get_template(template_name).render(**context)

    def send_email(self, to: str, subject: str, html: str, text: Optional[str] = None) -> bool:
        return self.sender.send(to, subject, html, text)

    def send_laundry_ready_email(
        self,
        student_email: str,
        student_name: str,
        batch_number: str,
        block: Optional[str] = None,
        room_number: Optional[str] = None,
    ) -> bool:
        context = {
            "student_name": student_name or "Student",
            "batch_number": batch_number,
            "block": block,
            "room_number": room_number,
        }
        subject = LAUNDRY_READY_SUBJECT.format(batch_number=batch_number)
        html = self.render("laundry_ready.html", **context)
        text = self.render("laundry_ready.txt", **context)
        return self.send_email(student_email, subject, html, text)

    def send_generic_email(self, to: str, message: str, subject: str = GENERIC_SUBJECT) -> bool:
        html = self.render("generic.html", message=message)
        return self.send_email(to, subject, html, message)
