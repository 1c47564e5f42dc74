from hostel_laundry.services.notification.email_service import (
    EmailSender,
    EmailService,
    LoggingEmailSender,
    SMTPEmailSender,
    UnconfiguredEmailSender,
    create_email_sender,
)
from hostel_laundry.services.notification.notification_dispatcher import NotificationDispatcher
from hostel_laundry.services.notification.notification_service import NotificationService

__all__ = [
    "EmailSender",
    "EmailService",
    "LoggingEmailSender",
    "SMTPEmailSender",
    "UnconfiguredEmailSender",
    "create_email_sender",
    "NotificationDispatcher",
    "NotificationService",
]
