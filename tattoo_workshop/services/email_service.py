# tattoo_workshop/services/email_service.py
"""
Appointment email notifications.

Every send:
  1. loads the studio email configuration (no transport caching),
  2. renders the named template with the notification's variables,
  3. sends through SMTP,
  4. appends a "sent" row to `email_notifications`.

Failures never raise out of this module; callers get an EmailResult
and decide whether to surface or retry it.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

from sqlmodel import Session

from tattoo_workshop.core.email_client import EmailConfig, send_email
from tattoo_workshop.models.appointment import Appointment
from tattoo_workshop.models.customer import Customer
from tattoo_workshop.models.email import EmailNotification, EmailTemplate
from tattoo_workshop.repositories.appointment_repo import AppointmentRepository
from tattoo_workshop.repositories.email_repo import EmailRepository
from tattoo_workshop.services.email_templates import (
    MISSING_EMPTY,
    TemplateRenderError,
    render_template,
)
from tattoo_workshop.services.settings_service import SettingsService

logger = logging.getLogger(__name__)

REMINDER_24H = "24h"
REMINDER_1WEEK = "1week"

REMINDER_PERIODS: dict[str, str] = {
    REMINDER_24H: "24 hours",
    REMINDER_1WEEK: "1 week",
}

TEST_EMAIL_SUBJECT = "Test Email - Tattoo Workshop"
TEST_EMAIL_BODY = (
    "<h2>Email Configuration Test</h2>"
    "<p>This is a test email from Tattoo Workshop. "
    "Your email settings are working correctly!</p>"
)


@dataclass
class EmailResult:
    """
    Outcome of a send attempt.

    `retryable` is True only for transport failures; configuration and
    template problems will not fix themselves on a retry.
    """

    success: bool
    message: str | None = None
    retryable: bool = False


@dataclass
class PendingReminders:
    reminder_24h: list[tuple[Appointment, Customer]] = field(default_factory=list)
    reminder_1week: list[tuple[Appointment, Customer]] = field(default_factory=list)


def format_date(dt: datetime) -> str:
    """e.g. "Monday, May 05, 2025" """
    return dt.strftime("%A, %B %d, %Y")


def format_time(dt: datetime) -> str:
    """e.g. "14:30" """
    return dt.strftime("%H:%M")


def local_now() -> datetime:
    """Studio wall-clock now, comparable with Appointment.appointment_date."""
    return datetime.now()


class EmailService:
    def __init__(
        self,
        email_repo: EmailRepository,
        appointment_repo: AppointmentRepository,
        settings_service: SettingsService,
        missing_variable_policy: str = MISSING_EMPTY,
        sender: Callable[..., None] = send_email,
    ):
        self.email_repo = email_repo
        self.appointment_repo = appointment_repo
        self.settings_service = settings_service
        self.missing_variable_policy = missing_variable_policy
        self.sender = sender

    # ----- Templates -----

    def get_template(self, session: Session, name: str) -> EmailTemplate | None:
        return self.email_repo.get_template(session, name)

    def render(self, text: str, variables: dict[str, Any]) -> str:
        return render_template(text, variables, self.missing_variable_policy)

    # ----- Core send -----

    def _deliver(
        self,
        session: Session,
        *,
        template_name: str,
        variables: dict[str, Any],
        customer: Customer,
        appointment: Appointment | None,
        notification_type: str,
        requires_reminders: bool = False,
    ) -> EmailResult:
        config: EmailConfig = self.settings_service.get_email_config(session)

        if not config.enabled:
            logger.info("Email notifications disabled")
            return EmailResult(False, "Email notifications disabled")
        if requires_reminders and not config.reminders_enabled:
            return EmailResult(False, "Reminders disabled")
        if not config.is_configured:
            return EmailResult(False, "Email not configured")

        template = self.get_template(session, template_name)
        if template is None:
            logger.warning(f"Email template '{template_name}' not found")
            return EmailResult(False, "Template not found")

        try:
            subject = self.render(template.subject, variables)
            body = self.render(template.body, variables)
        except TemplateRenderError as e:
            logger.error(f"Cannot render template '{template_name}': {e}")
            return EmailResult(False, str(e))

        log_extra = {
            "appointment_id": appointment.id if appointment else None,
            "recipient": customer.email,
            "notification_type": notification_type,
        }

        try:
            self.sender(config, customer.email, subject, body)
        except Exception as e:
            logger.error(
                f"Failed to send {notification_type} email to {customer.email}: {e}",
                extra=log_extra,
            )
            return EmailResult(False, str(e) or e.__class__.__name__, retryable=True)

        self._log_notification(session, customer, appointment, notification_type)
        logger.info(f"Sent {notification_type} email to {customer.email}", extra=log_extra)
        return EmailResult(True)

    def _log_notification(
        self,
        session: Session,
        customer: Customer,
        appointment: Appointment | None,
        notification_type: str,
    ) -> None:
        notification = EmailNotification(
            customer_id=customer.id,
            appointment_id=appointment.id if appointment else None,
            type=notification_type,
            recipient=customer.email,
            status="sent",
            sent_at=datetime.now(timezone.utc),
        )
        try:
            self.email_repo.add_notification(session, notification)
        except Exception as e:
            # The mail went out; a lost log row must not turn it into a failure.
            session.rollback()
            logger.error(f"Failed to log {notification_type} notification: {e}")

    # ----- Notification kinds -----

    def send_confirmation(
        self,
        session: Session,
        appointment: Appointment,
        customer: Customer,
    ) -> EmailResult:
        variables = {
            "customer_name": customer.name,
            "appointment_date": format_date(appointment.appointment_date),
            "appointment_time": format_time(appointment.appointment_date),
            "artist_name": appointment.artist_name,
            "duration": appointment.duration,
            "notes": appointment.notes or "None",
        }
        return self._deliver(
            session,
            template_name="appointment_confirmation",
            variables=variables,
            customer=customer,
            appointment=appointment,
            notification_type="confirmation",
        )

    def send_reminder(
        self,
        session: Session,
        appointment: Appointment,
        customer: Customer,
        reminder_type: str = REMINDER_24H,
    ) -> EmailResult:
        if reminder_type not in REMINDER_PERIODS:
            raise ValueError(f"Unknown reminder type: {reminder_type}")

        variables = {
            "customer_name": customer.name,
            "appointment_date": format_date(appointment.appointment_date),
            "appointment_time": format_time(appointment.appointment_date),
            "artist_name": appointment.artist_name,
            "duration": appointment.duration,
            "reminder_period": REMINDER_PERIODS[reminder_type],
        }
        return self._deliver(
            session,
            template_name="appointment_reminder",
            variables=variables,
            customer=customer,
            appointment=appointment,
            notification_type=f"reminder_{reminder_type}",
            requires_reminders=True,
        )

    def send_cancellation(
        self,
        session: Session,
        appointment: Appointment,
        customer: Customer,
    ) -> EmailResult:
        variables = {
            "customer_name": customer.name,
            "appointment_date": format_date(appointment.appointment_date),
            "appointment_time": format_time(appointment.appointment_date),
            "artist_name": appointment.artist_name,
        }
        return self._deliver(
            session,
            template_name="appointment_cancellation",
            variables=variables,
            customer=customer,
            appointment=appointment,
            notification_type="cancellation",
        )

    def send_rescheduling(
        self,
        session: Session,
        appointment: Appointment,
        customer: Customer,
        old_date: datetime,
    ) -> EmailResult:
        variables = {
            "customer_name": customer.name,
            "old_appointment_date": format_date(old_date),
            "old_appointment_time": format_time(old_date),
            "new_appointment_date": format_date(appointment.appointment_date),
            "new_appointment_time": format_time(appointment.appointment_date),
            "artist_name": appointment.artist_name,
        }
        return self._deliver(
            session,
            template_name="appointment_rescheduled",
            variables=variables,
            customer=customer,
            appointment=appointment,
            notification_type="rescheduled",
        )

    def send_test_email(self, session: Session, to_email: str) -> EmailResult:
        """Send a fixed test message; not written to the notification log."""
        config = self.settings_service.get_email_config(session)
        if not config.is_configured:
            return EmailResult(False, "Email not configured")
        try:
            self.sender(config, to_email, TEST_EMAIL_SUBJECT, TEST_EMAIL_BODY)
        except Exception as e:
            logger.error(f"Failed to send test email to {to_email}: {e}")
            return EmailResult(False, str(e) or e.__class__.__name__)
        return EmailResult(True)

    # ----- Reminders -----

    def get_pending_reminders(
        self,
        session: Session,
        now: datetime | None = None,
    ) -> PendingReminders:
        """
        Appointments that are due a reminder.

        Buckets are half-open and share the now+24h boundary:
          - reminder_24h:   now       <= date < now+24h
          - reminder_1week: now+24h   <= date < now+7d
        """
        now = now or local_now()
        one_day_ahead = now + timedelta(days=1)
        one_week_ahead = now + timedelta(days=7)

        return PendingReminders(
            reminder_24h=self.appointment_repo.due_for_reminder(
                session, now, one_day_ahead, f"reminder_{REMINDER_24H}"
            ),
            reminder_1week=self.appointment_repo.due_for_reminder(
                session, one_day_ahead, one_week_ahead, f"reminder_{REMINDER_1WEEK}"
            ),
        )
