"""Tests for EmailService with the SMTP sender mocked out."""

import smtplib
from datetime import datetime

from tattoo_workshop.repositories.email_repo import EmailRepository
from tattoo_workshop.services.email_service import REMINDER_1WEEK, REMINDER_24H

from helpers import make_appointment, make_customer

WHEN = datetime(2030, 5, 6, 14, 30)


class TestSendPreconditions:
    def test_disabled_email_is_not_sent(self, session, email_service, sender):
        customer = make_customer(session)
        appointment = make_appointment(session, customer, WHEN)

        result = email_service.send_confirmation(session, appointment, customer)

        assert not result.success
        assert result.message == "Email notifications disabled"
        sender.assert_not_called()

    def test_missing_host_is_not_configured(self, session, email_service, sender, configure_email):
        configure_email(smtp_host="")
        customer = make_customer(session)
        appointment = make_appointment(session, customer, WHEN)

        result = email_service.send_confirmation(session, appointment, customer)

        assert result.message == "Email not configured"
        sender.assert_not_called()

    def test_missing_template(self, session, email_service, sender, configure_email):
        configure_email()
        customer = make_customer(session)
        appointment = make_appointment(session, customer, WHEN)
        repo = EmailRepository()
        session.delete(repo.get_template(session, "appointment_cancellation"))
        session.commit()

        result = email_service.send_cancellation(session, appointment, customer)

        assert result.message == "Template not found"
        assert not result.retryable

    def test_reminders_require_flag(self, session, email_service, sender, configure_email):
        configure_email(reminders_enabled=False)
        customer = make_customer(session)
        appointment = make_appointment(session, customer, WHEN)

        result = email_service.send_reminder(session, appointment, customer, REMINDER_24H)

        assert result.message == "Reminders disabled"
        sender.assert_not_called()


class TestSendKinds:
    def test_confirmation_renders_and_logs(self, session, email_service, sender, configure_email):
        configure_email()
        customer = make_customer(session)
        appointment = make_appointment(session, customer, WHEN)

        result = email_service.send_confirmation(session, appointment, customer)

        assert result.success
        config, to_email, subject, body = sender.call_args.args
        assert config.smtp_host == "smtp.example.com"
        assert to_email == "alice@example.com"
        assert "Alice Johnson" in body
        assert "Monday, May 06, 2030" in body
        assert "14:30" in body
        assert "Sarah Chen" in body
        assert "{{" not in subject + body

        rows = EmailRepository().list_for_appointment(session, appointment.id)
        assert [(r.type, r.status, r.recipient) for r in rows] == [
            ("confirmation", "sent", "alice@example.com")
        ]

    def test_reminder_types_are_logged_separately(
        self, session, email_service, sender, configure_email
    ):
        configure_email()
        customer = make_customer(session)
        appointment = make_appointment(session, customer, WHEN)

        email_service.send_reminder(session, appointment, customer, REMINDER_24H)
        email_service.send_reminder(session, appointment, customer, REMINDER_1WEEK)

        types = sorted(r.type for r in EmailRepository().list_for_appointment(session, appointment.id))
        assert types == ["reminder_1week", "reminder_24h"]
        assert "24 hours" in sender.call_args_list[0].args[3]
        assert "1 week" in sender.call_args_list[1].args[3]

    def test_rescheduling_carries_old_and_new_date(
        self, session, email_service, sender, configure_email
    ):
        configure_email()
        customer = make_customer(session)
        appointment = make_appointment(session, customer, WHEN)
        old_date = datetime(2030, 5, 1, 10, 0)

        result = email_service.send_rescheduling(session, appointment, customer, old_date)

        assert result.success
        body = sender.call_args.args[3]
        assert "Wednesday, May 01, 2030" in body
        assert "10:00" in body
        assert "Monday, May 06, 2030" in body

    def test_transport_failure_is_retryable_and_not_logged(
        self, session, email_service, sender, configure_email
    ):
        configure_email()
        sender.side_effect = smtplib.SMTPServerDisconnected("Connection unexpectedly closed")
        customer = make_customer(session)
        appointment = make_appointment(session, customer, WHEN)

        result = email_service.send_cancellation(session, appointment, customer)

        assert not result.success
        assert result.retryable
        assert "Connection unexpectedly closed" in result.message
        assert EmailRepository().list_for_appointment(session, appointment.id) == []

    def test_test_email_is_not_logged(self, session, email_service, sender, configure_email):
        configure_email()

        result = email_service.send_test_email(session, "owner@example.com")

        assert result.success
        assert sender.call_args.args[1] == "owner@example.com"
        assert EmailRepository().list_notifications(session) == []
