"""Tests for reminder selection and the scheduler tick."""

from datetime import datetime, timedelta

from tattoo_workshop.repositories.email_repo import EmailRepository
from tattoo_workshop.services.scheduler import ReminderScheduler

from helpers import make_appointment, make_customer

NOW = datetime(2030, 5, 6, 9, 0)


class TestPendingReminders:
    def test_buckets_are_half_open_and_disjoint(self, session, email_service):
        customer = make_customer(session)
        at_now = make_appointment(session, customer, NOW)
        in_23h = make_appointment(session, customer, NOW + timedelta(hours=23))
        at_24h = make_appointment(session, customer, NOW + timedelta(hours=24))
        in_3d = make_appointment(session, customer, NOW + timedelta(days=3))
        make_appointment(session, customer, NOW + timedelta(days=7))
        make_appointment(session, customer, NOW - timedelta(minutes=1))

        pending = email_service.get_pending_reminders(session, now=NOW)

        assert [a.id for a, _ in pending.reminder_24h] == [at_now.id, in_23h.id]
        assert [a.id for a, _ in pending.reminder_1week] == [at_24h.id, in_3d.id]

    def test_only_scheduled_appointments(self, session, email_service):
        customer = make_customer(session)
        make_appointment(session, customer, NOW + timedelta(hours=2), status="cancelled")
        make_appointment(session, customer, NOW + timedelta(hours=3), status="completed")

        pending = email_service.get_pending_reminders(session, now=NOW)

        assert pending.reminder_24h == []


class TestReminderScheduler:
    def test_exactly_one_reminder_across_ticks(self, session, email_service, sender, configure_email):
        configure_email()
        customer = make_customer(session)
        appointment = make_appointment(session, customer, NOW + timedelta(hours=5))
        scheduler = ReminderScheduler(email_service)

        assert scheduler.process_reminders(now=NOW) == (1, 0)
        assert scheduler.process_reminders(now=NOW + timedelta(hours=1)) == (0, 0)

        rows = EmailRepository().list_for_appointment(session, appointment.id, "reminder_24h")
        assert len(rows) == 1
        assert sender.call_count == 1

    def test_week_reminder_then_day_reminder(self, session, email_service, sender, configure_email):
        configure_email()
        customer = make_customer(session)
        appointment = make_appointment(session, customer, NOW + timedelta(days=3))
        scheduler = ReminderScheduler(email_service)

        assert scheduler.process_reminders(now=NOW) == (0, 1)
        assert scheduler.process_reminders(now=NOW + timedelta(days=2, hours=12)) == (1, 0)

        types = sorted(
            r.type for r in EmailRepository().list_for_appointment(session, appointment.id)
        )
        assert types == ["reminder_1week", "reminder_24h"]

    def test_failed_send_continues_with_next(self, session, email_service, sender, configure_email):
        configure_email()
        sender.side_effect = [OSError("connection refused"), None]
        first = make_customer(session)
        second = make_customer(session, name="Bob Smith", email="bob@example.com")
        make_appointment(session, first, NOW + timedelta(hours=1))
        make_appointment(session, second, NOW + timedelta(hours=2))
        scheduler = ReminderScheduler(email_service)

        assert scheduler.process_reminders(now=NOW) == (1, 0)
        assert sender.call_count == 2

    def test_tick_failure_is_swallowed(self, email_service):
        def broken_session():
            raise RuntimeError("database unavailable")

        scheduler = ReminderScheduler(email_service, session_factory=broken_session)

        assert scheduler.process_reminders(now=NOW) == (0, 0)

    def test_start_is_idempotent(self, email_service, caplog):
        scheduler = ReminderScheduler(email_service, interval_minutes=60)
        try:
            scheduler.start()
            with caplog.at_level("INFO"):
                scheduler.start()
            assert scheduler.is_running
            assert "Email scheduler already running" in caplog.text
        finally:
            scheduler.stop()

        assert not scheduler.is_running
