"""Tests for the outbound notification queue."""

import time
from datetime import datetime

import pytest

from tattoo_workshop.repositories.email_repo import EmailRepository
from tattoo_workshop.services.notification_queue import (
    CANCELLATION,
    CONFIRMATION,
    RESCHEDULED,
    NotificationQueue,
)

from helpers import make_appointment, make_customer

WHEN = datetime(2030, 5, 6, 14, 30)


@pytest.fixture
def notification_queue(email_service):
    return NotificationQueue(email_service, max_attempts=3, backoff_seconds=0)


class TestNotificationQueue:
    def test_unknown_kind_is_rejected(self, notification_queue):
        with pytest.raises(ValueError):
            notification_queue.enqueue("reminder", 1)

    def test_confirmation_is_delivered(
        self, session, notification_queue, sender, configure_email
    ):
        configure_email()
        customer = make_customer(session)
        appointment = make_appointment(session, customer, WHEN)

        notification_queue.enqueue(CONFIRMATION, appointment.id)
        assert notification_queue.drain() == 1

        rows = EmailRepository().list_for_appointment(session, appointment.id)
        assert [r.type for r in rows] == ["confirmation"]

    def test_rescheduling_uses_old_date(
        self, session, notification_queue, sender, configure_email
    ):
        configure_email()
        customer = make_customer(session)
        appointment = make_appointment(session, customer, WHEN)

        notification_queue.enqueue(RESCHEDULED, appointment.id, old_date=datetime(2030, 5, 1, 10, 0))
        notification_queue.drain()

        body = sender.call_args.args[3]
        assert "Wednesday, May 01, 2030" in body
        assert "Monday, May 06, 2030" in body

    def test_transport_failures_are_retried(
        self, session, notification_queue, sender, configure_email
    ):
        configure_email()
        sender.side_effect = [OSError("timeout"), OSError("timeout"), None]
        customer = make_customer(session)
        appointment = make_appointment(session, customer, WHEN)

        notification_queue.enqueue(CANCELLATION, appointment.id)
        assert notification_queue.drain() == 3

        assert sender.call_count == 3
        rows = EmailRepository().list_for_appointment(session, appointment.id)
        assert [r.type for r in rows] == ["cancellation"]

    def test_gives_up_after_max_attempts(
        self, session, notification_queue, sender, configure_email
    ):
        configure_email()
        sender.side_effect = OSError("timeout")
        customer = make_customer(session)
        appointment = make_appointment(session, customer, WHEN)

        notification_queue.enqueue(CANCELLATION, appointment.id)
        notification_queue.drain()

        assert sender.call_count == 3
        assert notification_queue.pending() == 0

    def test_configuration_failures_are_not_retried(
        self, session, notification_queue, sender
    ):
        customer = make_customer(session)
        appointment = make_appointment(session, customer, WHEN)

        notification_queue.enqueue(CONFIRMATION, appointment.id)

        assert notification_queue.drain() == 1
        sender.assert_not_called()

    def test_missing_appointment_is_dropped(self, notification_queue, sender, configure_email):
        configure_email()

        notification_queue.enqueue(CONFIRMATION, 999)

        assert notification_queue.drain() == 1
        sender.assert_not_called()

    def test_backed_off_retry_does_not_block_new_jobs(
        self, session, email_service, sender, configure_email
    ):
        configure_email()
        sender.side_effect = [OSError("timeout"), None]
        notification_queue = NotificationQueue(email_service, max_attempts=3, backoff_seconds=30)
        customer = make_customer(session)
        cancelled = make_appointment(session, customer, WHEN, status="cancelled")
        booked = make_appointment(session, customer, datetime(2030, 5, 7, 11, 0))

        notification_queue.enqueue(CANCELLATION, cancelled.id)
        assert notification_queue.process_next() is True

        notification_queue.enqueue(CONFIRMATION, booked.id)
        started = time.monotonic()
        assert notification_queue.process_next(timeout=1.0) is True

        assert time.monotonic() - started < 5
        rows = EmailRepository().list_for_appointment(session, booked.id)
        assert [r.type for r in rows] == ["confirmation"]
        assert notification_queue.pending() == 1
