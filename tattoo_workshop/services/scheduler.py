# tattoo_workshop/services/scheduler.py
"""
Reminder scheduler.

A single daemon thread wakes every `interval_minutes`, asks the email
service for appointments that are due a 24h or 1-week reminder, and
sends them one by one. The first check runs immediately on start.

Failure semantics:
  - a failed send is logged and the loop moves on to the next one
  - an error in the whole tick is logged; the next tick is the retry
"""

import logging
import threading
from datetime import datetime
from typing import Callable

from sqlmodel import Session

from tattoo_workshop.database import new_session
from tattoo_workshop.services.email_service import (
    REMINDER_1WEEK,
    REMINDER_24H,
    EmailService,
)

logger = logging.getLogger(__name__)


class ReminderScheduler:
    def __init__(
        self,
        email_service: EmailService,
        interval_minutes: float = 60,
        session_factory: Callable[[], Session] = new_session,
    ):
        self.email_service = email_service
        self.interval_minutes = interval_minutes
        self.session_factory = session_factory
        self._thread: threading.Thread | None = None
        self._stop_event = threading.Event()
        self._lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        return self._thread is not None

    def start(self) -> None:
        """Start the timer thread; no-op if already running."""
        with self._lock:
            if self._thread is not None:
                logger.info("Email scheduler already running")
                return

            logger.info(
                f"Starting email scheduler (checking every {self.interval_minutes} minutes)"
            )
            self._stop_event.clear()
            self._thread = threading.Thread(
                target=self._run,
                name="reminder-scheduler",
                daemon=True,
            )
            self._thread.start()

    def stop(self, timeout: float | None = 5.0) -> None:
        """Stop the timer thread and wait for an in-flight tick to finish."""
        with self._lock:
            thread = self._thread
            if thread is None:
                return
            self._stop_event.set()
            self._thread = None

        thread.join(timeout)
        logger.info("Email scheduler stopped")

    def _run(self) -> None:
        interval_seconds = self.interval_minutes * 60
        self.process_reminders()
        while not self._stop_event.wait(interval_seconds):
            self.process_reminders()

    def process_reminders(self, now: datetime | None = None) -> tuple[int, int]:
        """
        Run one tick.

        Returns:
            (sent 24h reminders, sent 1-week reminders)
        """
        sent_24h = 0
        sent_1week = 0
        try:
            logger.info("Checking for pending reminders...")
            with self.session_factory() as session:
                pending = self.email_service.get_pending_reminders(session, now)

                for reminder_type, due in (
                    (REMINDER_24H, pending.reminder_24h),
                    (REMINDER_1WEEK, pending.reminder_1week),
                ):
                    for appointment, customer in due:
                        logger.info(
                            f"Sending {reminder_type} reminder for appointment "
                            f"{appointment.id} to {customer.email}",
                            extra={"appointment_id": appointment.id},
                        )
                        result = self.email_service.send_reminder(
                            session, appointment, customer, reminder_type
                        )
                        if not result.success:
                            logger.warning(
                                f"Reminder for appointment {appointment.id} not sent: "
                                f"{result.message}",
                                extra={"appointment_id": appointment.id},
                            )
                            continue
                        if reminder_type == REMINDER_24H:
                            sent_24h += 1
                        else:
                            sent_1week += 1

            if sent_24h or sent_1week:
                logger.info(
                    f"Sent {sent_24h} 24h reminders and {sent_1week} 1-week reminders"
                )
        except Exception:
            logger.exception("Error processing reminders")

        return sent_24h, sent_1week
