# tattoo_workshop/services/notification_queue.py
"""
Outbound queue for appointment-triggered emails.

Routes enqueue a job and return immediately; a worker thread delivers
it through EmailService with its own database session. Transport
failures are retried with exponential backoff, configuration and
template failures are dropped after logging. Jobs waiting out a backoff
sit in a heap keyed by due time, so they never hold up fresh jobs.
"""

import heapq
import itertools
import logging
import queue
import threading
import time
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from typing import Callable

from sqlmodel import Session

from tattoo_workshop.core.config import get_settings
from tattoo_workshop.database import new_session
from tattoo_workshop.repositories.appointment_repo import AppointmentRepository
from tattoo_workshop.repositories.customer_repo import CustomerRepository
from tattoo_workshop.repositories.email_repo import EmailRepository
from tattoo_workshop.repositories.setting_repo import SettingRepository
from tattoo_workshop.services.email_service import EmailResult, EmailService
from tattoo_workshop.services.settings_service import SettingsService

logger = logging.getLogger(__name__)

CONFIRMATION = "confirmation"
CANCELLATION = "cancellation"
RESCHEDULED = "rescheduled"

JOB_KINDS = (CONFIRMATION, CANCELLATION, RESCHEDULED)


@dataclass
class NotificationJob:
    kind: str
    appointment_id: int
    old_date: datetime | None = None
    attempts: int = 0
    not_before: float = 0.0


class NotificationQueue:
    def __init__(
        self,
        email_service: EmailService,
        max_attempts: int = 3,
        backoff_seconds: float = 30.0,
        session_factory: Callable[[], Session] = new_session,
        appointment_repo: AppointmentRepository | None = None,
        customer_repo: CustomerRepository | None = None,
    ):
        self.email_service = email_service
        self.max_attempts = max_attempts
        self.backoff_seconds = backoff_seconds
        self.session_factory = session_factory
        self.appointment_repo = appointment_repo or AppointmentRepository()
        self.customer_repo = customer_repo or CustomerRepository()
        self._queue: queue.Queue[NotificationJob] = queue.Queue()
        self._delayed: list[tuple[float, int, NotificationJob]] = []
        self._delayed_lock = threading.Lock()
        self._sequence = itertools.count()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    # ----- Producer side -----

    def enqueue(
        self,
        kind: str,
        appointment_id: int,
        old_date: datetime | None = None,
    ) -> NotificationJob:
        if kind not in JOB_KINDS:
            raise ValueError(f"Unknown notification kind: {kind}")
        job = NotificationJob(kind=kind, appointment_id=appointment_id, old_date=old_date)
        self._queue.put(job)
        logger.debug(f"Queued {kind} email for appointment {appointment_id}")
        return job

    def pending(self) -> int:
        """Jobs not yet delivered, including those waiting on a retry backoff."""
        with self._delayed_lock:
            delayed = len(self._delayed)
        return self._queue.qsize() + delayed

    # ----- Worker lifecycle -----

    def start(self) -> None:
        if self._thread is not None:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run,
            name="notification-worker",
            daemon=True,
        )
        self._thread.start()
        logger.info("Notification worker started")

    def stop(self, timeout: float | None = 5.0) -> None:
        thread = self._thread
        if thread is None:
            return
        self._stop_event.set()
        self._thread = None
        thread.join(timeout)
        logger.info("Notification worker stopped")

    def _run(self) -> None:
        while not self._stop_event.is_set():
            self.process_next(timeout=1.0)

    # ----- Consumer side -----

    def process_next(self, timeout: float | None = None) -> bool:
        """
        Deliver one job.

        Retries whose backoff has elapsed are moved onto the queue first,
        and the wait never runs past the next retry's due time.

        Args:
            timeout: seconds to wait for a job; None returns at once
                     when the queue is empty.

        Returns:
            False if no job was available.
        """
        next_due = self._promote_due()
        if timeout is not None and next_due is not None:
            timeout = min(timeout, next_due)
        try:
            if timeout is None:
                job = self._queue.get_nowait()
            else:
                job = self._queue.get(timeout=timeout)
        except queue.Empty:
            return False

        try:
            self._handle(job)
        finally:
            self._queue.task_done()
        return True

    def drain(self) -> int:
        """
        Process jobs until nothing is pending (used by tests and scripts).

        Waits out retry backoffs; returns early if the worker is stopping.
        """
        processed = 0
        while True:
            if self.process_next():
                processed += 1
                continue
            next_due = self._promote_due()
            if next_due is None:
                if self._queue.empty():
                    return processed
                continue
            if self._stop_event.wait(next_due):
                return processed

    def _schedule_retry(self, job: NotificationJob, delay: float) -> None:
        job.not_before = time.monotonic() + delay
        with self._delayed_lock:
            heapq.heappush(self._delayed, (job.not_before, next(self._sequence), job))

    def _promote_due(self) -> float | None:
        """Queue every retry that is due; seconds until the next one, or None."""
        now = time.monotonic()
        with self._delayed_lock:
            while self._delayed and self._delayed[0][0] <= now:
                _, _, job = heapq.heappop(self._delayed)
                self._queue.put(job)
            if not self._delayed:
                return None
            return max(self._delayed[0][0] - now, 0.0)

    def _handle(self, job: NotificationJob) -> None:
        job.attempts += 1
        try:
            result = self._dispatch(job)
        except Exception as e:
            logger.exception(f"Unexpected error sending {job.kind} email")
            result = EmailResult(False, str(e), retryable=True)

        if result.success:
            return

        if result.retryable and job.attempts < self.max_attempts:
            self._schedule_retry(job, self.backoff_seconds * 2 ** (job.attempts - 1))
            logger.warning(
                f"Retrying {job.kind} email for appointment {job.appointment_id} "
                f"(attempt {job.attempts}/{self.max_attempts}): {result.message}",
                extra={"appointment_id": job.appointment_id},
            )
            return

        logger.error(
            f"Giving up on {job.kind} email for appointment {job.appointment_id}: "
            f"{result.message}",
            extra={"appointment_id": job.appointment_id},
        )

    def _dispatch(self, job: NotificationJob) -> EmailResult:
        with self.session_factory() as session:
            appointment = self.appointment_repo.get_by_id(session, job.appointment_id)
            if appointment is None:
                return EmailResult(False, "Appointment no longer exists")
            customer = self.customer_repo.get_by_id(session, appointment.customer_id)
            if customer is None:
                return EmailResult(False, "Customer not found")

            if job.kind == CONFIRMATION:
                return self.email_service.send_confirmation(session, appointment, customer)
            if job.kind == CANCELLATION:
                return self.email_service.send_cancellation(session, appointment, customer)
            return self.email_service.send_rescheduling(
                session, appointment, customer, job.old_date or appointment.appointment_date
            )


# -------- Process-wide wiring --------


@lru_cache
def get_email_service() -> EmailService:
    """Process-wide EmailService shared by the queue and the scheduler."""
    settings = get_settings()
    return EmailService(
        EmailRepository(),
        AppointmentRepository(),
        SettingsService(SettingRepository()),
        missing_variable_policy=settings.TEMPLATE_MISSING_VARIABLE_POLICY,
    )


@lru_cache
def get_notification_queue() -> NotificationQueue:
    """FastAPI dependency returning the process-wide queue."""
    settings = get_settings()
    return NotificationQueue(
        get_email_service(),
        max_attempts=settings.NOTIFICATION_MAX_ATTEMPTS,
        backoff_seconds=settings.NOTIFICATION_BACKOFF_SECONDS,
    )
