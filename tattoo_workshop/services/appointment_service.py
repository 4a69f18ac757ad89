# tattoo_workshop/services/appointment_service.py
import logging
from typing import Protocol

from fastapi import HTTPException, status
from sqlmodel import Session

from tattoo_workshop.models.appointment import Appointment
from tattoo_workshop.repositories.appointment_repo import AppointmentRepository
from tattoo_workshop.repositories.customer_repo import CustomerRepository
from tattoo_workshop.schemas.appointment import (
    AppointmentCreate,
    AppointmentUpdate,
    AppointmentWithCustomerRead,
)
from tattoo_workshop.services.notification_queue import (
    CANCELLATION,
    CONFIRMATION,
    RESCHEDULED,
)

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def enqueue(self, kind: str, appointment_id: int, old_date=None): ...


class AppointmentService:
    """
    Business logic for appointments.

    Responsibilities:
      - CRUD with customer existence checks
      - decide which customer email an edit triggers:
          * status moves into "cancelled"      -> cancellation
          * otherwise, appointment_date moved  -> rescheduling
          * anything else                      -> nothing
      - hand emails to the notifier; never wait for delivery
    """

    def __init__(
        self,
        repo: AppointmentRepository,
        customer_repo: CustomerRepository,
    ):
        self.repo = repo
        self.customer_repo = customer_repo

    # ----- Helpers -----

    @staticmethod
    def _notify(notifier: Notifier, kind: str, appointment_id: int, **kwargs) -> None:
        try:
            notifier.enqueue(kind, appointment_id, **kwargs)
        except Exception:
            # The appointment is already saved; a lost email must not fail the request.
            logger.exception(
                f"Failed to queue {kind} email",
                extra={"appointment_id": appointment_id},
            )

    # ----- Queries -----

    def list_appointments(
        self,
        session: Session,
        status_filter: str | None = None,
    ) -> list[AppointmentWithCustomerRead]:
        rows = self.repo.list_with_customers(session, status=status_filter)
        return [
            AppointmentWithCustomerRead(
                **appointment.model_dump(),
                customer_name=customer.name,
                customer_email=customer.email,
            )
            for appointment, customer in rows
        ]

    def get_appointment(self, session: Session, appointment_id: int) -> Appointment:
        appointment = self.repo.get_by_id(session, appointment_id)
        if not appointment:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Appointment not found",
            )
        return appointment

    # ----- Mutations -----

    def create_appointment(
        self,
        session: Session,
        payload: AppointmentCreate,
        notifier: Notifier,
    ) -> Appointment:
        """
        Book an appointment (status "scheduled") and queue the
        confirmation email.
        """
        if self.customer_repo.get_by_id(session, payload.customer_id) is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Customer not found",
            )

        appointment = Appointment(**payload.model_dump(), status="scheduled")
        appointment = self.repo.create(session, appointment)

        self._notify(notifier, CONFIRMATION, appointment.id)
        return appointment

    def update_appointment(
        self,
        session: Session,
        appointment_id: int,
        payload: AppointmentUpdate,
        notifier: Notifier,
    ) -> Appointment:
        appointment = self.get_appointment(session, appointment_id)
        old_status = appointment.status
        old_date = appointment.appointment_date

        for name, value in payload.model_dump(exclude_unset=True).items():
            if value is None and name != "notes":
                continue
            setattr(appointment, name, value)

        appointment = self.repo.update(session, appointment)

        if appointment.status == "cancelled" and old_status != "cancelled":
            self._notify(notifier, CANCELLATION, appointment.id)
        elif appointment.appointment_date != old_date:
            self._notify(notifier, RESCHEDULED, appointment.id, old_date=old_date)

        return appointment

    def delete_appointment(self, session: Session, appointment_id: int) -> None:
        appointment = self.get_appointment(session, appointment_id)
        self.repo.delete(session, appointment)
