# tattoo_workshop/repositories/appointment_repo.py
from datetime import datetime

from sqlmodel import Session, select

from tattoo_workshop.models.appointment import Appointment
from tattoo_workshop.models.customer import Customer
from tattoo_workshop.models.email import EmailNotification


class AppointmentRepository:
    """
    Data access layer for Appointment.

    - Pure DB operations (CRUD + queries).
    - No FastAPI, no business logic.
    """

    def get_by_id(self, session: Session, appointment_id: int) -> Appointment | None:
        return session.get(Appointment, appointment_id)

    def list_with_customers(
        self,
        session: Session,
        status: str | None = None,
    ) -> list[tuple[Appointment, Customer]]:
        """
        Appointments joined with their customer, latest date first.
        """
        stmt = select(Appointment, Customer).join(
            Customer, Customer.id == Appointment.customer_id
        )
        if status is not None:
            stmt = stmt.where(Appointment.status == status)
        stmt = stmt.order_by(Appointment.appointment_date.desc())
        return list(session.exec(stmt).all())

    def due_for_reminder(
        self,
        session: Session,
        window_start: datetime,
        window_end: datetime,
        notification_type: str,
    ) -> list[tuple[Appointment, Customer]]:
        """
        Scheduled appointments with `window_start <= date < window_end`
        that have no "sent" notification of `notification_type` yet.
        """
        already_sent = (
            select(EmailNotification.id)
            .where(
                EmailNotification.appointment_id == Appointment.id,
                EmailNotification.type == notification_type,
                EmailNotification.status == "sent",
            )
            .exists()
        )
        stmt = (
            select(Appointment, Customer)
            .join(Customer, Customer.id == Appointment.customer_id)
            .where(
                Appointment.status == "scheduled",
                Appointment.appointment_date >= window_start,
                Appointment.appointment_date < window_end,
                ~already_sent,
            )
            .order_by(Appointment.appointment_date)
        )
        return list(session.exec(stmt).all())

    def create(self, session: Session, appointment: Appointment) -> Appointment:
        session.add(appointment)
        session.commit()
        session.refresh(appointment)
        return appointment

    def update(self, session: Session, appointment: Appointment) -> Appointment:
        session.add(appointment)
        session.commit()
        session.refresh(appointment)
        return appointment

    def delete(self, session: Session, appointment: Appointment) -> None:
        session.delete(appointment)
        session.commit()
