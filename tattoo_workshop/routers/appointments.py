# tattoo_workshop/routers/appointments.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from tattoo_workshop.core.auth import get_current_user
from tattoo_workshop.database import get_session
from tattoo_workshop.repositories.appointment_repo import AppointmentRepository
from tattoo_workshop.repositories.customer_repo import CustomerRepository
from tattoo_workshop.schemas.appointment import (
    AppointmentCreate,
    AppointmentRead,
    AppointmentStatus,
    AppointmentUpdate,
    AppointmentWithCustomerRead,
)
from tattoo_workshop.services.appointment_service import AppointmentService
from tattoo_workshop.services.notification_queue import (
    NotificationQueue,
    get_notification_queue,
)

router = APIRouter(
    prefix="/appointments",
    tags=["Appointments"],
    dependencies=[Depends(get_current_user)],
)

repo = AppointmentRepository()
service = AppointmentService(repo, CustomerRepository())


@router.get("", response_model=list[AppointmentWithCustomerRead])
def list_appointments(
    status: AppointmentStatus | None = None,
    session: Session = Depends(get_session),
):
    """
    Appointments joined with customer name/email, latest date first.

    Query params (optional):
      - status: scheduled | completed | cancelled
    """
    return service.list_appointments(session, status_filter=status)


@router.post(
    "",
    response_model=AppointmentRead,
    status_code=status.HTTP_201_CREATED,
)
def create_appointment(
    payload: AppointmentCreate,
    session: Session = Depends(get_session),
    notifier: NotificationQueue = Depends(get_notification_queue),
):
    """
    Book an appointment.

    A confirmation email is queued; the response does not wait for it.
    """
    return service.create_appointment(session, payload, notifier)


@router.get("/{appointment_id}", response_model=AppointmentRead)
def get_appointment(appointment_id: int, session: Session = Depends(get_session)):
    return service.get_appointment(session, appointment_id)


@router.put("/{appointment_id}", response_model=AppointmentRead)
def update_appointment(
    appointment_id: int,
    payload: AppointmentUpdate,
    session: Session = Depends(get_session),
    notifier: NotificationQueue = Depends(get_notification_queue),
):
    """
    Partial update.

    Cancelling queues a cancellation email; moving the date queues a
    rescheduling email with the previous date.
    """
    return service.update_appointment(session, appointment_id, payload, notifier)


@router.delete("/{appointment_id}")
def delete_appointment(appointment_id: int, session: Session = Depends(get_session)):
    service.delete_appointment(session, appointment_id)
    return {"success": True, "message": "Appointment deleted successfully"}
