"""Row builders shared by the service-level tests."""

from datetime import datetime

from sqlmodel import Session

from tattoo_workshop.models.appointment import Appointment
from tattoo_workshop.models.customer import Customer


def make_customer(
    session: Session,
    name: str = "Alice Johnson",
    email: str = "alice@example.com",
) -> Customer:
    customer = Customer(name=name, email=email, phone="555-0101")
    session.add(customer)
    session.commit()
    session.refresh(customer)
    return customer


def make_appointment(
    session: Session,
    customer: Customer,
    when: datetime,
    status: str = "scheduled",
    artist_name: str = "Sarah Chen",
) -> Appointment:
    appointment = Appointment(
        customer_id=customer.id,
        artist_name=artist_name,
        appointment_date=when,
        duration=120,
        status=status,
        notes="Traditional rose",
    )
    session.add(appointment)
    session.commit()
    session.refresh(appointment)
    return appointment
