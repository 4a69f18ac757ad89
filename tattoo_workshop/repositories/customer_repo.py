# tattoo_workshop/repositories/customer_repo.py
from sqlmodel import Session, select

from tattoo_workshop.models.customer import Customer


class CustomerRepository:
    """
    Data access layer for Customer.

    - Pure DB operations (CRUD + queries).
    - No FastAPI, no business logic.
    """

    def get_by_id(self, session: Session, customer_id: int) -> Customer | None:
        return session.get(Customer, customer_id)

    def get_by_email(self, session: Session, email: str) -> Customer | None:
        stmt = select(Customer).where(Customer.email == email)
        return session.exec(stmt).first()

    def list(self, session: Session) -> list[Customer]:
        stmt = select(Customer).order_by(Customer.created_at.desc(), Customer.id.desc())
        return list(session.exec(stmt).all())

    def create(self, session: Session, customer: Customer) -> Customer:
        session.add(customer)
        session.commit()
        session.refresh(customer)
        return customer

    def update(self, session: Session, customer: Customer) -> Customer:
        session.add(customer)
        session.commit()
        session.refresh(customer)
        return customer

    def delete(self, session: Session, customer: Customer) -> None:
        session.delete(customer)
        session.commit()
