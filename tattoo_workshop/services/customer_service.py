# tattoo_workshop/services/customer_service.py
from fastapi import HTTPException, status
from sqlmodel import Session

from tattoo_workshop.models.customer import Customer
from tattoo_workshop.repositories.customer_repo import CustomerRepository
from tattoo_workshop.schemas.customer import CustomerCreate, CustomerUpdate


class CustomerService:
    """
    Business logic for Customer.

    The only rule beyond plain CRUD is email uniqueness, checked up
    front so the client gets a readable 400 instead of an integrity error.
    """

    def __init__(self, repo: CustomerRepository):
        self.repo = repo

    def _ensure_email_free(
        self,
        session: Session,
        email: str,
        exclude_id: int | None = None,
    ) -> None:
        existing = self.repo.get_by_email(session, email)
        if existing and existing.id != exclude_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Customer with this email already exists",
            )

    def list_customers(self, session: Session) -> list[Customer]:
        return self.repo.list(session)

    def get_customer(self, session: Session, customer_id: int) -> Customer:
        customer = self.repo.get_by_id(session, customer_id)
        if not customer:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Customer not found",
            )
        return customer

    def create_customer(self, session: Session, payload: CustomerCreate) -> Customer:
        self._ensure_email_free(session, payload.email)
        customer = Customer(**payload.model_dump())
        return self.repo.create(session, customer)

    def update_customer(
        self,
        session: Session,
        customer_id: int,
        payload: CustomerUpdate,
    ) -> Customer:
        customer = self.get_customer(session, customer_id)
        changes = payload.model_dump(exclude_unset=True)

        if changes.get("email") and changes["email"] != customer.email:
            self._ensure_email_free(session, changes["email"], exclude_id=customer.id)

        for name, value in changes.items():
            if name in ("name", "email") and value is None:
                continue
            setattr(customer, name, value)

        return self.repo.update(session, customer)

    def delete_customer(self, session: Session, customer_id: int) -> None:
        customer = self.get_customer(session, customer_id)
        self.repo.delete(session, customer)
