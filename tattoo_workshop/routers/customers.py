# tattoo_workshop/routers/customers.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from tattoo_workshop.core.auth import get_current_user
from tattoo_workshop.database import get_session
from tattoo_workshop.repositories.customer_repo import CustomerRepository
from tattoo_workshop.schemas.customer import CustomerCreate, CustomerRead, CustomerUpdate
from tattoo_workshop.services.customer_service import CustomerService

router = APIRouter(
    prefix="/customers",
    tags=["Customers"],
    dependencies=[Depends(get_current_user)],
)

repo = CustomerRepository()
service = CustomerService(repo)


@router.get("", response_model=list[CustomerRead])
def list_customers(session: Session = Depends(get_session)):
    """All customers, newest first."""
    return service.list_customers(session)


@router.post("", response_model=CustomerRead, status_code=status.HTTP_201_CREATED)
def create_customer(
    payload: CustomerCreate,
    session: Session = Depends(get_session),
):
    return service.create_customer(session, payload)


@router.get("/{customer_id}", response_model=CustomerRead)
def get_customer(customer_id: int, session: Session = Depends(get_session)):
    return service.get_customer(session, customer_id)


@router.put("/{customer_id}", response_model=CustomerRead)
def update_customer(
    customer_id: int,
    payload: CustomerUpdate,
    session: Session = Depends(get_session),
):
    return service.update_customer(session, customer_id, payload)


@router.delete("/{customer_id}")
def delete_customer(customer_id: int, session: Session = Depends(get_session)):
    service.delete_customer(session, customer_id)
    return {"success": True, "message": "Customer deleted successfully"}
