# tattoo_workshop/routers/portfolio.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from tattoo_workshop.core.auth import get_current_user
from tattoo_workshop.database import get_session
from tattoo_workshop.repositories.catalog_repo import CatalogRepository
from tattoo_workshop.repositories.customer_repo import CustomerRepository
from tattoo_workshop.repositories.setting_repo import SettingRepository
from tattoo_workshop.schemas.catalog import (
    PortfolioItemCreate,
    PortfolioItemRead,
    PortfolioItemUpdate,
)
from tattoo_workshop.services.catalog_service import CatalogService
from tattoo_workshop.services.settings_service import SettingsService

router = APIRouter(
    prefix="/portfolio",
    tags=["Portfolio"],
    dependencies=[Depends(get_current_user)],
)

repo = CatalogRepository()
service = CatalogService(repo, CustomerRepository(), SettingsService(SettingRepository()))


@router.get("", response_model=list[PortfolioItemRead])
def list_portfolio(session: Session = Depends(get_session)):
    return service.list_portfolio(session)


@router.post("", response_model=PortfolioItemRead, status_code=status.HTTP_201_CREATED)
def create_portfolio_item(
    payload: PortfolioItemCreate,
    session: Session = Depends(get_session),
):
    """
    Add a gallery entry.

    `tags` may be a list or a comma separated string.
    """
    return service.create_portfolio_item(session, payload)


@router.get("/{item_id}", response_model=PortfolioItemRead)
def get_portfolio_item(item_id: int, session: Session = Depends(get_session)):
    return service.get_portfolio_item(session, item_id)


@router.put("/{item_id}", response_model=PortfolioItemRead)
def update_portfolio_item(
    item_id: int,
    payload: PortfolioItemUpdate,
    session: Session = Depends(get_session),
):
    return service.update_portfolio_item(session, item_id, payload)


@router.delete("/{item_id}")
def delete_portfolio_item(item_id: int, session: Session = Depends(get_session)):
    service.delete_portfolio_item(session, item_id)
    return {"success": True, "message": "Portfolio item deleted successfully"}
