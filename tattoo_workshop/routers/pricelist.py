# tattoo_workshop/routers/pricelist.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from tattoo_workshop.core.auth import get_current_user
from tattoo_workshop.database import get_session
from tattoo_workshop.repositories.catalog_repo import CatalogRepository
from tattoo_workshop.repositories.customer_repo import CustomerRepository
from tattoo_workshop.repositories.setting_repo import SettingRepository
from tattoo_workshop.schemas.catalog import (
    PricelistItemCreate,
    PricelistItemRead,
    PricelistItemUpdate,
)
from tattoo_workshop.services.catalog_service import CatalogService
from tattoo_workshop.services.settings_service import SettingsService

router = APIRouter(
    prefix="/pricelist",
    tags=["Pricelist"],
    dependencies=[Depends(get_current_user)],
)

repo = CatalogRepository()
service = CatalogService(repo, CustomerRepository(), SettingsService(SettingRepository()))


@router.get("", response_model=list[PricelistItemRead])
def list_pricelist(session: Session = Depends(get_session)):
    """Price list grouped by category, then service name."""
    return service.list_pricelist(session)


@router.post("", response_model=PricelistItemRead, status_code=status.HTTP_201_CREATED)
def create_pricelist_item(
    payload: PricelistItemCreate,
    session: Session = Depends(get_session),
):
    return service.create_pricelist_item(session, payload)


@router.get("/{item_id}", response_model=PricelistItemRead)
def get_pricelist_item(item_id: int, session: Session = Depends(get_session)):
    return service.get_pricelist_item(session, item_id)


@router.put("/{item_id}", response_model=PricelistItemRead)
def update_pricelist_item(
    item_id: int,
    payload: PricelistItemUpdate,
    session: Session = Depends(get_session),
):
    return service.update_pricelist_item(session, item_id, payload)


@router.delete("/{item_id}")
def delete_pricelist_item(item_id: int, session: Session = Depends(get_session)):
    service.delete_pricelist_item(session, item_id)
    return {"success": True, "message": "Pricelist item deleted successfully"}
