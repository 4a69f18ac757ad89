# tattoo_workshop/routers/generated_tattoos.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from tattoo_workshop.core.auth import get_current_user
from tattoo_workshop.database import get_session
from tattoo_workshop.repositories.catalog_repo import CatalogRepository
from tattoo_workshop.repositories.customer_repo import CustomerRepository
from tattoo_workshop.repositories.setting_repo import SettingRepository
from tattoo_workshop.schemas.catalog import (
    GeneratedTattooRead,
    TattooGenerateRequest,
    TattooGenerateResponse,
)
from tattoo_workshop.services.catalog_service import CatalogService
from tattoo_workshop.services.settings_service import SettingsService

# Mounted without a prefix: serves /generate-tattoo and /generated-tattoos
router = APIRouter(
    tags=["AI Designs"],
    dependencies=[Depends(get_current_user)],
)

repo = CatalogRepository()
service = CatalogService(repo, CustomerRepository(), SettingsService(SettingRepository()))


@router.post("/generate-tattoo", response_model=TattooGenerateResponse)
def generate_tattoo(
    payload: TattooGenerateRequest,
    session: Session = Depends(get_session),
):
    """
    Generate a tattoo design description with Gemini.

    Body:
      - prompt: free text idea from the customer
      - apiKey: optional; falls back to the stored `gemini_api_key`
      - customer_id: optional link to a customer
    """
    design = service.generate_design(session, payload)
    return TattooGenerateResponse(description=design.description, id=design.id)


@router.get("/generated-tattoos", response_model=list[GeneratedTattooRead])
def list_generated_tattoos(session: Session = Depends(get_session)):
    """Latest 50 generated designs."""
    return service.list_generated(session)


@router.get("/generated-tattoos/{item_id}", response_model=GeneratedTattooRead)
def get_generated_tattoo(item_id: int, session: Session = Depends(get_session)):
    return service.get_generated(session, item_id)
