# tattoo_workshop/services/catalog_service.py
import logging

from fastapi import HTTPException, status
from sqlmodel import Session

from tattoo_workshop.core.gemini_client import GeminiError, generate_text
from tattoo_workshop.models.catalog import GeneratedTattoo, PortfolioItem, PricelistItem
from tattoo_workshop.repositories.catalog_repo import CatalogRepository
from tattoo_workshop.repositories.customer_repo import CustomerRepository
from tattoo_workshop.schemas.catalog import (
    PortfolioItemCreate,
    PortfolioItemUpdate,
    PricelistItemCreate,
    PricelistItemUpdate,
    TattooGenerateRequest,
    join_tags,
)
from tattoo_workshop.services.settings_service import SettingsService

logger = logging.getLogger(__name__)

DESIGN_PROMPT_TEMPLATE = (
    'As a professional tattoo artist, create a detailed description for a tattoo '
    'design based on this request: "{prompt}". Include: style (traditional, '
    'neo-traditional, realistic, etc.), placement suggestions, size recommendations, '
    'color scheme, and detailed artistic elements. Make it professional and suitable '
    'for a tattoo artist to work from.'
)


def _not_found(what: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"{what} not found",
    )


class CatalogService:
    """
    Business logic for the pricelist, the portfolio gallery and
    AI-generated design ideas.
    """

    def __init__(
        self,
        repo: CatalogRepository,
        customer_repo: CustomerRepository,
        settings_service: SettingsService,
    ):
        self.repo = repo
        self.customer_repo = customer_repo
        self.settings_service = settings_service

    # ----- Pricelist -----

    def list_pricelist(self, session: Session) -> list[PricelistItem]:
        return self.repo.list_pricelist(session)

    def get_pricelist_item(self, session: Session, item_id: int) -> PricelistItem:
        item = self.repo.get_pricelist_item(session, item_id)
        if not item:
            raise _not_found("Pricelist item")
        return item

    def create_pricelist_item(
        self,
        session: Session,
        payload: PricelistItemCreate,
    ) -> PricelistItem:
        return self.repo.save(session, PricelistItem(**payload.model_dump()))

    def update_pricelist_item(
        self,
        session: Session,
        item_id: int,
        payload: PricelistItemUpdate,
    ) -> PricelistItem:
        item = self.get_pricelist_item(session, item_id)
        for name, value in payload.model_dump(exclude_unset=True).items():
            if name in ("service_name", "price") and value is None:
                continue
            setattr(item, name, value)
        return self.repo.save(session, item)

    def delete_pricelist_item(self, session: Session, item_id: int) -> None:
        self.repo.delete(session, self.get_pricelist_item(session, item_id))

    # ----- Portfolio -----

    def list_portfolio(self, session: Session) -> list[PortfolioItem]:
        return self.repo.list_portfolio(session)

    def get_portfolio_item(self, session: Session, item_id: int) -> PortfolioItem:
        item = self.repo.get_portfolio_item(session, item_id)
        if not item:
            raise _not_found("Portfolio item")
        return item

    def create_portfolio_item(
        self,
        session: Session,
        payload: PortfolioItemCreate,
    ) -> PortfolioItem:
        data = payload.model_dump()
        data["tags"] = join_tags(data.get("tags"))
        return self.repo.save(session, PortfolioItem(**data))

    def update_portfolio_item(
        self,
        session: Session,
        item_id: int,
        payload: PortfolioItemUpdate,
    ) -> PortfolioItem:
        item = self.get_portfolio_item(session, item_id)
        for name, value in payload.model_dump(exclude_unset=True).items():
            if name == "tags":
                value = join_tags(value)
            elif name in ("title", "image_url") and not value:
                continue
            setattr(item, name, value)
        return self.repo.save(session, item)

    def delete_portfolio_item(self, session: Session, item_id: int) -> None:
        self.repo.delete(session, self.get_portfolio_item(session, item_id))

    # ----- Generated designs -----

    def list_generated(self, session: Session) -> list[GeneratedTattoo]:
        return self.repo.list_generated(session, limit=50)

    def get_generated(self, session: Session, item_id: int) -> GeneratedTattoo:
        item = self.repo.get_generated(session, item_id)
        if not item:
            raise _not_found("Generated tattoo")
        return item

    def generate_design(
        self,
        session: Session,
        payload: TattooGenerateRequest,
    ) -> GeneratedTattoo:
        """
        Ask Gemini for a design description and store the result.

        Steps:
          1. Resolve the API key (request first, then `gemini_api_key`).
          2. Validate the optional customer link.
          3. Wrap the prompt in the professional-artist instruction.
          4. Call Gemini; upstream errors become 502 with their text.
          5. Persist prompt + description.
        """
        api_key = (payload.apiKey or "").strip() or self.settings_service.get_gemini_api_key(session)
        if not api_key:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Gemini API key not configured",
            )

        if payload.customer_id is not None and not self.customer_repo.get_by_id(
            session, payload.customer_id
        ):
            raise _not_found("Customer")

        try:
            description = generate_text(
                api_key, DESIGN_PROMPT_TEMPLATE.format(prompt=payload.prompt)
            )
        except GeminiError as e:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=str(e),
            )

        design = GeneratedTattoo(
            prompt=payload.prompt,
            description=description,
            customer_id=payload.customer_id,
        )
        design = self.repo.save(session, design)
        logger.info(f"Stored generated design {design.id}")
        return design
