# tattoo_workshop/repositories/catalog_repo.py
from sqlmodel import Session, select

from tattoo_workshop.models.catalog import GeneratedTattoo, PortfolioItem, PricelistItem


class CatalogRepository:
    """
    Data access layer for the studio's catalog tables:
    pricelist, portfolio and generated tattoo designs.
    """

    # ----- Pricelist -----

    def list_pricelist(self, session: Session) -> list[PricelistItem]:
        stmt = select(PricelistItem).order_by(
            PricelistItem.category, PricelistItem.service_name
        )
        return list(session.exec(stmt).all())

    def get_pricelist_item(self, session: Session, item_id: int) -> PricelistItem | None:
        return session.get(PricelistItem, item_id)

    # ----- Portfolio -----

    def list_portfolio(self, session: Session) -> list[PortfolioItem]:
        stmt = select(PortfolioItem).order_by(
            PortfolioItem.created_at.desc(), PortfolioItem.id.desc()
        )
        return list(session.exec(stmt).all())

    def get_portfolio_item(self, session: Session, item_id: int) -> PortfolioItem | None:
        return session.get(PortfolioItem, item_id)

    # ----- Generated designs -----

    def list_generated(self, session: Session, limit: int = 50) -> list[GeneratedTattoo]:
        stmt = (
            select(GeneratedTattoo)
            .order_by(GeneratedTattoo.created_at.desc(), GeneratedTattoo.id.desc())
            .limit(limit)
        )
        return list(session.exec(stmt).all())

    def get_generated(self, session: Session, item_id: int) -> GeneratedTattoo | None:
        return session.get(GeneratedTattoo, item_id)

    # ----- Shared writes -----

    def save(self, session: Session, row):
        """Insert or update any catalog row and return it refreshed."""
        session.add(row)
        session.commit()
        session.refresh(row)
        return row

    def delete(self, session: Session, row) -> None:
        session.delete(row)
        session.commit()
