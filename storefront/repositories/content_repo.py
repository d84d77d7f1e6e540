# storefront/repositories/content_repo.py
import uuid

from sqlmodel import Session, select

from storefront.models.content import News, NewsletterSubscriber, Page, SiteSettings
from storefront.models.location import KenyaArea, KenyaCounty, KenyaSubCounty


class ContentRepository:
    """
    Data access layer for editorial content: news/offers, pages,
    site settings and newsletter subscribers.
    """

    # ----- News -----

    def get_news(self, session: Session, news_id: uuid.UUID) -> News | None:
        return session.get(News, news_id)

    def list_news(
        self,
        session: Session,
        news_type: str | None = None,
        urgent: bool = False,
    ) -> list[News]:
        stmt = select(News)
        if news_type:
            stmt = stmt.where(News.type == news_type)
        if urgent:
            stmt = stmt.where(News.is_urgent == True)  # noqa: E712
        stmt = stmt.order_by(News.created_at.desc())
        return session.exec(stmt).all()

    # ----- Pages -----

    def get_page(self, session: Session, page_id: uuid.UUID) -> Page | None:
        return session.get(Page, page_id)

    def get_page_by_slug(self, session: Session, slug: str) -> Page | None:
        stmt = select(Page).where(Page.slug == slug)
        return session.exec(stmt).first()

    def list_pages(self, session: Session) -> list[Page]:
        stmt = select(Page).order_by(Page.created_at.desc())
        return session.exec(stmt).all()

    # ----- Site settings -----

    def get_settings(self, session: Session) -> SiteSettings | None:
        return session.exec(select(SiteSettings)).first()

    # ----- Newsletter -----

    def get_subscriber(self, session: Session, email: str) -> NewsletterSubscriber | None:
        stmt = select(NewsletterSubscriber).where(NewsletterSubscriber.email == email)
        return session.exec(stmt).first()

    # ----- Shared -----

    def save(self, session: Session, row):
        session.add(row)
        session.commit()
        session.refresh(row)
        return row

    def delete(self, session: Session, row) -> None:
        session.delete(row)
        session.commit()


class LocationRepository:
    """
    Read-only access to the Kenya locations reference data.
    """

    def list_counties(self, session: Session) -> list[KenyaCounty]:
        return session.exec(select(KenyaCounty).order_by(KenyaCounty.name)).all()

    def list_sub_counties(self, session: Session, county_id: uuid.UUID) -> list[KenyaSubCounty]:
        stmt = (
            select(KenyaSubCounty)
            .where(KenyaSubCounty.county_id == county_id)
            .order_by(KenyaSubCounty.name)
        )
        return session.exec(stmt).all()

    def list_areas(self, session: Session, sub_county_id: uuid.UUID) -> list[KenyaArea]:
        stmt = (
            select(KenyaArea)
            .where(KenyaArea.sub_county_id == sub_county_id)
            .order_by(KenyaArea.name)
        )
        return session.exec(stmt).all()
