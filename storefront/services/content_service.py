# storefront/services/content_service.py
import re
import uuid
from datetime import datetime, timezone

from sqlmodel import Session

from storefront.core.errors import NotFound
from storefront.models.content import News, NewsletterSubscriber, Page, SiteSettings
from storefront.repositories.content_repo import ContentRepository, LocationRepository
from storefront.schemas.content import (
    NewsCreate,
    NewsletterSubscribe,
    NewsUpdate,
    PageCreate,
    PageUpdate,
    SiteSettingsUpdate,
)


class ContentService:
    """
    Business logic for editorial content.

    Rules:
      - page slugs are unique; a missing slug is generated from the title
      - site settings is a single row, created with defaults on first read
      - newsletter subscription is idempotent
    """

    def __init__(self, repo: ContentRepository):
        self.repo = repo

    # ---------- Helpers ----------

    @staticmethod
    def _slugify(raw: str) -> str:
        """
        Basic slugification:
          - lowercase
          - non-alphanumeric -> '-'
          - collapse multiple '-'
          - strip leading/trailing '-'
        """
        value = raw.strip().lower()
        value = re.sub(r"[^a-z0-9]+", "-", value)
        value = re.sub(r"-+", "-", value)
        value = value.strip("-")
        return value or "page"

    def _ensure_unique_slug(
        self,
        session: Session,
        base_slug: str,
        exclude_id: uuid.UUID | None = None,
    ) -> str:
        """
        Ensure slug is unique by appending -2, -3, ... if needed.
        """
        slug = base_slug
        i = 2
        while True:
            existing = self.repo.get_page_by_slug(session, slug)
            if existing is None or existing.id == exclude_id:
                return slug
            slug = f"{base_slug}-{i}"
            i += 1

    # ---------- News & offers ----------

    def list_news(
        self,
        session: Session,
        news_type: str | None = None,
        urgent: bool = False,
    ) -> list[News]:
        return self.repo.list_news(session, news_type=news_type, urgent=urgent)

    def get_news(self, session: Session, news_id: uuid.UUID) -> News:
        news = self.repo.get_news(session, news_id)
        if not news:
            raise NotFound("News item not found")
        return news

    def create_news(self, session: Session, payload: NewsCreate) -> News:
        return self.repo.save(session, News(**payload.model_dump()))

    def update_news(self, session: Session, news_id: uuid.UUID, payload: NewsUpdate) -> News:
        news = self.get_news(session, news_id)
        for field, value in payload.model_dump(exclude_unset=True).items():
            if value is None and field in ("title", "content", "type", "is_urgent"):
                continue
            setattr(news, field, value)
        return self.repo.save(session, news)

    def delete_news(self, session: Session, news_id: uuid.UUID) -> None:
        self.repo.delete(session, self.get_news(session, news_id))

    # ---------- Pages ----------

    def list_pages(self, session: Session) -> list[Page]:
        return self.repo.list_pages(session)

    def get_page_by_slug(self, session: Session, slug: str) -> Page:
        page = self.repo.get_page_by_slug(session, slug)
        if not page:
            raise NotFound("Page not found")
        return page

    def get_page(self, session: Session, page_id: uuid.UUID) -> Page:
        page = self.repo.get_page(session, page_id)
        if not page:
            raise NotFound("Page not found")
        return page

    def create_page(self, session: Session, payload: PageCreate) -> Page:
        base_slug = self._slugify(payload.slug or payload.title)
        page = Page(
            title=payload.title,
            slug=self._ensure_unique_slug(session, base_slug),
            content=payload.content,
            image_url=payload.image_url,
            is_published=payload.is_published,
        )
        return self.repo.save(session, page)

    def update_page(self, session: Session, page_id: uuid.UUID, payload: PageUpdate) -> Page:
        """
        Partial update of a page.

        - If slug is changed, enforce uniqueness.
        """
        page = self.get_page(session, page_id)
        changes = payload.model_dump(exclude_unset=True)

        new_slug = changes.pop("slug", None)
        if new_slug is not None:
            base_slug = self._slugify(new_slug)
            if base_slug != page.slug:
                page.slug = self._ensure_unique_slug(session, base_slug, exclude_id=page.id)

        for field, value in changes.items():
            if value is None and field != "image_url":
                continue
            setattr(page, field, value)
        return self.repo.save(session, page)

    def delete_page(self, session: Session, page_id: uuid.UUID) -> None:
        self.repo.delete(session, self.get_page(session, page_id))

    # ---------- Site settings ----------

    def get_site_settings(self, session: Session, default_whatsapp_number: str) -> SiteSettings:
        """The single settings row, created on first read."""
        row = self.repo.get_settings(session)
        if row is None:
            row = self.repo.save(
                session,
                SiteSettings(default_whatsapp_number=default_whatsapp_number),
            )
        return row

    def update_site_settings(
        self,
        session: Session,
        payload: SiteSettingsUpdate,
        default_whatsapp_number: str,
    ) -> SiteSettings:
        row = self.get_site_settings(session, default_whatsapp_number)
        for field, value in payload.model_dump(exclude_unset=True).items():
            if value is None:
                continue
            setattr(row, field, value)
        row.updated_at = datetime.now(timezone.utc)
        return self.repo.save(session, row)

    # ---------- Newsletter ----------

    def subscribe(self, session: Session, payload: NewsletterSubscribe) -> NewsletterSubscriber:
        """
        Subscribe an email; re-subscribing reactivates instead of duplicating.
        """
        existing = self.repo.get_subscriber(session, payload.email)
        if existing:
            if not existing.is_active:
                existing.is_active = True
                existing = self.repo.save(session, existing)
            return existing
        return self.repo.save(session, NewsletterSubscriber(email=payload.email))


class LocationService:
    """Kenya counties, sub-counties and areas (read only)."""

    def __init__(self, repo: LocationRepository):
        self.repo = repo

    def counties(self, session: Session):
        return self.repo.list_counties(session)

    def sub_counties(self, session: Session, county_id: uuid.UUID):
        return self.repo.list_sub_counties(session, county_id)

    def areas(self, session: Session, sub_county_id: uuid.UUID):
        return self.repo.list_areas(session, sub_county_id)
