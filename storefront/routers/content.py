# storefront/routers/content.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from storefront.core.auth import require_admin
from storefront.core.config import Settings, get_app_settings
from storefront.core.ids import parse_id
from storefront.database import get_session
from storefront.repositories.content_repo import ContentRepository
from storefront.schemas.content import (
    MessageResponse,
    NewsCreate,
    NewsletterSubscribe,
    NewsRead,
    NewsType,
    NewsUpdate,
    PageCreate,
    PageRead,
    PageUpdate,
    SiteSettingsRead,
    SiteSettingsUpdate,
)
from storefront.services.content_service import ContentService

router = APIRouter(tags=["Content"])

repo = ContentRepository()
service = ContentService(repo)


# -------- News & offers --------


@router.get("/news", response_model=list[NewsRead])
def list_news(
    type: NewsType | None = None,
    urgent: bool = False,
    session: Session = Depends(get_session),
):
    """
    News and offers, newest first.

    - `type=offer` lists promotions only.
    - `urgent=true` lists the items feeding the urgent banner.
    """
    return service.list_news(session, news_type=type, urgent=urgent)


@router.get("/news/{news_id}", response_model=NewsRead)
def get_news(news_id: str, session: Session = Depends(get_session)):
    return service.get_news(session, parse_id(news_id, "News item"))


@router.post(
    "/news",
    response_model=NewsRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_news(payload: NewsCreate, session: Session = Depends(get_session)):
    return service.create_news(session, payload)


@router.put(
    "/news/{news_id}",
    response_model=NewsRead,
    dependencies=[Depends(require_admin)],
)
def update_news(news_id: str, payload: NewsUpdate, session: Session = Depends(get_session)):
    return service.update_news(session, parse_id(news_id, "News item"), payload)


@router.delete(
    "/news/{news_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
)
def delete_news(news_id: str, session: Session = Depends(get_session)):
    service.delete_news(session, parse_id(news_id, "News item"))
    return MessageResponse(message="News item deleted")


# -------- Pages --------


@router.get("/pages", response_model=list[PageRead])
def list_pages(session: Session = Depends(get_session)):
    return service.list_pages(session)


@router.get("/pages/{slug}", response_model=PageRead)
def get_page(slug: str, session: Session = Depends(get_session)):
    return service.get_page_by_slug(session, slug)


@router.post(
    "/pages",
    response_model=PageRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_page(payload: PageCreate, session: Session = Depends(get_session)):
    """
    Create a page (admin only). The slug is generated from the title when
    omitted and suffixed (-2, -3, ...) when already taken.
    """
    return service.create_page(session, payload)


@router.put(
    "/pages/{page_id}",
    response_model=PageRead,
    dependencies=[Depends(require_admin)],
)
def update_page(page_id: str, payload: PageUpdate, session: Session = Depends(get_session)):
    return service.update_page(session, parse_id(page_id, "Page"), payload)


@router.delete(
    "/pages/{page_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
)
def delete_page(page_id: str, session: Session = Depends(get_session)):
    service.delete_page(session, parse_id(page_id, "Page"))
    return MessageResponse(message="Page deleted")


# -------- Site settings --------


@router.get("/settings", response_model=SiteSettingsRead)
def read_site_settings(
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
):
    return service.get_site_settings(session, settings.DEFAULT_WHATSAPP_NUMBER)


@router.put(
    "/settings",
    response_model=SiteSettingsRead,
    dependencies=[Depends(require_admin)],
)
def update_site_settings(
    payload: SiteSettingsUpdate,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
):
    return service.update_site_settings(session, payload, settings.DEFAULT_WHATSAPP_NUMBER)


# -------- Newsletter --------


@router.post("/newsletter/subscribe", response_model=MessageResponse)
def subscribe(payload: NewsletterSubscribe, session: Session = Depends(get_session)):
    service.subscribe(session, payload)
    return MessageResponse(message="Subscribed successfully")
