# storefront/routers/services.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from storefront.core.auth import require_admin
from storefront.core.ids import parse_id
from storefront.database import get_session
from storefront.repositories.catalog_repo import ServiceRepository
from storefront.repositories.favorite_repo import FavoriteRepository
from storefront.schemas.catalog import (
    ServiceCreate,
    ServiceOfficeCreate,
    ServiceOfficeRead,
    ServiceOfficeUpdate,
    ServiceRead,
    ServiceUpdate,
)
from storefront.schemas.content import MessageResponse
from storefront.services.catalog_service import ServiceCatalogService

router = APIRouter(tags=["Services"])

repo = ServiceRepository()
service = ServiceCatalogService(repo, FavoriteRepository())


# -------- Services --------


@router.get("/services", response_model=list[ServiceRead])
def list_services(
    session: Session = Depends(get_session),
    category: str | None = None,
    trending: bool = False,
    featured: bool = False,
):
    return service.list_services(
        session, category=category, trending=trending, featured=featured
    )


@router.get("/services/{service_id}", response_model=ServiceRead)
def get_service(service_id: str, session: Session = Depends(get_session)):
    return service.get_service(session, parse_id(service_id, "Service"))


@router.post(
    "/services",
    response_model=ServiceRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_service(payload: ServiceCreate, session: Session = Depends(get_session)):
    return service.create_service(session, payload)


@router.put(
    "/services/{service_id}",
    response_model=ServiceRead,
    dependencies=[Depends(require_admin)],
)
def update_service(
    service_id: str,
    payload: ServiceUpdate,
    session: Session = Depends(get_session),
):
    return service.update_service(session, parse_id(service_id, "Service"), payload)


@router.delete(
    "/services/{service_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
)
def delete_service(service_id: str, session: Session = Depends(get_session)):
    service.delete_service(session, parse_id(service_id, "Service"))
    return MessageResponse(message="Service deleted")


# -------- Service offices --------


@router.get("/service-offices", response_model=list[ServiceOfficeRead])
def list_offices(session: Session = Depends(get_session)):
    """
    Active offices where services can be booked (public).
    """
    return service.list_offices(session)


@router.post(
    "/service-offices",
    response_model=ServiceOfficeRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_office(payload: ServiceOfficeCreate, session: Session = Depends(get_session)):
    return service.create_office(session, payload)


@router.put(
    "/service-offices/{office_id}",
    response_model=ServiceOfficeRead,
    dependencies=[Depends(require_admin)],
)
def update_office(
    office_id: str,
    payload: ServiceOfficeUpdate,
    session: Session = Depends(get_session),
):
    return service.update_office(session, parse_id(office_id, "Service office"), payload)


@router.delete(
    "/service-offices/{office_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
)
def delete_office(office_id: str, session: Session = Depends(get_session)):
    service.delete_office(session, parse_id(office_id, "Service office"))
    return MessageResponse(message="Service office deleted")
