# storefront/routers/locations.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from storefront.core.ids import parse_id
from storefront.database import get_session
from storefront.repositories.content_repo import LocationRepository
from storefront.schemas.content import AreaRead, CountyRead, SubCountyRead
from storefront.services.content_service import LocationService

router = APIRouter(prefix="/locations", tags=["Locations"])

service = LocationService(LocationRepository())


@router.get("/counties", response_model=list[CountyRead])
def list_counties(session: Session = Depends(get_session)):
    return service.counties(session)


@router.get("/sub-counties/{county_id}", response_model=list[SubCountyRead])
def list_sub_counties(county_id: str, session: Session = Depends(get_session)):
    return service.sub_counties(session, parse_id(county_id, "County"))


@router.get("/areas/{sub_county_id}", response_model=list[AreaRead])
def list_areas(sub_county_id: str, session: Session = Depends(get_session)):
    return service.areas(session, parse_id(sub_county_id, "Sub-county"))
