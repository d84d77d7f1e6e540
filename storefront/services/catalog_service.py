# storefront/services/catalog_service.py
import uuid

from sqlmodel import Session

from storefront.core.errors import NotFound
from storefront.models.product import Product, Service, ServiceOffice
from storefront.repositories.catalog_repo import ProductRepository, ServiceRepository
from storefront.repositories.favorite_repo import FavoriteRepository
from storefront.repositories.review_repo import ReviewRepository
from storefront.schemas.catalog import (
    ProductCreate,
    ProductUpdate,
    ServiceCreate,
    ServiceOfficeCreate,
    ServiceOfficeUpdate,
    ServiceUpdate,
)


class ProductService:
    """
    Business logic for the product catalog.

    Writes are admin-only (enforced at router via require_admin).
    """

    def __init__(
        self,
        repo: ProductRepository,
        favorite_repo: FavoriteRepository,
        review_repo: ReviewRepository,
    ):
        self.repo = repo
        self.favorite_repo = favorite_repo
        self.review_repo = review_repo

    def list_products(
        self,
        session: Session,
        category: str | None = None,
        trending: bool = False,
        featured: bool = False,
        search: str | None = None,
    ) -> list[Product]:
        search = search.strip() if search else None
        return self.repo.list_products(
            session,
            category=category,
            trending=trending,
            featured=featured,
            search=search or None,
        )

    def get_product(self, session: Session, product_id: uuid.UUID) -> Product:
        product = self.repo.get_by_id(session, product_id)
        if not product:
            raise NotFound("Product not found")
        return product

    def create_product(self, session: Session, payload: ProductCreate) -> Product:
        product = Product(**payload.model_dump())
        return self.repo.create(session, product)

    def update_product(
        self,
        session: Session,
        product_id: uuid.UUID,
        payload: ProductUpdate,
    ) -> Product:
        """
        Partial update of a product: only fields present in the body change.
        """
        product = self.get_product(session, product_id)
        for field, value in payload.model_dump(exclude_unset=True).items():
            if value is None:
                continue
            setattr(product, field, value)
        return self.repo.update(session, product)

    def delete_product(self, session: Session, product_id: uuid.UUID) -> None:
        """
        Delete a product together with its favorites and reviews.
        """
        product = self.get_product(session, product_id)
        self.favorite_repo.delete_for_target(session, product_id=product.id)
        self.review_repo.delete_for_product(session, product.id)
        self.repo.delete(session, product)


class ServiceCatalogService:
    """
    Business logic for bookable services and the offices delivering them.
    """

    def __init__(self, repo: ServiceRepository, favorite_repo: FavoriteRepository):
        self.repo = repo
        self.favorite_repo = favorite_repo

    # ----- Services -----

    def list_services(
        self,
        session: Session,
        category: str | None = None,
        trending: bool = False,
        featured: bool = False,
    ) -> list[Service]:
        return self.repo.list_services(session, category=category, trending=trending, featured=featured)

    def get_service(self, session: Session, service_id: uuid.UUID) -> Service:
        service = self.repo.get_by_id(session, service_id)
        if not service:
            raise NotFound("Service not found")
        return service

    def create_service(self, session: Session, payload: ServiceCreate) -> Service:
        return self.repo.save(session, Service(**payload.model_dump()))

    def update_service(
        self,
        session: Session,
        service_id: uuid.UUID,
        payload: ServiceUpdate,
    ) -> Service:
        service = self.get_service(session, service_id)
        for field, value in payload.model_dump(exclude_unset=True).items():
            if value is None and field != "category":
                continue
            setattr(service, field, value)
        return self.repo.save(session, service)

    def delete_service(self, session: Session, service_id: uuid.UUID) -> None:
        service = self.get_service(session, service_id)
        self.favorite_repo.delete_for_target(session, service_id=service.id)
        self.repo.delete(session, service)

    # ----- Offices -----

    def list_offices(self, session: Session) -> list[ServiceOffice]:
        """Active offices only; inactive ones cannot take bookings."""
        return self.repo.list_offices(session, only_active=True)

    def get_office(self, session: Session, office_id: uuid.UUID) -> ServiceOffice:
        office = self.repo.get_office(session, office_id)
        if not office:
            raise NotFound("Service office not found")
        return office

    def create_office(self, session: Session, payload: ServiceOfficeCreate) -> ServiceOffice:
        return self.repo.save_office(session, ServiceOffice(**payload.model_dump()))

    def update_office(
        self,
        session: Session,
        office_id: uuid.UUID,
        payload: ServiceOfficeUpdate,
    ) -> ServiceOffice:
        office = self.get_office(session, office_id)
        for field, value in payload.model_dump(exclude_unset=True).items():
            if value is None and field in ("name", "is_active"):
                continue
            setattr(office, field, value)
        return self.repo.save_office(session, office)

    def delete_office(self, session: Session, office_id: uuid.UUID) -> None:
        office = self.get_office(session, office_id)
        self.repo.delete_office(session, office)
