# storefront/repositories/catalog_repo.py
import uuid

from sqlmodel import Session, select, col

from storefront.models.product import Product, Service, ServiceOffice


class ProductRepository:
    """
    Data access layer for Product.

    - Pure DB operations (CRUD + queries).
    - No FastAPI, no business logic.
    """

    def get_by_id(self, session: Session, product_id: uuid.UUID) -> Product | None:
        return session.get(Product, product_id)

    def list_products(
        self,
        session: Session,
        category: str | None = None,
        trending: bool = False,
        featured: bool = False,
        search: str | None = None,
    ) -> list[Product]:
        """
        Filtered listing, newest first.

        - trending / featured only filter when True.
        - search is a case-insensitive substring match on name.
        """
        stmt = select(Product)
        if category:
            stmt = stmt.where(Product.category == category)
        if trending:
            stmt = stmt.where(Product.is_trending == True)  # noqa: E712
        if featured:
            stmt = stmt.where(Product.is_featured == True)  # noqa: E712
        if search:
            stmt = stmt.where(col(Product.name).ilike(f"%{search}%"))
        stmt = stmt.order_by(Product.created_at.desc())
        return session.exec(stmt).all()

    def create(self, session: Session, product: Product) -> Product:
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    def update(self, session: Session, product: Product) -> Product:
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    def delete(self, session: Session, product: Product) -> None:
        session.delete(product)
        session.commit()


class ServiceRepository:
    """
    Data access layer for Service and ServiceOffice.
    """

    # ----- Services -----

    def get_by_id(self, session: Session, service_id: uuid.UUID) -> Service | None:
        return session.get(Service, service_id)

    def list_services(
        self,
        session: Session,
        category: str | None = None,
        trending: bool = False,
        featured: bool = False,
    ) -> list[Service]:
        stmt = select(Service)
        if category:
            stmt = stmt.where(Service.category == category)
        if trending:
            stmt = stmt.where(Service.is_trending == True)  # noqa: E712
        if featured:
            stmt = stmt.where(Service.is_featured == True)  # noqa: E712
        stmt = stmt.order_by(Service.created_at.desc())
        return session.exec(stmt).all()

    def save(self, session: Session, service: Service) -> Service:
        session.add(service)
        session.commit()
        session.refresh(service)
        return service

    def delete(self, session: Session, service: Service) -> None:
        session.delete(service)
        session.commit()

    # ----- Offices -----

    def get_office(self, session: Session, office_id: uuid.UUID) -> ServiceOffice | None:
        return session.get(ServiceOffice, office_id)

    def list_offices(self, session: Session, only_active: bool = True) -> list[ServiceOffice]:
        stmt = select(ServiceOffice)
        if only_active:
            stmt = stmt.where(ServiceOffice.is_active == True)  # noqa: E712
        stmt = stmt.order_by(ServiceOffice.name)
        return session.exec(stmt).all()

    def save_office(self, session: Session, office: ServiceOffice) -> ServiceOffice:
        session.add(office)
        session.commit()
        session.refresh(office)
        return office

    def delete_office(self, session: Session, office: ServiceOffice) -> None:
        session.delete(office)
        session.commit()
