# storefront/routers/products.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from storefront.core.auth import require_admin
from storefront.core.ids import parse_id
from storefront.database import get_session
from storefront.repositories.catalog_repo import ProductRepository
from storefront.repositories.favorite_repo import FavoriteRepository
from storefront.repositories.review_repo import ReviewRepository
from storefront.schemas.catalog import ProductCreate, ProductRead, ProductUpdate
from storefront.schemas.content import MessageResponse
from storefront.services.catalog_service import ProductService

router = APIRouter(prefix="/products", tags=["Products"])

repo = ProductRepository()
service = ProductService(repo, FavoriteRepository(), ReviewRepository())


# -------- Public endpoints --------


@router.get("", response_model=list[ProductRead])
def list_products(
    session: Session = Depends(get_session),
    category: str | None = None,
    trending: bool = False,
    featured: bool = False,
    search: str | None = None,
):
    """
    List products, newest first.

    - Public endpoint.
    - `search` matches the product name case-insensitively.
    """
    return service.list_products(
        session,
        category=category,
        trending=trending,
        featured=featured,
        search=search,
    )


@router.get("/{product_id}", response_model=ProductRead)
def get_product(
    product_id: str,
    session: Session = Depends(get_session),
):
    return service.get_product(session, parse_id(product_id, "Product"))


# -------- Admin endpoints --------


@router.post(
    "",
    response_model=ProductRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_product(
    payload: ProductCreate,
    session: Session = Depends(get_session),
):
    """
    Create a new product (admin only).
    """
    return service.create_product(session, payload)


@router.put(
    "/{product_id}",
    response_model=ProductRead,
    dependencies=[Depends(require_admin)],
)
def update_product(
    product_id: str,
    payload: ProductUpdate,
    session: Session = Depends(get_session),
):
    """
    Update an existing product (admin only). Absent fields are left as is.
    """
    return service.update_product(session, parse_id(product_id, "Product"), payload)


@router.delete(
    "/{product_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
)
def delete_product(
    product_id: str,
    session: Session = Depends(get_session),
):
    """
    Delete a product with its favorites and reviews (admin only).
    """
    service.delete_product(session, parse_id(product_id, "Product"))
    return MessageResponse(message="Product deleted")
