# storefront/schemas/order.py
import uuid
from datetime import datetime
from typing import Literal

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

OrderStatus = Literal["pending", "completed", "cancelled"]


class OrderItemIn(SQLModel):
    """
    One cart line as submitted at checkout.

    `price` is the snapshot the customer saw when adding to cart.
    """

    model_config = ConfigDict(extra="ignore")

    product_id: str
    name: str
    quantity: int = Field(ge=1)
    price: float = Field(ge=0)
    image: str | None = None

    @field_validator("product_id", "name")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty")
        return v


class DeliveryInfo(SQLModel):
    model_config = ConfigDict(extra="forbid")

    county: str | None = None
    sub_county: str | None = None
    area: str | None = None
    address: str | None = None
    phone: str

    @field_validator("phone")
    @classmethod
    def phone_not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("phone cannot be empty")
        return v


class OrderCreate(SQLModel):
    """
    Payload for submitting the client-held cart as an order.

    Backend derives:
      - user_id from the caller's credential (if any)
      - status = 'pending'
      - total_amount = sum(price * quantity)
    """

    model_config = ConfigDict(extra="forbid")

    items: list[OrderItemIn]
    delivery_info: DeliveryInfo

    @field_validator("items")
    @classmethod
    def cart_not_empty(cls, v: list[OrderItemIn]) -> list[OrderItemIn]:
        if not v:
            raise ValueError("Cart is empty")
        return v


class OrderItemRead(SQLModel):
    product_id: str
    name: str
    quantity: int
    price: float
    image: str | None = None
    line_total: float


class OrderRead(SQLModel):
    id: uuid.UUID
    user_id: uuid.UUID | None
    items: list[OrderItemRead]
    total_amount: float
    delivery_info: dict
    status: OrderStatus
    created_at: datetime


class OrderStatusUpdate(SQLModel):
    """
    Admin payload to change order status.
    """

    model_config = ConfigDict(extra="forbid")

    status: OrderStatus
