"""
Pydantic Order Models

Orders are created pending with totals computed from the product catalog.
Totals are frozen at creation and never recomputed.
"""
from enum import Enum
from typing import Dict, FrozenSet, List, Optional
from pydantic import Field, StrictInt

from .common import Address, CamelModel, OffsetPagination


class OrderStatus(str, Enum):
    pending = "pending"
    paid = "paid"
    shipped = "shipped"
    delivered = "delivered"
    cancelled = "cancelled"


ORDER_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.pending: frozenset({OrderStatus.paid, OrderStatus.cancelled}),
    OrderStatus.paid: frozenset({OrderStatus.shipped, OrderStatus.cancelled}),
    OrderStatus.shipped: frozenset({OrderStatus.delivered}),
    OrderStatus.delivered: frozenset(),
    OrderStatus.cancelled: frozenset(),
}


# ==================== Requests ====================

class OrderItemRequest(CamelModel):
    product_id: str = Field(min_length=1)
    quantity: StrictInt


class ShippingDetails(CamelModel):
    address: Address


class CreateOrderRequest(CamelModel):
    """
    Body of ``POST /api/v1/orders``.

    ``items`` may be empty here; the order service rejects it with
    ``empty_items`` rather than a generic validation error.
    """
    customer_id: str = Field(min_length=1)
    items: List[OrderItemRequest]
    shipping: ShippingDetails


class UpdateOrderStatusRequest(CamelModel):
    """Body of ``PATCH /api/v1/orders/{id}``."""
    status: OrderStatus


# ==================== Projection ====================

class OrderCustomer(CamelModel):
    email: str
    name: Optional[str] = None


class OrderItem(CamelModel):
    product_id: str
    name: str
    quantity: int = Field(gt=0)
    unit_amount: int = Field(ge=0)


class OrderTotals(CamelModel):
    subtotal: int = Field(ge=0)
    total: int = Field(ge=0)
    currency: str


class OrderTimestamps(CamelModel):
    created_at: str
    updated_at: str


class Order(CamelModel):
    """Externally serialized Order."""
    id: str = Field(pattern="^order_")
    customer_id: str
    status: OrderStatus
    customer: OrderCustomer
    items: List[OrderItem]
    totals: OrderTotals
    shipping: ShippingDetails
    timestamps: OrderTimestamps


class OrderList(CamelModel):
    data: List[Order]
    pagination: OffsetPagination
