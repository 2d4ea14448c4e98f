"""
Demo Ledger Seed

Inserts the pre-existing orders and the settled payment that API clients
reference by id. Idempotent: rows that already exist are left untouched.
"""
import json
import logging
from datetime import datetime
from typing import Any, Dict, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..mocks.card_vault import VAULTED_CARDS
from ..mocks.customers import CUSTOMERS
from ..models.orders import OrderItemRequest
from ..services.order_service import price_items
from .models import OrderModel, PaymentModel

logger = logging.getLogger(__name__)


SEED_ORDERS: List[Dict[str, Any]] = [
    {
        "id": "order_456789",
        "customer_id": "cus_N4qFJ3gTQd8fR2",
        "status": "paid",
        "items": [{"product_id": "prod_usb_c_cable", "quantity": 2}],
        "shipping_address": {
            "line1": "510 Townsend St",
            "city": "San Francisco",
            "state": "CA",
            "postal_code": "94103",
            "country": "US",
        },
        "created_at": datetime(2023, 10, 3, 14, 15, 2),
    },
    {
        "id": "order_457120",
        "customer_id": "cus_P7tLm2WxKc9aZ1",
        "status": "shipped",
        "items": [
            {"product_id": "prod_wireless_headphones", "quantity": 1},
            {"product_id": "prod_laptop_stand", "quantity": 1},
        ],
        "shipping_address": {
            "line1": "88 Colin P Kelly Jr St",
            "city": "San Francisco",
            "state": "CA",
            "postal_code": "94107",
            "country": "US",
        },
        "created_at": datetime(2023, 10, 5, 9, 42, 18),
    },
    {
        "id": "order_458003",
        "customer_id": "cus_Q1bVn8RyHd3sE6",
        "status": "pending",
        "items": [{"product_id": "prod_desk_lamp", "quantity": 3}],
        "shipping_address": {
            "line1": "1 Canada Square",
            "city": "London",
            "postal_code": "E14 5AB",
            "country": "GB",
        },
        "created_at": datetime(2023, 10, 9, 18, 3, 55),
    },
]


SEED_PAYMENTS: List[Dict[str, Any]] = [
    {
        "id": "pay_1Nz3Q82eZvKYlo2C9EbE7PKr",
        "order_id": "order_456789",
        "customer_id": "cus_N4qFJ3gTQd8fR2",
        "amount": 2500,
        "currency": "usd",
        "status": "succeeded",
        "card_id": "pm_1Nz3Q72eZvKYlo2CvJEwRG4c",
        "authorization_code": "auth_5f1c0a9e2b7d",
        "created_at": datetime(2023, 10, 3, 14, 21, 7),
        "succeeded_at": datetime(2023, 10, 3, 14, 21, 9),
    },
]


async def seed_ledgers(db: AsyncSession) -> int:
    """
    Insert missing seed orders and payments.

    Returns:
        Number of rows inserted
    """
    inserted = 0

    for entry in SEED_ORDERS:
        existing = await db.execute(select(OrderModel.id).where(OrderModel.id == entry["id"]))
        if existing.scalar_one_or_none() is not None:
            continue

        customer = CUSTOMERS[entry["customer_id"]]
        items, subtotal, currency = price_items([OrderItemRequest(**item) for item in entry["items"]])

        db.add(OrderModel(
            id=entry["id"],
            customer_id=customer.customer_id,
            customer_email=customer.email,
            customer_name=customer.name,
            status=entry["status"],
            items=json.dumps(items),
            subtotal=subtotal,
            total=subtotal,
            currency=currency,
            shipping_address=json.dumps(entry["shipping_address"]),
            created_at=entry["created_at"],
            updated_at=entry["created_at"],
        ))
        inserted += 1

    for entry in SEED_PAYMENTS:
        existing = await db.execute(select(PaymentModel.id).where(PaymentModel.id == entry["id"]))
        if existing.scalar_one_or_none() is not None:
            continue

        customer = CUSTOMERS[entry["customer_id"]]
        card = VAULTED_CARDS[entry["card_id"]]

        db.add(PaymentModel(
            id=entry["id"],
            order_id=entry["order_id"],
            amount=entry["amount"],
            currency=entry["currency"],
            status=entry["status"],
            customer_email=customer.email,
            customer_name=customer.name,
            billing_address=json.dumps(card.billing_address),
            payment_method_type="card",
            card_id=card.card_id,
            card_details=json.dumps(card.projection()),
            authorization_code=entry["authorization_code"],
            created_at=entry["created_at"],
            updated_at=entry["succeeded_at"],
            succeeded_at=entry["succeeded_at"],
        ))
        inserted += 1

    await db.commit()

    if inserted:
        logger.info(f"Seeded {inserted} ledger rows")

    return inserted
