"""
Mock Customer Registry

Maps billing customer ids (``cus_*``) to the contact details the order
service copies onto new orders.
"""
from typing import Dict, Optional
from dataclasses import dataclass


@dataclass(frozen=True)
class Customer:
    customer_id: str
    email: str
    name: str


CUSTOMERS: Dict[str, Customer] = {
    "cus_N4qFJ3gTQd8fR2": Customer(
        customer_id="cus_N4qFJ3gTQd8fR2",
        email="jenny.rosen@example.com",
        name="Jenny Rosen",
    ),
    "cus_P7tLm2WxKc9aZ1": Customer(
        customer_id="cus_P7tLm2WxKc9aZ1",
        email="sam.lee@example.com",
        name="Sam Lee",
    ),
    "cus_Q1bVn8RyHd3sE6": Customer(
        customer_id="cus_Q1bVn8RyHd3sE6",
        email="priya.nair@example.com",
        name="Priya Nair",
    ),
}


def get_customer(customer_id: str) -> Optional[Customer]:
    return CUSTOMERS.get(customer_id)
