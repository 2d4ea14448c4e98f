"""
Mock Product Catalog Source

Seeded read model standing in for the merchandising system.
Prices are integer minor units; every product lists in USD.
"""
from typing import Tuple, Optional
from dataclasses import dataclass


@dataclass(frozen=True)
class CatalogProduct:
    """Product record as stored by the merchandising system."""
    product_id: str
    name: str
    description: str
    category: str
    brand: str
    features: Tuple[str, ...]
    price_cents: int
    currency: str
    stock_quantity: int
    rating_average: float
    rating_count: int
    is_featured: bool


# Insertion order is the listing order
PRODUCT_CATALOG: Tuple[CatalogProduct, ...] = (
    CatalogProduct(
        product_id="prod_wireless_headphones",
        name="Aurora ANC Wireless Headphones",
        description="Over-ear Bluetooth headphones with active noise cancellation",
        category="Electronics",
        brand="Aurora Audio",
        features=("active_noise_cancellation", "bluetooth_5_3", "30h_battery", "usb_c_charging"),
        price_cents=19999,  # $199.99
        currency="usd",
        stock_quantity=142,
        rating_average=4.6,
        rating_count=1287,
        is_featured=True,
    ),
    CatalogProduct(
        product_id="prod_laptop_stand",
        name="Ergo Aluminium Laptop Stand",
        description="Height-adjustable stand for laptops from 10 to 17 inches",
        category="Office",
        brand="Deskwise",
        features=("adjustable_height", "aluminium_frame", "foldable"),
        price_cents=4999,  # $49.99
        currency="usd",
        stock_quantity=58,
        rating_average=4.4,
        rating_count=532,
        is_featured=False,
    ),
    CatalogProduct(
        product_id="prod_usb_c_cable",
        name="Braided USB-C Cable (2 m)",
        description="100 W USB-C to USB-C charging and data cable",
        category="Electronics",
        brand="Voltline",
        features=("100w_power_delivery", "braided_nylon", "usb_3_2"),
        price_cents=1250,  # $12.50
        currency="usd",
        stock_quantity=900,
        rating_average=4.7,
        rating_count=3410,
        is_featured=False,
    ),
    CatalogProduct(
        product_id="prod_mechanical_keyboard",
        name="Tactile 75% Mechanical Keyboard",
        description="Hot-swappable 75% keyboard with brown switches",
        category="Electronics",
        brand="Keyforge",
        features=("hot_swappable", "rgb_backlight", "wireless_and_wired"),
        price_cents=12900,  # $129.00
        currency="usd",
        stock_quantity=0,
        rating_average=4.5,
        rating_count=214,
        is_featured=True,
    ),
    CatalogProduct(
        product_id="prod_desk_lamp",
        name="Modern LED Desk Lamp",
        description="Adjustable brightness and color temperature",
        category="Home",
        brand="Lumen & Co",
        features=("dimmable", "color_temperature_control", "usb_charging_port"),
        price_cents=4599,  # $45.99
        currency="usd",
        stock_quantity=77,
        rating_average=4.2,
        rating_count=98,
        is_featured=False,
    ),
    CatalogProduct(
        product_id="prod_coffee_maker",
        name="12-Cup Programmable Coffee Maker",
        description="Drip coffee maker with timer and keep-warm plate",
        category="Kitchen",
        brand="Brewhaus",
        features=("programmable_timer", "keep_warm", "reusable_filter"),
        price_cents=6900,  # $69.00
        currency="usd",
        stock_quantity=23,
        rating_average=4.1,
        rating_count=611,
        is_featured=True,
    ),
)


def find_product(product_id: str) -> Optional[CatalogProduct]:
    """Get specific product by ID."""
    for product in PRODUCT_CATALOG:
        if product.product_id == product_id:
            return product
    return None
