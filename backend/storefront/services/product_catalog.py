"""
Product Catalog

Read-only queries over the seeded product catalog. Side-effect free.
"""
import logging
from typing import Optional

from ..exceptions import NotFoundError
from ..mocks.catalog import PRODUCT_CATALOG, CatalogProduct, find_product
from ..models.common import OffsetPagination
from ..models.products import Product, ProductList
from .pagination import exact_match, filter_items, offset_window, slice_page

logger = logging.getLogger(__name__)


def to_product(record: CatalogProduct) -> Product:
    """Project a catalog record into the public Product shape."""
    return Product(
        id=record.product_id,
        name=record.name,
        description=record.description,
        price={"amount": record.price_cents, "currency": record.currency},
        inventory={"quantity": record.stock_quantity},
        specifications={"brand": record.brand, "features": list(record.features)},
        ratings={"average": record.rating_average, "count": record.rating_count},
        metadata={"is_featured": record.is_featured, "category": record.category},
    )


def lookup_product(product_id: str) -> Optional[CatalogProduct]:
    """Raw catalog record, used by the order service for pricing."""
    return find_product(product_id)


def get_product(product_id: str) -> Product:
    """
    Get product by id.

    Raises:
        NotFoundError: unknown product id
    """
    record = find_product(product_id)
    if record is None:
        raise NotFoundError(
            f"No product found with ID: {product_id}",
            details={"product_id": product_id}
        )
    return to_product(record)


def list_products(
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    featured: Optional[bool] = None,
    category: Optional[str] = None,
) -> ProductList:
    """List products in catalog order with optional exact-match filters."""
    window = offset_window(limit, offset)

    matches = filter_items(
        PRODUCT_CATALOG,
        [exact_match("is_featured", featured), exact_match("category", category)]
    )
    page = slice_page(matches, window.offset, window.limit)

    logger.debug(f"Product list: featured={featured}, category={category}, total={page.total}")

    return ProductList(
        data=[to_product(p) for p in page.items],
        pagination=OffsetPagination(limit=window.limit, offset=window.offset, total=page.total),
    )
