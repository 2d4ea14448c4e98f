"""
Products API Endpoints

Public, read-only access to the product catalog.
"""
from fastapi import APIRouter, Query
from typing import Optional
import logging

from ..models.products import Product, ProductList
from ..services.product_catalog import get_product, list_products

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=ProductList)
async def list_products_endpoint(
    limit: Optional[int] = Query(None, description="Page size (default 20, capped at 100)"),
    offset: Optional[int] = Query(None, description="Number of products to skip"),
    featured: Optional[bool] = Query(None, description="Only featured / non-featured products"),
    category: Optional[str] = Query(None, description="Exact category filter")
) -> ProductList:
    """
    List catalog products.

    Examples:
        GET /api/v1/products?featured=true
        GET /api/v1/products?category=Electronics&limit=2
    """
    logger.info(f"Product list: featured={featured}, category={category}")

    return list_products(limit=limit, offset=offset, featured=featured, category=category)


@router.get("/{product_id}", response_model=Product)
async def get_product_endpoint(product_id: str) -> Product:
    """
    Get specific product by ID.

    Example:
        GET /api/v1/products/prod_wireless_headphones
    """
    logger.debug(f"Get product: {product_id}")

    return get_product(product_id)
