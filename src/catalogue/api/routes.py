"""FastAPI endpoints for the Catalogue domain."""

from fastapi import APIRouter, Depends, Query

from catalogue.api.schemas import CategoryResponse, ProductListResponse, ProductResponse
from shared.dependencies import get_storefront

product_router = APIRouter(prefix="/products", tags=["products"])
category_router = APIRouter(prefix="/categories", tags=["categories"])


# --- Product endpoints ---


@product_router.get("", response_model=ProductListResponse)
async def list_products(
    category: str | None = None,
    featured: bool = False,
    search: str | None = None,
    limit: int | None = Query(None, ge=1, le=100),
    offset: int = Query(0, ge=0),
    storefront=Depends(get_storefront),
) -> ProductListResponse:
    """Browse the catalog. Every given filter applies."""
    page = storefront.catalog.browse(
        category=category,
        featured=featured,
        search=search,
        limit=limit,
        offset=offset,
    )
    return ProductListResponse.from_page(page)


@product_router.get("/featured", response_model=list[ProductResponse])
async def list_featured_products(storefront=Depends(get_storefront)) -> list[ProductResponse]:
    return [ProductResponse.from_product(product) for product in storefront.catalog.filter_featured()]


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str, storefront=Depends(get_storefront)) -> ProductResponse:
    return ProductResponse.from_product(storefront.catalog.get(product_id))


# --- Category endpoints ---


@category_router.get("", response_model=list[CategoryResponse])
async def list_categories(storefront=Depends(get_storefront)) -> list[CategoryResponse]:
    return [CategoryResponse.from_category(category) for category in storefront.catalog.categories()]
