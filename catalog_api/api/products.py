"""Product API endpoints.

Provides catalog search, listing, creation and deletion. Catalog errors
raised here are turned into the failure envelope by the handlers
registered in ``catalog_api.main``.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Path, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.api.schemas import (
    AddProductResponse,
    CategoryListResponse,
    FailureResponse,
    MessageResponse,
    PaginationSchema,
    ProductListResponse,
    ProductSchema,
    SearchRequest,
    SearchResponse,
)
from catalog_api.catalog.filters import parse_price_bound
from catalog_api.catalog.repository import ProductRepository, SqlProductRepository
from catalog_api.catalog.service import CatalogService
from catalog_api.domain.exceptions import ValidationError
from catalog_api.infrastructure.database import get_session

router = APIRouter(prefix="/api/products", tags=["Products"])

ERROR_RESPONSES = {
    400: {"model": FailureResponse},
    500: {"model": FailureResponse},
}


# ============================================================================
# Dependencies
# ============================================================================


def get_product_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ProductRepository:
    """Get SQL product repository bound to the request session."""
    return SqlProductRepository(session)


def get_catalog_service(
    repository: Annotated[ProductRepository, Depends(get_product_repository)],
) -> CatalogService:
    """Get catalog service for the request."""
    return CatalogService(repository)


# ============================================================================
# Endpoints
# ============================================================================


@router.post(
    "",
    response_model=SearchResponse,
    responses=ERROR_RESPONSES,
    summary="Search products",
    description="Filter, sort and paginate the product catalog.",
)
async def search_products(
    body: SearchRequest,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> SearchResponse:
    """Search products.

    Args:
        body: Filters plus page and page size.
        service: Catalog service.

    Returns:
        The requested page and pagination metadata.
    """
    result = await service.search(body.to_filter_spec(), body.to_page_request())
    return SearchResponse(
        products=[ProductSchema.from_product(p) for p in result.products],
        pagination=PaginationSchema.from_result(result.pagination),
    )


@router.get(
    "",
    response_model=ProductListResponse,
    responses={500: {"model": FailureResponse}},
    summary="List products",
)
async def list_products(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ProductListResponse:
    """List every product, newest first."""
    products = await service.list_products()
    return ProductListResponse(
        products=[ProductSchema.from_product(p) for p in products],
    )


@router.get(
    "/categories",
    response_model=CategoryListResponse,
    responses={500: {"model": FailureResponse}},
    summary="List categories",
)
async def list_categories(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> CategoryListResponse:
    """List category labels currently used by products."""
    return CategoryListResponse(categories=await service.list_categories())


@router.post(
    "/add-product",
    response_model=AddProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    summary="Add product",
    description="Create a product from a multipart form with image uploads.",
)
async def add_product(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
    name: Annotated[str, Form(description="Product name")],
    price: Annotated[str, Form(description="Price in major currency units")],
    category: Annotated[str | None, Form(description="Category label")] = None,
    images: Annotated[list[UploadFile] | None, File(description="Product images")] = None,
) -> AddProductResponse:
    """Create a product.

    Args:
        service: Catalog service.
        name: Product name.
        price: Price as submitted by the form.
        category: Optional category label.
        images: Uploaded image files, in display order.

    Returns:
        The created product.

    Raises:
        ValidationError: If the price is not a number or an upload is not an image.
    """
    parsed_price = parse_price_bound(price)
    if parsed_price is None:
        raise ValidationError("price", "must be a number", price)

    uploads: list[tuple[str | None, bytes]] = []
    for upload in images or []:
        if upload.content_type and not upload.content_type.startswith("image/"):
            raise ValidationError("images", "only image files are accepted", upload.filename)
        content = await upload.read()
        if content:
            uploads.append((upload.filename, content))

    product = await service.add_product(
        name=name,
        price=parsed_price,
        category=category,
        uploads=uploads,
    )
    return AddProductResponse(
        message="Product added successfully",
        product=ProductSchema.from_product(product),
    )


@router.delete(
    "/delete-product/{product_id}",
    response_model=MessageResponse,
    responses={404: {"model": FailureResponse}, 500: {"model": FailureResponse}},
    summary="Delete product",
)
async def delete_product(
    product_id: Annotated[str, Path(description="Product identifier")],
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> MessageResponse:
    """Delete a product by ID.

    Raises:
        ProductNotFoundError: If the product does not exist.
    """
    await service.delete_product(product_id)
    return MessageResponse(message="Product deleted successfully")
