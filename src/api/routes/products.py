"""Product catalog CRUD routes.

Endpoints:
- POST /products: Create a product (auth required)
- GET /products: List products
- GET /products/{id}: Get one product
- PATCH /products/{id}: Partially update a product (auth required)
- DELETE /products/{id}: Delete a product (auth required)
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from api.dependencies import get_products_service
from api.models import ProductCreateRequest, ProductResponse, ProductUpdateRequest
from api.security import get_current_user_required
from domain.model.errors import ProductNotFoundError
from domain.model.user import User
from services.products_service import ProductsService
from services.validation import validate_product_fields

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["products"])


def _check_fields(fields: dict, partial: bool) -> None:
    is_valid, error_msg = validate_product_fields(fields, partial=partial)
    if not is_valid:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error_msg)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    request: ProductCreateRequest,
    current_user: User = Depends(get_current_user_required),
    products: ProductsService = Depends(get_products_service),
):
    fields = request.model_dump()
    _check_fields(fields, partial=False)
    product = await products.create(fields)
    return ProductResponse.from_domain(product)


@router.get("", response_model=list[ProductResponse])
async def list_products(products: ProductsService = Depends(get_products_service)):
    return [ProductResponse.from_domain(p) for p in await products.find_all()]


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: int, products: ProductsService = Depends(get_products_service)):
    try:
        product = await products.find_one(product_id)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ProductResponse.from_domain(product)


@router.patch("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: int,
    request: ProductUpdateRequest,
    current_user: User = Depends(get_current_user_required),
    products: ProductsService = Depends(get_products_service),
):
    """Apply only the fields present in the request body."""
    fields = request.model_dump(exclude_unset=True)
    _check_fields(fields, partial=True)
    try:
        product = await products.update(product_id, fields)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ProductResponse.from_domain(product)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: int,
    current_user: User = Depends(get_current_user_required),
    products: ProductsService = Depends(get_products_service),
):
    try:
        await products.remove(product_id)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
