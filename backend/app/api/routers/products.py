"""CRUD endpoints for the product catalogue."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.api.dependencies.db import get_session
from app.api.schemas.product import (
    ProductCreate,
    ProductRead,
    ProductUpdate,
    ResponseWithDataMulti,
    ResponseWithDataSingle,
    ResponseWithMessage,
)
from app.api.validation import (
    AVAILABILITY_RULES,
    ID_RULES,
    NAME_RULES,
    PRICE_RULES,
    ValidatedRequest,
    to_bool,
    validate,
)
from app.core.errors import ProductNotFoundError
from app.db.models.product import Product

logger = logging.getLogger(__name__)

router = APIRouter()

PAGE_SIZE = 10
DELETED_MESSAGE = "Producto Eliminado"

# Static OpenAPI annotations; request handling does not read them
ID_PARAMETER = {
    "in": "path",
    "name": "id",
    "required": True,
    "schema": {"type": "integer"},
    "description": "The ID of a product",
}


def _json_body(model) -> dict:
    return {
        "required": True,
        "content": {"application/json": {"schema": model.model_json_schema()}},
    }


NOT_FOUND = {"description": "Product Not Found"}
BAD_REQUEST = {"description": "Bad Request - Invalid Input Data"}


def _serialize(product: Product) -> ResponseWithDataSingle:
    return ResponseWithDataSingle(data=ProductRead.model_validate(product))


def _get_or_404(db: Session, product_id: int, key: str = "error") -> Product:
    product = db.get(Product, product_id)
    if product is None:
        raise ProductNotFoundError(product_id, key=key)
    return product


@router.get(
    "",
    summary="Get a list of products",
    description="Return a list of products",
    response_model=ResponseWithDataMulti,
)
@router.get("/", include_in_schema=False, response_model=ResponseWithDataMulti)
async def list_products(
    db: Session = Depends(get_session),
) -> ResponseWithDataMulti:
    """Return the first page of products ordered by id."""
    products = db.scalars(
        select(Product).order_by(Product.id.asc()).limit(PAGE_SIZE)
    ).all()
    return ResponseWithDataMulti(
        data=[ProductRead.model_validate(p) for p in products]
    )


@router.get(
    "/{id}",
    summary="Get the info of a Product",
    description="The info of a single product",
    response_model=ResponseWithDataSingle,
    responses={400: {"description": "Bad Request - Invalid ID"}, 404: NOT_FOUND},
    openapi_extra={"parameters": [ID_PARAMETER]},
)
async def get_product(
    checked: ValidatedRequest = Depends(validate(*ID_RULES)),
    db: Session = Depends(get_session),
) -> ResponseWithDataSingle:
    product = _get_or_404(db, checked.id, key="errors")
    return _serialize(product)


@router.post(
    "",
    summary="Create a product",
    description="Create a product with name and price",
    status_code=status.HTTP_201_CREATED,
    response_model=ResponseWithDataSingle,
    responses={400: BAD_REQUEST},
    openapi_extra={"requestBody": _json_body(ProductCreate)},
)
@router.post(
    "/",
    include_in_schema=False,
    status_code=status.HTTP_201_CREATED,
    response_model=ResponseWithDataSingle,
)
async def create_product(
    checked: ValidatedRequest = Depends(validate(*NAME_RULES, *PRICE_RULES)),
    db: Session = Depends(get_session),
) -> ResponseWithDataSingle:
    """Persist a new product; availability starts as true."""
    product = Product(
        name=str(checked.body["name"]),
        price=float(checked.body["price"]),
    )
    db.add(product)
    db.commit()
    db.refresh(product)

    logger.info(f"Created product {product.id}")
    return _serialize(product)


@router.put(
    "/{id}",
    summary="Updates a product",
    description="Update a product with ID and Input Data",
    response_model=ResponseWithDataSingle,
    responses={400: BAD_REQUEST, 404: NOT_FOUND},
    openapi_extra={
        "parameters": [ID_PARAMETER],
        "requestBody": _json_body(ProductUpdate),
    },
)
async def update_product(
    checked: ValidatedRequest = Depends(
        validate(*ID_RULES, *NAME_RULES, *PRICE_RULES, *AVAILABILITY_RULES)
    ),
    db: Session = Depends(get_session),
) -> ResponseWithDataSingle:
    """Replace name, price and availability of an existing product."""
    product = _get_or_404(db, checked.id)

    product.name = str(checked.body["name"])
    product.price = float(checked.body["price"])
    product.availability = to_bool(checked.body["availability"])
    db.commit()
    db.refresh(product)

    logger.info(f"Updated product {product.id}")
    return _serialize(product)


@router.patch(
    "/{id}",
    summary="Switch availability",
    description="Update the availability of a product switching the current availability",
    response_model=ResponseWithDataSingle,
    responses={400: BAD_REQUEST, 404: NOT_FOUND},
    openapi_extra={"parameters": [ID_PARAMETER]},
)
async def toggle_availability(
    checked: ValidatedRequest = Depends(validate(*ID_RULES)),
    db: Session = Depends(get_session),
) -> ResponseWithDataSingle:
    product = _get_or_404(db, checked.id)

    product.availability = not product.availability
    db.commit()
    db.refresh(product)

    logger.info(f"Product {product.id} availability set to {product.availability}")
    return _serialize(product)


@router.delete(
    "/{id}",
    summary="Delete a product",
    description="Delete a product by its ID",
    response_model=ResponseWithMessage,
    responses={400: BAD_REQUEST, 404: NOT_FOUND},
    openapi_extra={"parameters": [ID_PARAMETER]},
)
async def delete_product(
    checked: ValidatedRequest = Depends(validate(*ID_RULES)),
    db: Session = Depends(get_session),
) -> ResponseWithMessage:
    """Remove a product permanently."""
    product = _get_or_404(db, checked.id)

    db.delete(product)
    db.commit()

    logger.info(f"Deleted product {checked.id}")
    return ResponseWithMessage(data=DELETED_MESSAGE)
