"""
Product business logic.
"""

from __future__ import annotations

from core.db import DRIVER_ERRORS, RelationalPool
from core.errors import NotFoundError, translate_store_errors

from . import repository, schemas

PRODUCT_NOT_FOUND = "Product not found."

# `produto.id` is SERIAL (int4); ids outside it cannot exist.
MIN_PRODUCT_ID = -(2**31)
MAX_PRODUCT_ID = 2**31 - 1


def _require_storable_id(product_id: int) -> None:
    if not MIN_PRODUCT_ID <= product_id <= MAX_PRODUCT_ID:
        raise NotFoundError(PRODUCT_NOT_FOUND)


def _to_product_response(row: dict) -> schemas.ProductResponse:
    return schemas.ProductResponse(
        id=int(row["id"]),
        nome=str(row["nome"]),
        descricao=str(row["descricao"]),
        preco=float(row["preco"]),
    )


async def check_connection(db: RelationalPool) -> dict:
    with translate_store_errors("Relational store connection failed.", DRIVER_ERRORS):
        row = await repository.ping(db)
    return {"message": "Relational store connection OK.", "test": row}


async def create_product(db: RelationalPool, payload: schemas.ProductRequest) -> schemas.ProductResponse:
    with translate_store_errors("Error creating product.", DRIVER_ERRORS):
        row = await repository.create_product(
            db,
            nome=payload.nome,
            descricao=payload.descricao,
            preco=payload.preco,
        )
    return _to_product_response(row)


async def list_products(db: RelationalPool) -> list[schemas.ProductResponse]:
    with translate_store_errors("Error listing products.", DRIVER_ERRORS):
        rows = await repository.list_products(db)
    return [_to_product_response(row) for row in rows]


async def get_product(db: RelationalPool, product_id: int) -> schemas.ProductResponse:
    _require_storable_id(product_id)
    with translate_store_errors("Error fetching product.", DRIVER_ERRORS):
        row = await repository.get_product(db, product_id)
    if row is None:
        raise NotFoundError(PRODUCT_NOT_FOUND)
    return _to_product_response(row)


async def replace_product(
    db: RelationalPool,
    product_id: int,
    payload: schemas.ProductRequest,
) -> schemas.ProductResponse:
    _require_storable_id(product_id)
    with translate_store_errors("Error updating product.", DRIVER_ERRORS):
        row = await repository.replace_product(
            db,
            product_id,
            nome=payload.nome,
            descricao=payload.descricao,
            preco=payload.preco,
        )
    if row is None:
        raise NotFoundError(PRODUCT_NOT_FOUND)
    return _to_product_response(row)


async def delete_product(db: RelationalPool, product_id: int) -> schemas.MessageResponse:
    _require_storable_id(product_id)
    with translate_store_errors("Error deleting product.", DRIVER_ERRORS):
        deleted = await repository.delete_product(db, product_id)
    if not deleted:
        raise NotFoundError(PRODUCT_NOT_FOUND)
    return schemas.MessageResponse(message="Product deleted.")
