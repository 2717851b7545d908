"""
Product CRUD endpoints (relational store).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status

from core.audit import AuditLogger
from core.connections import get_audit, get_relational_pool
from core.db import RelationalPool

from . import schemas, service

router = APIRouter()


@router.get("/mysql/testar-conexao")
async def test_connection(
    request: Request,
    db: RelationalPool = Depends(get_relational_pool),
    audit: AuditLogger = Depends(get_audit),
) -> dict:
    result = await service.check_connection(db)
    audit.info("Relational store connection tested.", request)
    return result


@router.get("/produtos", response_model=list[schemas.ProductResponse])
async def list_products(
    request: Request,
    db: RelationalPool = Depends(get_relational_pool),
    audit: AuditLogger = Depends(get_audit),
) -> list[schemas.ProductResponse]:
    products = await service.list_products(db)
    audit.info("Products listed.", request, {"count": len(products)})
    return products


@router.post(
    "/produtos",
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.ProductResponse,
)
async def create_product(
    payload: schemas.ProductRequest,
    request: Request,
    db: RelationalPool = Depends(get_relational_pool),
    audit: AuditLogger = Depends(get_audit),
) -> schemas.ProductResponse:
    product = await service.create_product(db, payload)
    audit.info("Product created.", request, {"id": product.id})
    return product


@router.get("/produtos/{product_id}", response_model=schemas.ProductResponse)
async def get_product(
    product_id: int,
    request: Request,
    db: RelationalPool = Depends(get_relational_pool),
    audit: AuditLogger = Depends(get_audit),
) -> schemas.ProductResponse:
    product = await service.get_product(db, product_id)
    audit.info("Product found.", request, {"id": product.id})
    return product


@router.put("/produtos/{product_id}", response_model=schemas.ProductResponse)
async def replace_product(
    product_id: int,
    payload: schemas.ProductRequest,
    request: Request,
    db: RelationalPool = Depends(get_relational_pool),
    audit: AuditLogger = Depends(get_audit),
) -> schemas.ProductResponse:
    """
    Full replace: `nome`, `descricao` and `preco` must all be supplied.
    """
    product = await service.replace_product(db, product_id, payload)
    audit.info("Product updated.", request, {"id": product.id})
    return product


@router.delete("/produtos/{product_id}", response_model=schemas.MessageResponse)
async def delete_product(
    product_id: int,
    request: Request,
    db: RelationalPool = Depends(get_relational_pool),
    audit: AuditLogger = Depends(get_audit),
) -> schemas.MessageResponse:
    result = await service.delete_product(db, product_id)
    audit.info("Product deleted.", request, {"id": product_id})
    return result
