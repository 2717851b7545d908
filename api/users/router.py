"""
User CRUD endpoints (document store).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status
from pymongo.asynchronous.database import AsyncDatabase

from core.audit import AuditLogger
from core.connections import get_audit, get_document_store

from . import schemas, service

router = APIRouter()


@router.get("/mongodb/testar-conexao")
async def test_connection(
    request: Request,
    db: AsyncDatabase = Depends(get_document_store),
    audit: AuditLogger = Depends(get_audit),
) -> dict:
    """
    Reconnects first if the client is not ready, then reads one user.
    """
    result = await service.check_connection(db)
    audit.info("Document store connection tested.", request)
    return result


@router.post(
    "/usuarios",
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.UserResponse,
)
async def create_user(
    payload: schemas.UserCreateRequest,
    request: Request,
    db: AsyncDatabase = Depends(get_document_store),
    audit: AuditLogger = Depends(get_audit),
) -> schemas.UserResponse:
    user = await service.create_user(db, payload)
    audit.info("User created.", request, {"_id": user.id})
    return user


@router.get("/usuarios", response_model=list[schemas.UserResponse])
async def list_users(
    request: Request,
    db: AsyncDatabase = Depends(get_document_store),
    audit: AuditLogger = Depends(get_audit),
) -> list[schemas.UserResponse]:
    users = await service.list_users(db)
    audit.info("Users listed.", request, {"count": len(users)})
    return users


@router.get("/usuarios/{user_id}", response_model=schemas.UserResponse)
async def get_user(
    user_id: str,
    request: Request,
    db: AsyncDatabase = Depends(get_document_store),
    audit: AuditLogger = Depends(get_audit),
) -> schemas.UserResponse:
    user = await service.get_user(db, user_id)
    audit.info("User found.", request, user.model_dump(by_alias=True))
    return user


@router.put("/usuarios/{user_id}", response_model=schemas.UserResponse)
async def update_user(
    user_id: str,
    payload: schemas.UserUpdateRequest,
    request: Request,
    db: AsyncDatabase = Depends(get_document_store),
    audit: AuditLogger = Depends(get_audit),
) -> schemas.UserResponse:
    """
    Partial update: fields missing from the body keep their stored value.
    """
    user = await service.update_user(db, user_id, payload)
    audit.info("User updated.", request, user.model_dump(by_alias=True))
    return user


@router.delete("/usuarios/{user_id}", response_model=schemas.MessageResponse)
async def delete_user(
    user_id: str,
    request: Request,
    db: AsyncDatabase = Depends(get_document_store),
    audit: AuditLogger = Depends(get_audit),
) -> schemas.MessageResponse:
    result = await service.delete_user(db, user_id)
    audit.info("User deleted.", request, {"_id": user_id})
    return result
