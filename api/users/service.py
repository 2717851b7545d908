"""
User business logic.

Each operation is one store call; driver failures surface as
`StoreUnavailableError` carrying the driver message.
"""

from __future__ import annotations

from pymongo.asynchronous.database import AsyncDatabase

from core.errors import NotFoundError, translate_store_errors
from core.mongo import DRIVER_ERRORS

from . import repository, schemas

USER_NOT_FOUND = "User not found."


def _to_user_response(row: dict) -> schemas.UserResponse:
    return schemas.UserResponse(
        id=str(row["_id"]),
        nome=str(row.get("nome") or ""),
        email=str(row.get("email") or ""),
    )


async def create_user(db: AsyncDatabase, payload: schemas.UserCreateRequest) -> schemas.UserResponse:
    with translate_store_errors("Error creating user.", DRIVER_ERRORS):
        row = await repository.create_user(db, nome=payload.nome, email=payload.email)
    return _to_user_response(row)


async def list_users(db: AsyncDatabase) -> list[schemas.UserResponse]:
    with translate_store_errors("Error listing users.", DRIVER_ERRORS):
        rows = await repository.list_users(db)
    return [_to_user_response(row) for row in rows]


async def get_user(db: AsyncDatabase, user_id: str) -> schemas.UserResponse:
    with translate_store_errors("Error fetching user.", DRIVER_ERRORS):
        row = await repository.get_user(db, user_id)
    if row is None:
        raise NotFoundError(USER_NOT_FOUND)
    return _to_user_response(row)


async def update_user(
    db: AsyncDatabase,
    user_id: str,
    payload: schemas.UserUpdateRequest,
) -> schemas.UserResponse:
    with translate_store_errors("Error updating user.", DRIVER_ERRORS):
        row = await repository.update_user(db, user_id, payload.changes())
    if row is None:
        raise NotFoundError(USER_NOT_FOUND)
    return _to_user_response(row)


async def delete_user(db: AsyncDatabase, user_id: str) -> schemas.MessageResponse:
    with translate_store_errors("Error deleting user.", DRIVER_ERRORS):
        deleted = await repository.delete_user(db, user_id)
    if not deleted:
        raise NotFoundError(USER_NOT_FOUND)
    return schemas.MessageResponse(message="User deleted.")


async def check_connection(db: AsyncDatabase) -> dict:
    with translate_store_errors("Document store connection failed.", DRIVER_ERRORS):
        row = await repository.find_any_user(db)
    if row is None:
        return {"message": "Document store connection OK, no users found.", "user_found": False}
    return {"message": "Document store connection OK, user found.", "user_found": True}
