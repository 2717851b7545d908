"""
User persistence (MongoDB collection `usuarios`).
"""

from __future__ import annotations

from typing import Any

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ReturnDocument
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase

COLLECTION = "usuarios"
FIELDS = ("nome", "email")


def collection(db: AsyncDatabase) -> AsyncCollection:
    return db[COLLECTION]


def _object_id(user_id: str) -> ObjectId | None:
    # Ids that cannot be an ObjectId cannot match any record.
    try:
        return ObjectId(user_id)
    except (InvalidId, TypeError):
        return None


def _to_row(doc: dict[str, Any]) -> dict[str, Any]:
    row = {"_id": str(doc["_id"])}
    for field in FIELDS:
        row[field] = doc.get(field)
    return row


async def create_user(db: AsyncDatabase, *, nome: str, email: str) -> dict[str, Any]:
    doc = {"nome": nome, "email": email}
    result = await collection(db).insert_one(doc)
    return _to_row({**doc, "_id": result.inserted_id})


async def list_users(db: AsyncDatabase) -> list[dict[str, Any]]:
    cursor = collection(db).find({})
    return [_to_row(doc) async for doc in cursor]


async def get_user(db: AsyncDatabase, user_id: str) -> dict[str, Any] | None:
    oid = _object_id(user_id)
    if oid is None:
        return None
    doc = await collection(db).find_one({"_id": oid})
    return _to_row(doc) if doc is not None else None


async def find_any_user(db: AsyncDatabase) -> dict[str, Any] | None:
    doc = await collection(db).find_one({})
    return _to_row(doc) if doc is not None else None


async def update_user(db: AsyncDatabase, user_id: str, changes: dict[str, Any]) -> dict[str, Any] | None:
    """
    Merge `changes` onto the stored record and return the post-update record.
    """
    oid = _object_id(user_id)
    if oid is None:
        return None
    if not changes:
        return await get_user(db, user_id)

    doc = await collection(db).find_one_and_update(
        {"_id": oid},
        {"$set": changes},
        return_document=ReturnDocument.AFTER,
    )
    return _to_row(doc) if doc is not None else None


async def delete_user(db: AsyncDatabase, user_id: str) -> bool:
    oid = _object_id(user_id)
    if oid is None:
        return False
    result = await collection(db).delete_one({"_id": oid})
    return result.deleted_count > 0
