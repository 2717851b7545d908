"""
Product API schemas (request/response models).
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ProductRequest(BaseModel):
    """
    Used for create and for update: update replaces every column, so all
    fields are required both times.
    """

    nome: str = Field(..., min_length=1)
    descricao: str = Field(..., min_length=1)
    preco: float = Field(..., allow_inf_nan=False)


class ProductResponse(BaseModel):
    id: int
    nome: str
    descricao: str
    preco: float


class MessageResponse(BaseModel):
    message: str
