"""
User API schemas (request/response models).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class UserCreateRequest(BaseModel):
    nome: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)


class UserUpdateRequest(BaseModel):
    # Partial update: only fields present in the body are written.
    nome: str | None = Field(default=None, min_length=1)
    email: str | None = Field(default=None, min_length=1)

    def changes(self) -> dict[str, str]:
        return {k: v for (k, v) in self.model_dump(exclude_unset=True).items() if v is not None}


class UserResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    nome: str
    email: str


class MessageResponse(BaseModel):
    message: str
