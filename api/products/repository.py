"""
Product persistence (raw SQL).

Table:
    CREATE TABLE produto (
        id        SERIAL PRIMARY KEY,
        nome      TEXT NOT NULL,
        descricao TEXT NOT NULL,
        preco     NUMERIC NOT NULL
    );
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from core.db import RelationalPool


async def ping(db: RelationalPool) -> dict[str, Any] | None:
    return await db.fetch_one("SELECT 1 AS test")


async def create_product(db: RelationalPool, *, nome: str, descricao: str, preco: float) -> dict[str, Any]:
    row = await db.fetch_one(
        """
        INSERT INTO produto (nome, descricao, preco)
        VALUES ($1, $2, $3)
        RETURNING id, nome, descricao, preco
        """,
        nome,
        descricao,
        Decimal(str(preco)),
    )
    if row is None:
        raise RuntimeError("Failed to create product.")
    return row


async def list_products(db: RelationalPool) -> list[dict[str, Any]]:
    return await db.fetch_all(
        """
        SELECT id, nome, descricao, preco
        FROM produto
        ORDER BY id
        """
    )


async def get_product(db: RelationalPool, product_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        SELECT id, nome, descricao, preco
        FROM produto
        WHERE id = $1
        """,
        product_id,
    )


async def replace_product(
    db: RelationalPool,
    product_id: int,
    *,
    nome: str,
    descricao: str,
    preco: float,
) -> dict[str, Any] | None:
    """
    Overwrite all business columns. Returns None when no row matched.
    """
    return await db.fetch_one(
        """
        UPDATE produto
        SET nome = $1,
            descricao = $2,
            preco = $3
        WHERE id = $4
        RETURNING id, nome, descricao, preco
        """,
        nome,
        descricao,
        Decimal(str(preco)),
        product_id,
    )


async def delete_product(db: RelationalPool, product_id: int) -> bool:
    row = await db.fetch_one(
        """
        DELETE FROM produto
        WHERE id = $1
        RETURNING id
        """,
        product_id,
    )
    return row is not None
