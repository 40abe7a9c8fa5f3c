"""
catalog_stack.db.repositories.products

Repository for `Product` rows.

Responsibilities:
- List, fetch, insert, update and delete products.
- Flush only; the service owns the transaction and commits.
"""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_stack.db.models import RESYNC_PRODUCT_ID_SEQUENCE, Product


class ProductRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_all(self) -> list[Product]:
        # Backend default order; no pagination.
        return list((await self._session.execute(select(Product))).scalars().all())

    async def get(self, product_id: int) -> Product | None:
        return await self._session.get(Product, product_id)

    async def add(self, *, nome: str, preco: Decimal, product_id: int | None = None) -> Product:
        product = Product(nome=nome, preco=preco)
        if product_id:
            product.id = product_id
        self._session.add(product)
        await self._session.flush()
        if product_id and self._session.get_bind().dialect.name == "postgresql":
            # Later server-assigned ids must not collide with the one just inserted.
            await self._session.execute(text(RESYNC_PRODUCT_ID_SEQUENCE))
        return product

    async def update(self, product: Product, *, nome: str, preco: Decimal) -> Product:
        product.nome = nome
        product.preco = preco
        await self._session.flush()
        return product

    async def delete(self, product: Product) -> None:
        await self._session.delete(product)
        await self._session.flush()
