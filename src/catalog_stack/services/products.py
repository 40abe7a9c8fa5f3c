"""
catalog_stack.services.products

Product lifecycle service (transaction owner).

Responsibilities:
- CRUD over the relational `produtos` table via `ProductRepo`.
- Commit each write; relational errors propagate to the global handler.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from catalog_stack.db.repositories.products import ProductRepo
from catalog_stack.observability.logging import get_logger
from catalog_stack.schemas import Product
from catalog_stack.services.results import NOT_FOUND, NotFound, Ok

log = get_logger(__name__)


class ProductService:
    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session
        self._products = ProductRepo(session)

    async def list_products(self) -> Ok[list[Product]]:
        rows = await self._products.list_all()
        return Ok([Product.model_validate(row) for row in rows])

    async def get_product(self, product_id: int) -> Ok[Product] | NotFound:
        row = await self._products.get(product_id)
        if row is None:
            return NOT_FOUND
        return Ok(Product.model_validate(row))

    async def create_product(self, body: Product) -> Ok[Product]:
        # A non-zero client id is inserted as-is; duplicates fail at commit.
        row = await self._products.add(nome=body.nome, preco=body.preco, product_id=body.id or None)
        await self._session.commit()
        log.info("product_created", product_id=row.id)
        return Ok(Product.model_validate(row))

    async def update_product(self, product_id: int, body: Product) -> Ok[None] | NotFound:
        row = await self._products.get(product_id)
        if row is None:
            return NOT_FOUND
        # Only name and price are mutable; the body id is ignored.
        await self._products.update(row, nome=body.nome, preco=body.preco)
        await self._session.commit()
        log.info("product_updated", product_id=product_id)
        return Ok(None)

    async def delete_product(self, product_id: int) -> Ok[None] | NotFound:
        row = await self._products.get(product_id)
        if row is None:
            return NOT_FOUND
        await self._products.delete(row)
        await self._session.commit()
        log.info("product_deleted", product_id=product_id)
        return Ok(None)


# --- Module Notes -----------------------------------------------------------
# No optimistic concurrency: concurrent updates to the same id are last-write-wins.
