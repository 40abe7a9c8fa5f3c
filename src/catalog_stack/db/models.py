"""
catalog_stack.db.models

Relational schema for the catalog.

Responsibilities:
- Define the `Product` ORM model (table `produtos`).
- Hold the seed rows inserted on first initialization.
"""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from catalog_stack.db.base import Base


class Product(Base):
    __tablename__ = "produtos"

    # Client-supplied ids are accepted on insert; otherwise the backend assigns one.
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    nome: Mapped[str] = mapped_column(String(256), nullable=False, default="")
    preco: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)


SEED_PRODUCTS: tuple[dict[str, object], ...] = (
    {"id": 1, "nome": "Produto 1", "preco": Decimal("10.99")},
    {"id": 2, "nome": "Produto 2", "preco": Decimal("20.50")},
)

# PostgreSQL serial sequences do not advance when a row is inserted with an explicit id.
RESYNC_PRODUCT_ID_SEQUENCE = (
    "SELECT setval(pg_get_serial_sequence('produtos', 'id'), "
    "(SELECT MAX(id) FROM produtos))"
)


# --- Module Notes -----------------------------------------------------------
# Numeric(18, 2) keeps prices fixed-point with two fractional digits on every backend.
