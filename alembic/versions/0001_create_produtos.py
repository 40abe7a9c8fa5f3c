"""create produtos table

Revision ID: 0001
Revises:
Create Date: 2026-10-18
"""

from __future__ import annotations

from decimal import Decimal

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    produtos = op.create_table(
        "produtos",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("nome", sa.String(length=256), nullable=False),
        sa.Column("preco", sa.Numeric(18, 2), nullable=False),
    )
    op.bulk_insert(
        produtos,
        [
            {"id": 1, "nome": "Produto 1", "preco": Decimal("10.99")},
            {"id": 2, "nome": "Produto 2", "preco": Decimal("20.50")},
        ],
    )
    if op.get_bind().dialect.name == "postgresql":
        # Seed rows carry explicit ids; move the serial sequence past them.
        op.execute(
            "SELECT setval(pg_get_serial_sequence('produtos', 'id'), "
            "(SELECT MAX(id) FROM produtos))"
        )


def downgrade() -> None:
    op.drop_table("produtos")
