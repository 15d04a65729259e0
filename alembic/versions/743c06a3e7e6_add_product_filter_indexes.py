"""add_product_filter_indexes

Revision ID: 743c06a3e7e6
Revises: cfc783828754
Create Date: 2026-02-20 14:55:20.033567
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '743c06a3e7e6'
down_revision: Union[str, Sequence[str], None] = 'cfc783828754'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""

    # PRODUCTS (category / brand filters on the listing endpoint)
    op.create_index(
        "ix_products_category_id",
        "products",
        ["category_id"],
        unique=False,
    )

    op.create_index(
        "ix_products_brand_id",
        "products",
        ["brand_id"],
        unique=False,
    )


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_index("ix_products_brand_id", table_name="products")
    op.drop_index("ix_products_category_id", table_name="products")
