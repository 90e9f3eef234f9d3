"""seed asset categories

Revision ID: 8d4f0b6e2a71
Revises: 5c1e2d7a9b30
Create Date: 2025-06-02 09:05:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.sql import table, column
from app.core.constants import DEFAULT_CATEGORIES


# revision identifiers, used by Alembic.
revision: str = '8d4f0b6e2a71'
down_revision: Union[str, None] = '5c1e2d7a9b30'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    categories_table = table('asset_categories',
        column('id', sa.String),
        column('name', sa.String),
        column('description', sa.String),
        column('color', sa.String),
        column('icon', sa.String)
    )

    op.bulk_insert(categories_table, [dict(category) for category in DEFAULT_CATEGORIES])


def downgrade() -> None:
    ids = ", ".join(f"'{category['id']}'" for category in DEFAULT_CATEGORIES)
    op.execute(f"DELETE FROM asset_categories WHERE id IN ({ids})")
