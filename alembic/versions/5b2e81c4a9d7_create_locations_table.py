"""create_locations_table

Revision ID: 5b2e81c4a9d7
Revises: 
Create Date: 2026-10-12 10:14:32.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5b2e81c4a9d7'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # IF NOT EXISTS: the API may already have created the table on first access
    op.execute("""
        CREATE TABLE IF NOT EXISTS locations (
            id SERIAL PRIMARY KEY,
            name VARCHAR(255) NOT NULL,
            lat DOUBLE PRECISION NOT NULL,
            lng DOUBLE PRECISION NOT NULL,
            day VARCHAR(10) NOT NULL,
            time VARCHAR(50) NOT NULL,
            description TEXT NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT chk_locations_day CHECK (day IN ('day1', 'day2', 'day3', 'day4', 'day5')),
            CONSTRAINT chk_locations_lat CHECK (lat BETWEEN -90 AND 90),
            CONSTRAINT chk_locations_lng CHECK (lng BETWEEN -180 AND 180)
        )
    """)

    # B-tree index backing the day-ordered listing
    op.execute("""
        CREATE INDEX IF NOT EXISTS idx_locations_day
        ON locations (day)
    """)


def downgrade() -> None:
    """Downgrade schema."""
    op.execute("DROP INDEX IF EXISTS idx_locations_day")
    op.execute("DROP TABLE IF EXISTS locations")
