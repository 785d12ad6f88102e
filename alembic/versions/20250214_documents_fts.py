"""Full-text table of document stems (SQLite only)

Revision ID: 002_documents_fts
Revises: 001_initial
Create Date: 2025-02-14 00:00:00.000000

Rows are filled by the service: DatabaseClient.initialize() rebuilds the
table whenever its row count differs from the documents table.
"""
from typing import Sequence, Union

from alembic import op

from catalog_service.infrastructure.database.models import DOCUMENTS_FTS, DOCUMENTS_FTS_DDL

# revision identifiers, used by Alembic.
revision: str = '002_documents_fts'
down_revision: Union[str, None] = '001_initial'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the FTS5 table on SQLite; other dialects score without it."""
    if op.get_bind().dialect.name != "sqlite":
        return
    op.execute(DOCUMENTS_FTS_DDL)


def downgrade() -> None:
    """Drop the FTS5 table."""
    if op.get_bind().dialect.name != "sqlite":
        return
    op.execute(f"DROP TABLE IF EXISTS {DOCUMENTS_FTS}")
