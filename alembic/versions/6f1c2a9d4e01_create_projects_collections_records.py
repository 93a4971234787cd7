"""create projects, collections and records tables

Revision ID: 6f1c2a9d4e01
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from collections.abc import Sequence

# revision identifiers, used by Alembic.
revision: str = '6f1c2a9d4e01'
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql


def upgrade() -> None:
    op.create_table(
        'projects',
        sa.Column('id', sa.String(length=36), nullable=False, comment='Project ID (UUID)'),
        sa.Column('name', sa.String(length=100), nullable=False, comment='Project display name'),
        sa.Column('api_key_hash', sa.String(length=64), nullable=False, comment='SHA-256 hash of the API key'),
        sa.Column('key_prefix', sa.String(length=8), nullable=False, comment='First characters of the API key'),
        sa.Column('owner_account_id', sa.String(length=64), nullable=False, comment='Owning account reference'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_projects_api_key_hash', 'projects', ['api_key_hash'], unique=True)
    op.create_index('ix_projects_owner_account_id', 'projects', ['owner_account_id'], unique=False)

    op.create_table(
        'collections',
        sa.Column('id', sa.String(length=36), nullable=False, comment='Collection ID (UUID)'),
        sa.Column('project_id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False, comment='Collection name (alphanumeric + underscores)'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.ForeignKeyConstraint(['project_id'], ['projects.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('project_id', 'name', name='uq_collections_project_name'),
    )
    op.create_index('ix_collections_project_id', 'collections', ['project_id'], unique=False)

    op.create_table(
        'records',
        sa.Column('seq', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('id', sa.String(length=36), nullable=False, comment='Record ID (UUID)'),
        sa.Column('collection_id', sa.String(length=36), nullable=False),
        sa.Column('data', sa.JSON().with_variant(postgresql.JSONB(), 'postgresql'), nullable=False, comment='Record payload'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['collection_id'], ['collections.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('seq'),
    )
    op.create_index('ix_records_id', 'records', ['id'], unique=True)
    op.create_index('ix_records_collection_created', 'records', ['collection_id', 'created_at'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_records_collection_created', table_name='records')
    op.drop_index('ix_records_id', table_name='records')
    op.drop_table('records')
    op.drop_index('ix_collections_project_id', table_name='collections')
    op.drop_table('collections')
    op.drop_index('ix_projects_owner_account_id', table_name='projects')
    op.drop_index('ix_projects_api_key_hash', table_name='projects')
    op.drop_table('projects')
