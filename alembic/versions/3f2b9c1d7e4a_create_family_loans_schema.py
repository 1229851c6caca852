"""create_family_loans_schema

Revision ID: 3f2b9c1d7e4a
Revises:
Create Date: 2026-10-18 09:12:41.518204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f2b9c1d7e4a'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """
    Create the family loans schema.

    Creates:
    - tenants table (family accounts, unique family_name)
    - family_members table, scoped by tenant_id
    - loans table, scoped by tenant_id

    Both child tables cascade on tenant deletion. loans.borrowed_by is
    a plain name, not a foreign key to family_members.
    """
    # 1. Create tenants table
    op.create_table(
        'tenants',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('family_name', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_tenants_family_name', 'tenants', ['family_name'], unique=True)

    # 2. Create family_members table
    op.create_table(
        'family_members',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('tenant_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['tenant_id'], ['tenants.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_family_members_tenant_id', 'family_members', ['tenant_id'])

    # 3. Create loans table
    op.create_table(
        'loans',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('tenant_id', sa.Integer(), nullable=False),
        sa.Column('borrowed_by', sa.String(length=255), nullable=False),
        sa.Column('lender_name', sa.String(length=255), nullable=False),
        sa.Column('loan_source', sa.Enum('bank', 'shg', name='loansource', native_enum=False), nullable=False),
        sa.Column('amount', sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('interest_rate', sa.Numeric(precision=7, scale=3), nullable=True),
        sa.Column('notes', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['tenant_id'], ['tenants.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )

    # 4. Add indexes for tenant-scoped queries
    op.create_index('ix_loans_tenant_id', 'loans', ['tenant_id'])
    op.create_index('ix_loans_tenant_created', 'loans', ['tenant_id', 'created_at'])


def downgrade() -> None:
    """
    Drop the family loans schema.

    WARNING: This deletes all tenants, family members and loans.
    """
    op.drop_index('ix_loans_tenant_created', table_name='loans')
    op.drop_index('ix_loans_tenant_id', table_name='loans')
    op.drop_table('loans')

    op.drop_index('ix_family_members_tenant_id', table_name='family_members')
    op.drop_table('family_members')

    op.drop_index('ix_tenants_family_name', table_name='tenants')
    op.drop_table('tenants')
