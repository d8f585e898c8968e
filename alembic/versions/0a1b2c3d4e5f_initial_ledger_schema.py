"""Initial ledger schema

Revision ID: 0a1b2c3d4e5f
Revises:
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0a1b2c3d4e5f'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'accounts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('identifier', sa.String(length=255), nullable=False),
        sa.Column('link', sa.String(length=2048), nullable=True),
        sa.Column('category', sa.String(length=100), nullable=True),
        sa.Column('thumbnail_url', sa.String(length=2048), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='watchlist'),
        sa.Column('expected_price', sa.Numeric(precision=18, scale=4), nullable=True),
        sa.Column('potential_income', sa.Numeric(precision=18, scale=4), nullable=True),
        sa.Column('loss_reason', sa.Text(), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('password', sa.String(length=255), nullable=True),
        sa.Column('account_email', sa.String(length=255), nullable=True),
        sa.Column('account_password', sa.String(length=255), nullable=True),
        sa.Column('account_2nd_email', sa.String(length=255), nullable=True),
        sa.Column('account_2nd_password', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint(
            "status IN ('watchlist', 'purchased', 'sold', 'losses')",
            name='ck_accounts_status',
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_accounts_identifier'), 'accounts', ['identifier'], unique=False)
    op.create_index(op.f('ix_accounts_link'), 'accounts', ['link'], unique=False)
    op.create_index(op.f('ix_accounts_category'), 'accounts', ['category'], unique=False)
    op.create_index(op.f('ix_accounts_status'), 'accounts', ['status'], unique=False)

    op.create_table(
        'transactions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('account_id', sa.Integer(), nullable=False),
        sa.Column('buy_price', sa.Numeric(precision=18, scale=4), nullable=True),
        sa.Column('sell_price', sa.Numeric(precision=18, scale=4), nullable=True),
        sa.Column('transaction_date', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['account_id'], ['accounts.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_transactions_account_id'), 'transactions', ['account_id'], unique=True)


def downgrade() -> None:
    op.drop_index(op.f('ix_transactions_account_id'), table_name='transactions')
    op.drop_table('transactions')
    op.drop_index(op.f('ix_accounts_status'), table_name='accounts')
    op.drop_index(op.f('ix_accounts_category'), table_name='accounts')
    op.drop_index(op.f('ix_accounts_link'), table_name='accounts')
    op.drop_index(op.f('ix_accounts_identifier'), table_name='accounts')
    op.drop_table('accounts')
