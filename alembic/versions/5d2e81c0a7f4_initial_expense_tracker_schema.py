"""initial expense tracker schema

Revision ID: 5d2e81c0a7f4
Revises:
Create Date: 2025-07-09 18:42:10.120934

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel

# revision identifiers, used by Alembic.
revision: str = '5d2e81c0a7f4'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

TRANSACTION_TYPE = sa.Enum('income', 'expense', name='transactiontype')
RECURRENCE_FREQUENCY = sa.Enum('daily', 'weekly', 'monthly', 'yearly', name='recurrencefrequency')
ACCOUNT_TYPE = sa.Enum('debit_card', 'cash', 'paypal', 'credit_card', name='accounttype')

def upgrade() -> None:
    """Upgrade schema: create categories, transactions, subscriptions, budgets and accounts."""
    op.create_table(
        'category',
        sa.Column('id', sa.Integer(), primary_key=True, nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('icon_name', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('color_hex', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('type', TRANSACTION_TYPE, nullable=False),
        sa.UniqueConstraint('name', 'type', name='uq_category_name_type'),
    )
    op.create_index(op.f('ix_category_name'), 'category', ['name'])

    op.create_table(
        'account',
        sa.Column('id', sa.Integer(), primary_key=True, nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('account_type', ACCOUNT_TYPE, nullable=False),
        sa.Column('color_hex', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('last_four_digits', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('created_date', sa.DateTime(), nullable=False),
    )

    op.create_table(
        'recurring_subscription',
        sa.Column('id', sa.Integer(), primary_key=True, nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('frequency', RECURRENCE_FREQUENCY, nullable=False),
        sa.Column('start_date', sa.DateTime(), nullable=False),
        sa.Column('last_transaction_date', sa.DateTime(), nullable=True),
        sa.Column('next_due_date', sa.DateTime(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('type', TRANSACTION_TYPE, nullable=False),
        sa.Column('notes', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('category_id', sa.Integer(), sa.ForeignKey('category.id'), nullable=True),
    )
    op.create_index(op.f('ix_recurring_subscription_next_due_date'), 'recurring_subscription', ['next_due_date'])
    op.create_index(op.f('ix_recurring_subscription_category_id'), 'recurring_subscription', ['category_id'])

    op.create_table(
        'transaction',
        sa.Column('id', sa.Integer(), primary_key=True, nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('date', sa.DateTime(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('type', TRANSACTION_TYPE, nullable=False),
        sa.Column('notes', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('category_id', sa.Integer(), sa.ForeignKey('category.id'), nullable=True),
        sa.Column('recurring_subscription_id', sa.Integer(), sa.ForeignKey('recurring_subscription.id'), nullable=True),
        sa.Column('account_id', sa.Integer(), sa.ForeignKey('account.id'), nullable=True),
    )
    op.create_index(op.f('ix_transaction_date'), 'transaction', ['date'])
    op.create_index(op.f('ix_transaction_category_id'), 'transaction', ['category_id'])
    op.create_index(op.f('ix_transaction_recurring_subscription_id'), 'transaction', ['recurring_subscription_id'])

    op.create_table(
        'monthly_budget',
        sa.Column('id', sa.Integer(), primary_key=True, nullable=False),
        sa.Column('total_budget', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('month', sa.DateTime(), nullable=False),
        sa.UniqueConstraint('month', name='uq_monthly_budget_month'),
    )

    op.create_table(
        'category_budget',
        sa.Column('id', sa.Integer(), primary_key=True, nullable=False),
        sa.Column('allocated_amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('month', sa.DateTime(), nullable=False),
        sa.Column('category_id', sa.Integer(), sa.ForeignKey('category.id'), nullable=False),
        sa.Column('monthly_budget_id', sa.Integer(), sa.ForeignKey('monthly_budget.id'), nullable=True),
        sa.UniqueConstraint('month', 'category_id', name='uq_category_budget_month_category'),
    )
    op.create_index(op.f('ix_category_budget_category_id'), 'category_budget', ['category_id'])
    op.create_index(op.f('ix_category_budget_monthly_budget_id'), 'category_budget', ['monthly_budget_id'])

def downgrade() -> None:
    """Downgrade schema: drop all expense tracker tables."""
    op.drop_table('category_budget')
    op.drop_table('monthly_budget')
    op.drop_table('transaction')
    op.drop_table('recurring_subscription')
    op.drop_table('account')
    op.drop_table('category')
    bind = op.get_bind()
    for enum in (ACCOUNT_TYPE, RECURRENCE_FREQUENCY, TRANSACTION_TYPE):
        enum.drop(bind, checkfirst=True)
