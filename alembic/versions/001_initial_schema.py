"""Initial schema

Revision ID: 001
Revises: None
Create Date: 2026-10-19

Creates the personal-finance schema:
- users, notification_preferences (1:1 with user)
- bank_accounts, bank_statements, transactions
- categories (shared lookup, seeded at application startup)
- goals, insights

Money columns are NUMERIC(14, 2). Every user-owned table cascades on user delete.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB


# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

MONEY = sa.Numeric(14, 2)


def upgrade() -> None:
    # ==========================================================================
    # USERS
    # ==========================================================================
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('currency', sa.String(10), nullable=False, server_default='INR'),
        sa.Column('monthly_salary', MONEY, nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'notification_preferences',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('weekly_report', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('bank_statement_reminder', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('goal_progress', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('insights', sa.Boolean(), nullable=False, server_default=sa.true()),
    )

    # ==========================================================================
    # BANKING
    # ==========================================================================
    op.create_table(
        'bank_accounts',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('type', sa.String(50), nullable=False),
        sa.Column('account_number', sa.String(64), nullable=True),
        sa.Column('balance', MONEY, nullable=False, server_default='0'),
        sa.Column('color', sa.String(20), nullable=True),
        sa.Column('short_code', sa.String(10), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_bank_accounts_user_id', 'bank_accounts', ['user_id'])
    op.create_index('ix_bank_accounts_account_number', 'bank_accounts', ['account_number'])

    op.create_table(
        'bank_statements',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('bank_account_id', sa.Integer(), sa.ForeignKey('bank_accounts.id', ondelete='SET NULL'), nullable=True),
        sa.Column('file_name', sa.String(255), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('processed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('uploaded_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_bank_statements_user_id', 'bank_statements', ['user_id'])

    op.create_table(
        'transactions',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('bank_account_id', sa.Integer(), sa.ForeignKey('bank_accounts.id', ondelete='SET NULL'), nullable=True),
        sa.Column('bank_statement_id', sa.Integer(), sa.ForeignKey('bank_statements.id', ondelete='CASCADE'), nullable=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('category', sa.String(100), nullable=True),
        sa.Column('amount', MONEY, nullable=False),
        sa.Column('type', sa.String(10), nullable=False),
        sa.Column('reference', sa.String(255), nullable=True),
        sa.Column('balance', MONEY, nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("type IN ('credit', 'debit')", name='ck_transactions_type'),
    )
    op.create_index('ix_transactions_user_date', 'transactions', ['user_id', 'date'])
    op.create_index('ix_transactions_bank_account_id', 'transactions', ['bank_account_id'])
    op.create_index('ix_transactions_bank_statement_id', 'transactions', ['bank_statement_id'])

    op.create_table(
        'categories',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(100), nullable=False, unique=True),
        sa.Column('color', sa.String(20), nullable=False),
        sa.Column('icon', sa.String(50), nullable=False),
        sa.Column('is_default', sa.Boolean(), nullable=False, server_default=sa.true()),
    )

    # ==========================================================================
    # GOALS AND INSIGHTS
    # ==========================================================================
    op.create_table(
        'goals',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('target_amount', MONEY, nullable=False),
        sa.Column('current_amount', MONEY, nullable=False, server_default='0'),
        sa.Column('deadline', sa.Date(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_ai_generated', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("status IN ('active', 'completed', 'cancelled')", name='ck_goals_status'),
    )
    op.create_index('ix_goals_user_id', 'goals', ['user_id'])

    op.create_table(
        'insights',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('type', sa.String(20), nullable=False, server_default='info'),
        sa.Column('category', sa.String(100), nullable=True),
        sa.Column('relevant_transactions', JSONB(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("type IN ('info', 'warning', 'success')", name='ck_insights_type'),
    )
    op.create_index('ix_insights_user_id', 'insights', ['user_id'])


def downgrade() -> None:
    op.drop_table('insights')
    op.drop_table('goals')
    op.drop_table('categories')
    op.drop_table('transactions')
    op.drop_table('bank_statements')
    op.drop_table('bank_accounts')
    op.drop_table('notification_preferences')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
