"""initial schema: credentials, persons, expense categories, expenses

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None

PAYMENT_METHODS = ('CASH', 'CREDIT_CARD', 'DEBIT_CARD', 'BANK_TRANSFER', 'DIGITAL_WALLET', 'CHECK', 'OTHER')
FREQUENCIES = ('DAILY', 'WEEKLY', 'MONTHLY', 'QUARTERLY', 'YEARLY')


def upgrade() -> None:
    op.create_table(
        'credentials',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('role', sa.Enum('ADMIN', 'USER', name='credential_role'), nullable=False),
        sa.Column('is_enabled', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_credentials_username', 'credentials', ['username'], unique=True)
    op.create_index('ix_credentials_email', 'credentials', ['email'], unique=True)

    op.create_table(
        'persons',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('first_name', sa.String(length=50), nullable=False),
        sa.Column('last_name', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone_number', sa.String(length=20), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_persons_email', 'persons', ['email'], unique=True)

    op.create_table(
        'expense_categories',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('description', sa.String(length=255), nullable=True),
        sa.Column('color', sa.String(length=20), nullable=True),
        sa.Column('icon', sa.String(length=50), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_expense_categories_name', 'expense_categories', ['name'], unique=True)

    op.create_table(
        'expenses',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('description', sa.String(length=255), nullable=False),
        sa.Column('amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('expense_date', sa.Date(), nullable=False),
        sa.Column('owner_id', sa.Integer(), sa.ForeignKey('credentials.id'), nullable=False),
        sa.Column('category_id', sa.Integer(), sa.ForeignKey('expense_categories.id'), nullable=False),
        sa.Column('notes', sa.String(length=500), nullable=True),
        sa.Column('payment_method', sa.Enum(*PAYMENT_METHODS, name='payment_method'), nullable=False),
        sa.Column('receipt_url', sa.String(length=500), nullable=True),
        sa.Column('is_recurring', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('recurring_frequency', sa.Enum(*FREQUENCIES, name='recurring_frequency'), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_expenses_expense_date', 'expenses', ['expense_date'])
    op.create_index('ix_expenses_owner_id', 'expenses', ['owner_id'])
    op.create_index('ix_expenses_category_id', 'expenses', ['category_id'])


def downgrade() -> None:
    op.drop_table('expenses')
    op.drop_table('expense_categories')
    op.drop_table('persons')
    op.drop_table('credentials')
    sa.Enum(name='recurring_frequency').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='payment_method').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='credential_role').drop(op.get_bind(), checkfirst=True)
