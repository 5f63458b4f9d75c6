"""initial cloud schema

Revision ID: p001_initial_cloud_schema
Revises:
Create Date: 2026-09-28 00:00:00.000000

Creates the hosted row store used by store-mode sessions:
- stores / profiles: tenancy and identities (settings JSON on the store row)
- products / product_images: catalog with JSON variants and pack components
- transactions / purchases: immutable sales and stock receipts
- cash_shifts / cash_movements: drawer accountability
- customers / suppliers: store parties
- leads: landing-form prospects (global)

The device-local key-value table lives on a separate bind and is not
managed by these migrations.
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'p001_initial_cloud_schema'
down_revision = None
branch_labels = None
depends_on = None


def _created_at():
    return sa.Column('created_at', sa.DateTime(timezone=True), nullable=False,
                     server_default=sa.text('CURRENT_TIMESTAMP'))


def upgrade():
    # ============================================================================
    # stores / profiles: tenancy
    # ============================================================================
    op.create_table(
        'stores',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=True),
        sa.Column('settings', sa.JSON(), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'profiles',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=True),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=16), nullable=False, server_default='admin'),
        sa.Column('store_id', sa.String(length=36), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(['store_id'], ['stores.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_profiles_email', 'profiles', ['email'], unique=True)
    op.create_index('ix_profiles_store_id', 'profiles', ['store_id'])

    op.create_table(
        'leads',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('business_name', sa.String(length=120), nullable=True),
        sa.Column('phone', sa.String(length=32), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False, server_default='NEW'),
        _created_at(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('phone'),
    )
    op.create_index('ix_leads_created_at', 'leads', ['created_at'])

    # ============================================================================
    # catalog
    # ============================================================================
    op.create_table(
        'products',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('store_id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('price', sa.Float(), nullable=False, server_default='0'),
        sa.Column('stock', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('category', sa.String(length=64), nullable=True),
        sa.Column('barcode', sa.String(length=64), nullable=True),
        sa.Column('has_variants', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('variants', sa.JSON(), nullable=True),
        sa.Column('is_pack', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('pack_items', sa.JSON(), nullable=True),
        _created_at(),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.ForeignKeyConstraint(['store_id'], ['stores.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_products_store_id', 'products', ['store_id'])
    op.create_index('ix_products_store_barcode', 'products', ['store_id', 'barcode'])

    op.create_table(
        'product_images',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('product_id', sa.String(length=64), nullable=False),
        sa.Column('store_id', sa.String(length=36), nullable=False),
        sa.Column('image_data', sa.Text(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(['store_id'], ['stores.id']),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True,
    )
    op.create_index('ix_product_images_product_id', 'product_images', ['product_id'])
    op.create_index('ix_product_images_store_id', 'product_images', ['store_id'])

    # ============================================================================
    # sales / purchases
    # ============================================================================
    op.create_table(
        'transactions',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('store_id', sa.String(length=36), nullable=False),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('items', sa.JSON(), nullable=False),
        sa.Column('subtotal', sa.Float(), nullable=False, server_default='0'),
        sa.Column('tax', sa.Float(), nullable=False, server_default='0'),
        sa.Column('discount', sa.Float(), nullable=False, server_default='0'),
        sa.Column('total', sa.Float(), nullable=False, server_default='0'),
        sa.Column('profit', sa.Float(), nullable=False, server_default='0'),
        sa.Column('payment_method', sa.String(length=32), nullable=True),
        sa.Column('payments', sa.JSON(), nullable=True),
        sa.Column('shift_id', sa.String(length=36), nullable=True),
        sa.ForeignKeyConstraint(['store_id'], ['stores.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_transactions_store_id', 'transactions', ['store_id'])
    op.create_index('ix_transactions_shift_id', 'transactions', ['shift_id'])
    op.create_index('ix_transactions_store_date', 'transactions', ['store_id', 'date'])

    op.create_table(
        'purchases',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('store_id', sa.String(length=36), nullable=False),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('supplier_id', sa.String(length=36), nullable=True),
        sa.Column('total', sa.Float(), nullable=False, server_default='0'),
        sa.Column('items', sa.JSON(), nullable=False),
        sa.ForeignKeyConstraint(['store_id'], ['stores.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_purchases_store_id', 'purchases', ['store_id'])

    # ============================================================================
    # cash shifts
    # ============================================================================
    op.create_table(
        'cash_shifts',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('store_id', sa.String(length=36), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False, server_default='OPEN'),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('start_amount', sa.Float(), nullable=False, server_default='0'),
        sa.Column('end_amount', sa.Float(), nullable=True),
        sa.Column('total_sales_cash', sa.Float(), nullable=False, server_default='0'),
        sa.Column('total_sales_digital', sa.Float(), nullable=False, server_default='0'),
        _created_at(),
        sa.ForeignKeyConstraint(['store_id'], ['stores.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_cash_shifts_store_id', 'cash_shifts', ['store_id'])
    op.create_index('ix_cash_shifts_status', 'cash_shifts', ['status'])
    op.create_index('ix_cash_shifts_start_time', 'cash_shifts', ['start_time'])

    op.create_table(
        'cash_movements',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('store_id', sa.String(length=36), nullable=False),
        sa.Column('shift_id', sa.String(length=36), nullable=False),
        sa.Column('type', sa.String(length=16), nullable=False),
        sa.Column('amount', sa.Float(), nullable=False, server_default='0'),
        sa.Column('description', sa.String(length=255), nullable=True),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['store_id'], ['stores.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_cash_movements_store_id', 'cash_movements', ['store_id'])
    op.create_index('ix_cash_movements_shift_id', 'cash_movements', ['shift_id'])
    op.create_index('ix_cash_movements_store_timestamp', 'cash_movements', ['store_id', 'timestamp'])

    # ============================================================================
    # parties
    # ============================================================================
    op.create_table(
        'customers',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('store_id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('phone', sa.String(length=32), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.ForeignKeyConstraint(['store_id'], ['stores.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_customers_store_id', 'customers', ['store_id'])

    op.create_table(
        'suppliers',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('store_id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('contact', sa.String(length=120), nullable=True),
        sa.Column('phone', sa.String(length=32), nullable=True),
        sa.ForeignKeyConstraint(['store_id'], ['stores.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_suppliers_store_id', 'suppliers', ['store_id'])


def downgrade():
    """Drop all tables (destructive operation)."""
    op.drop_table('suppliers')
    op.drop_table('customers')
    op.drop_table('cash_movements')
    op.drop_table('cash_shifts')
    op.drop_table('purchases')
    op.drop_table('transactions')
    op.drop_table('product_images')
    op.drop_table('products')
    op.drop_table('leads')
    op.drop_table('profiles')
    op.drop_table('stores')
