from alembic import op
import sqlalchemy as sa

revision = '0001_init'
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.String(32), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(20), nullable=True),
        sa.Column('role', sa.String(10), nullable=False),
        sa.Column('is_active', sa.Boolean, nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_table(
        'products',
        sa.Column('id', sa.String(32), primary_key=True),
        sa.Column('title', sa.String(100), nullable=False),
        sa.Column('brand', sa.String(100), nullable=False),
        sa.Column('description', sa.Text, nullable=True),
        sa.Column('images', sa.JSON, nullable=False),
        sa.Column('category', sa.String(20), nullable=False),
        sa.Column('actual_price', sa.Numeric(10, 2), nullable=False),
        sa.Column('discount_price', sa.Numeric(10, 2), nullable=True),
        sa.Column('discount', sa.Integer, nullable=False),
        sa.Column('rating', sa.Float, nullable=False),
        sa.Column('total_ratings', sa.Integer, nullable=False),
        sa.Column('featured', sa.Boolean, nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('is_active', sa.Boolean, nullable=False),
        sa.Column('product_fit', sa.String(20), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_table(
        'product_sizes',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('product_id', sa.String(32), sa.ForeignKey('products.id', ondelete='CASCADE'), nullable=False),
        sa.Column('size', sa.String(5), nullable=False),
        sa.Column('stock', sa.Integer, nullable=False),
        sa.Column('in_stock', sa.Boolean, nullable=False),
        sa.UniqueConstraint('product_id', 'size', name='uq_product_sizes_product_size'),
        sa.CheckConstraint('stock >= 0', name='ck_product_sizes_stock_non_negative'),
    )
    op.create_index('ix_product_sizes_product_id', 'product_sizes', ['product_id'])
    op.create_table(
        'orders',
        sa.Column('id', sa.String(32), primary_key=True),
        sa.Column('order_number', sa.String(30), nullable=False),
        sa.Column('user_id', sa.String(32), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('total_amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('shipping_address', sa.JSON, nullable=False),
        sa.Column('delivery_address', sa.JSON, nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('payment_status', sa.String(20), nullable=False),
        sa.Column('payment_method', sa.String(30), nullable=False),
        sa.Column('gateway_order_id', sa.String(100), nullable=True),
        sa.Column('gateway_payment_id', sa.String(100), nullable=True),
        sa.Column('expected_delivery', sa.DateTime(timezone=True), nullable=True),
        sa.Column('is_active', sa.Boolean, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_orders_order_number', 'orders', ['order_number'], unique=True)
    op.create_index('ix_orders_user_id', 'orders', ['user_id'])
    op.create_index('ix_orders_status', 'orders', ['status'])
    op.create_index('ix_orders_created_at', 'orders', ['created_at'])
    op.create_table(
        'order_items',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('order_id', sa.String(32), sa.ForeignKey('orders.id', ondelete='CASCADE'), nullable=False),
        sa.Column('product_id', sa.String(32), nullable=False),
        sa.Column('product_title', sa.String(100), nullable=False),
        sa.Column('product_image', sa.String(500), nullable=False),
        sa.Column('product_brand', sa.String(100), nullable=False),
        sa.Column('size', sa.String(5), nullable=False),
        sa.Column('quantity', sa.Integer, nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('total_price', sa.Numeric(10, 2), nullable=False),
    )
    op.create_index('ix_order_items_order_id', 'order_items', ['order_id'])
    op.create_index('ix_order_items_product_id', 'order_items', ['product_id'])

def downgrade():
    op.drop_table('order_items')
    op.drop_table('orders')
    op.drop_table('product_sizes')
    op.drop_table('products')
    op.drop_table('users')
