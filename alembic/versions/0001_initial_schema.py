"""initial schema with default menu

Revision ID: 0001
Revises:
Create Date: 2026-10-19 09:00:00

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0001'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('username', sa.String(length=50), nullable=False, unique=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('first_name', sa.String(length=100)),
        sa.Column('last_name', sa.String(length=100)),
        sa.Column('phone', sa.String(length=20)),
        sa.Column('role', sa.String(length=20)),
        sa.Column('is_active', sa.Boolean()),
        *_timestamps(),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    menu_categories = op.create_table(
        'menu_categories',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False, unique=True),
        sa.Column('description', sa.Text()),
        sa.Column('image', sa.String(length=255)),
        sa.Column('sort_order', sa.Integer()),
        sa.Column('is_active', sa.Boolean()),
        sa.Column('created_at', sa.DateTime()),
    )
    op.create_index('ix_menu_categories_id', 'menu_categories', ['id'])

    food = op.create_table(
        'food',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('category_id', sa.Integer(), sa.ForeignKey('menu_categories.id')),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('image', sa.String(length=255)),
        sa.Column('is_featured', sa.Boolean()),
        sa.Column('is_vegetarian', sa.Boolean()),
        sa.Column('is_spicy', sa.Boolean()),
        sa.Column('preparation_time', sa.Integer()),
        sa.Column('calories', sa.Integer()),
        sa.Column('allergens', sa.Text()),
        sa.Column('is_active', sa.Boolean()),
        sa.Column('avg_rating', sa.Float()),
        sa.Column('total_reviews', sa.Integer()),
        *_timestamps(),
    )
    op.create_index('ix_food_id', 'food', ['id'])
    op.create_index('ix_food_category_id', 'food', ['category_id'])
    op.create_index('ix_food_is_active', 'food', ['is_active'])

    op.create_table(
        'reservations',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=20)),
        sa.Column('reservation_date', sa.Date(), nullable=False),
        sa.Column('reservation_time', sa.Time(), nullable=False),
        sa.Column('guests', sa.Integer(), nullable=False),
        sa.Column('message', sa.Text()),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('reminder_sent', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('guests >= 1', name='ck_reservations_guests'),
    )
    op.create_index('ix_reservations_id', 'reservations', ['id'])
    op.create_index('ix_reservations_email', 'reservations', ['email'])
    op.create_index('ix_reservations_reservation_date', 'reservations', ['reservation_date'])
    op.create_index('ix_reservations_status', 'reservations', ['status'])

    op.create_table(
        'orders',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('customer_name', sa.String(length=255), nullable=False),
        sa.Column('customer_email', sa.String(length=255), nullable=False),
        sa.Column('customer_phone', sa.String(length=20)),
        sa.Column('total_amount', sa.Float(), nullable=False),
        sa.Column('order_type', sa.String(length=20)),
        sa.Column('delivery_address', sa.Text()),
        sa.Column('special_instructions', sa.Text()),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('notes', sa.Text()),
        *_timestamps(),
    )
    op.create_index('ix_orders_id', 'orders', ['id'])
    op.create_index('ix_orders_customer_email', 'orders', ['customer_email'])
    op.create_index('ix_orders_status', 'orders', ['status'])
    op.create_index('ix_orders_created_at', 'orders', ['created_at'])

    op.create_table(
        'order_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('order_id', sa.Integer(), sa.ForeignKey('orders.id'), nullable=False),
        sa.Column('food_id', sa.Integer(), sa.ForeignKey('food.id'), nullable=False),
        sa.Column('food_name', sa.String(length=255), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('unit_price', sa.Float(), nullable=False),
        sa.Column('total_price', sa.Float(), nullable=False),
        sa.Column('special_requests', sa.Text()),
        sa.Column('created_at', sa.DateTime()),
        sa.CheckConstraint('quantity >= 1', name='ck_order_items_quantity'),
    )
    op.create_index('ix_order_items_id', 'order_items', ['id'])
    op.create_index('ix_order_items_order_id', 'order_items', ['order_id'])
    op.create_index('ix_order_items_food_id', 'order_items', ['food_id'])

    op.create_table(
        'food_reviews',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('food_id', sa.Integer(), sa.ForeignKey('food.id'), nullable=False),
        sa.Column('customer_name', sa.String(length=255), nullable=False),
        sa.Column('customer_email', sa.String(length=255), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('review', sa.Text()),
        sa.Column('is_approved', sa.Boolean(), nullable=False),
        sa.Column('admin_notes', sa.Text()),
        sa.Column('moderated_at', sa.DateTime()),
        sa.Column('created_at', sa.DateTime()),
        sa.CheckConstraint('rating >= 1 AND rating <= 5', name='ck_food_reviews_rating'),
    )
    op.create_index('ix_food_reviews_id', 'food_reviews', ['id'])
    op.create_index('ix_food_reviews_food_id', 'food_reviews', ['food_id'])
    op.create_index('ix_food_reviews_is_approved', 'food_reviews', ['is_approved'])

    op.create_table(
        'customer_feedback',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('customer_name', sa.String(length=255), nullable=False),
        sa.Column('customer_email', sa.String(length=255), nullable=False),
        sa.Column('customer_phone', sa.String(length=20)),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('feedback_type', sa.String(length=20), nullable=False),
        sa.Column('subject', sa.String(length=255)),
        sa.Column('message', sa.Text()),
        sa.Column('order_id', sa.Integer(), sa.ForeignKey('orders.id')),
        sa.Column('reservation_id', sa.Integer(), sa.ForeignKey('reservations.id')),
        sa.Column('is_public', sa.Boolean()),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime()),
        sa.CheckConstraint('rating >= 1 AND rating <= 5', name='ck_customer_feedback_rating'),
    )
    op.create_index('ix_customer_feedback_id', 'customer_feedback', ['id'])
    op.create_index('ix_customer_feedback_customer_email', 'customer_feedback', ['customer_email'])
    op.create_index('ix_customer_feedback_feedback_type', 'customer_feedback', ['feedback_type'])
    op.create_index('ix_customer_feedback_status', 'customer_feedback', ['status'])

    op.create_table(
        'contact_messages',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('subject', sa.String(length=255)),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime()),
    )
    op.create_index('ix_contact_messages_id', 'contact_messages', ['id'])

    about = op.create_table(
        'about',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('content', sa.Text()),
        sa.Column('image', sa.String(length=255)),
        sa.Column('status', sa.Boolean()),
    )
    op.create_index('ix_about_id', 'about', ['id'])

    op.create_table(
        'team',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('position', sa.String(length=100)),
        sa.Column('bio', sa.Text()),
        sa.Column('image', sa.String(length=255)),
        sa.Column('position_order', sa.Integer()),
        sa.Column('status', sa.Boolean()),
    )
    op.create_index('ix_team_id', 'team', ['id'])

    # --- default data ---
    op.bulk_insert(menu_categories, [
        {'name': 'Appetizers', 'description': 'Start your meal with our delicious appetizers', 'sort_order': 1, 'is_active': True},
        {'name': 'Main Course', 'description': 'Signature dishes prepared with fresh ingredients', 'sort_order': 2, 'is_active': True},
        {'name': 'Desserts', 'description': 'Sweet endings to your dining experience', 'sort_order': 3, 'is_active': True},
        {'name': 'Beverages', 'description': 'Refreshing drinks and hot beverages', 'sort_order': 4, 'is_active': True},
        {'name': 'Salads', 'description': 'Fresh and healthy salad options', 'sort_order': 5, 'is_active': True},
        {'name': 'Soups', 'description': 'Warm and comforting soup selections', 'sort_order': 6, 'is_active': True},
    ])

    sample_food = [
        (2, 'Grilled Chicken Breast', 'Juicy grilled chicken breast with herbs and spices', 18.99, True, False, 20),
        (2, 'Beef Burger', 'Classic beef burger with fresh vegetables', 15.99, True, False, 15),
        (1, 'Bruschetta', 'Toasted bread topped with tomatoes and herbs', 8.99, False, True, 10),
        (3, 'Chocolate Cake', 'Rich chocolate cake with vanilla ice cream', 12.99, False, True, 5),
        (4, 'Fresh Orange Juice', 'Freshly squeezed orange juice', 4.99, False, True, 2),
    ]
    op.bulk_insert(food, [
        {
            'category_id': category_id, 'name': name, 'description': description, 'price': price,
            'is_featured': featured, 'is_vegetarian': vegetarian, 'is_spicy': False,
            'preparation_time': prep, 'is_active': True, 'total_reviews': 0,
        }
        for category_id, name, description, price, featured, vegetarian, prep in sample_food
    ])

    op.bulk_insert(about, [
        {
            'title': 'About Food Chef Cafe',
            'content': 'Fresh ingredients, honest cooking and a warm welcome since day one.',
            'status': True,
        },
    ])


def downgrade() -> None:
    for table in (
        'team', 'about', 'contact_messages', 'customer_feedback', 'food_reviews',
        'order_items', 'orders', 'reservations', 'food', 'menu_categories', 'users',
    ):
        op.drop_table(table)
