"""Initial schema: users, parking lots, bookings and reviews

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('email', sa.String(length=120), nullable=False),
        sa.Column('password', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='user'),
        sa.Column('phone', sa.String(length=30), nullable=True),
        sa.Column('avatar', sa.String(length=500), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_users'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'parking_lots',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('owner_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.String(length=1000), nullable=True),
        sa.Column('street', sa.String(length=300), nullable=False),
        sa.Column('city', sa.String(length=120), nullable=False),
        sa.Column('state', sa.String(length=120), nullable=False),
        sa.Column('zip_code', sa.String(length=20), nullable=False),
        sa.Column('country', sa.String(length=120), nullable=False),
        sa.Column('latitude', sa.Float(), nullable=False),
        sa.Column('longitude', sa.Float(), nullable=False),
        sa.Column('total_slots', sa.Integer(), nullable=False),
        sa.Column('available_slots', sa.Integer(), nullable=False),
        sa.Column('price_per_hour', sa.Numeric(10, 2), nullable=False),
        sa.Column('images', sa.JSON(), nullable=False),
        sa.Column('amenities', sa.JSON(), nullable=False),
        sa.Column('opening_time', sa.String(length=5), nullable=False),
        sa.Column('closing_time', sa.String(length=5), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('is_verified', sa.Boolean(), nullable=False),
        sa.Column('approval_status', sa.String(length=20), nullable=False),
        sa.Column('rejection_reason', sa.String(length=500), nullable=True),
        sa.Column('rating_average', sa.Float(), nullable=False),
        sa.Column('rating_count', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('total_slots >= 1', name='ck_parking_lots_total_slots_positive'),
        sa.CheckConstraint(
            'available_slots >= 0 AND available_slots <= total_slots',
            name='ck_parking_lots_available_slots_bounds',
        ),
        sa.CheckConstraint('price_per_hour >= 0', name='ck_parking_lots_price_non_negative'),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], name='fk_parking_lots_owner_id_users'),
        sa.PrimaryKeyConstraint('id', name='pk_parking_lots'),
    )
    op.create_index('ix_parking_lots_owner_id', 'parking_lots', ['owner_id'])
    op.create_index('ix_parking_lots_city', 'parking_lots', ['city'])
    op.create_index('ix_parking_lots_approval_status', 'parking_lots', ['approval_status'])

    op.create_table(
        'bookings',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('parking_id', sa.Uuid(), nullable=False),
        sa.Column('slot_number', sa.Integer(), nullable=False),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('duration', sa.Float(), nullable=False, comment='Hours, fractional'),
        sa.Column('total_price', sa.Numeric(10, 2), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('payment_status', sa.String(length=20), nullable=False),
        sa.Column('payment_method', sa.String(length=20), nullable=False),
        sa.Column('check_in_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('check_out_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('qr_code', sa.Text(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('end_time > start_time', name='ck_bookings_window_ordered'),
        sa.CheckConstraint('slot_number >= 1', name='ck_bookings_slot_number_positive'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_bookings_user_id_users'),
        sa.ForeignKeyConstraint(['parking_id'], ['parking_lots.id'], name='fk_bookings_parking_id_parking_lots'),
        sa.PrimaryKeyConstraint('id', name='pk_bookings'),
    )
    op.create_index('ix_bookings_status', 'bookings', ['status'])
    op.create_index('ix_bookings_parking_window', 'bookings', ['parking_id', 'start_time', 'end_time'])
    op.create_index('ix_bookings_user_created', 'bookings', ['user_id', 'created_at'])

    op.create_table(
        'reviews',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('parking_id', sa.Uuid(), nullable=False),
        sa.Column('booking_id', sa.Uuid(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('comment', sa.String(length=2000), nullable=True),
        *_timestamps(),
        sa.CheckConstraint('rating >= 1 AND rating <= 5', name='ck_reviews_rating_range'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_reviews_user_id_users'),
        sa.ForeignKeyConstraint(['parking_id'], ['parking_lots.id'], name='fk_reviews_parking_id_parking_lots'),
        sa.ForeignKeyConstraint(['booking_id'], ['bookings.id'], name='fk_reviews_booking_id_bookings'),
        sa.PrimaryKeyConstraint('id', name='pk_reviews'),
        sa.UniqueConstraint('booking_id', name='uq_reviews_booking_id'),
    )
    op.create_index('ix_reviews_user_id', 'reviews', ['user_id'])
    op.create_index('ix_reviews_parking_id', 'reviews', ['parking_id'])


def downgrade():
    op.drop_table('reviews')
    op.drop_table('bookings')
    op.drop_table('parking_lots')
    op.drop_table('users')
