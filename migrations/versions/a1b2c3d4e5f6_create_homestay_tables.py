"""create rooms, availability, bookings and audit log tables

Revision ID: a1b2c3d4e5f6
Revises: 
Create Date: 2025-02-10 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'a1b2c3d4e5f6'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'rooms',
        sa.Column('seq', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('room_id', sa.String(length=40), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.Integer(), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.Column('room_size', sa.String(length=40), nullable=True),
        sa.Column('bed_type', sa.String(length=60), nullable=True),
        sa.Column('floor', sa.String(length=40), nullable=True),
        sa.Column('amenities', sa.JSON(), nullable=False),
        sa.Column('images', sa.JSON(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint('price > 0', name='ck_room_price_positive'),
        sa.CheckConstraint('capacity > 0', name='ck_room_capacity_positive'),
        sa.PrimaryKeyConstraint('seq'),
    )
    with op.batch_alter_table('rooms', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_rooms_room_id'), ['room_id'], unique=True)
        batch_op.create_index(batch_op.f('ix_rooms_status'), ['status'], unique=False)

    op.create_table(
        'availability',
        sa.Column('room_id', sa.String(length=40), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('booking_id', sa.String(length=40), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('room_id', 'date'),
    )
    with op.batch_alter_table('availability', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_availability_booking_id'), ['booking_id'], unique=False)

    op.create_table(
        'bookings',
        sa.Column('booking_id', sa.String(length=40), nullable=False),
        sa.Column('room_id', sa.String(length=40), nullable=False),
        sa.Column('room_name', sa.String(length=120), nullable=True),
        sa.Column('guest_name', sa.String(length=120), nullable=False),
        sa.Column('guest_email', sa.String(length=255), nullable=False),
        sa.Column('guest_phone', sa.String(length=30), nullable=False),
        sa.Column('checkin_date', sa.Date(), nullable=False),
        sa.Column('checkout_date', sa.Date(), nullable=False),
        sa.Column('adults', sa.Integer(), nullable=False),
        sa.Column('children', sa.Integer(), nullable=False),
        sa.Column('nights', sa.Integer(), nullable=False),
        sa.Column('base_amount', sa.Integer(), nullable=False),
        sa.Column('tax_amount', sa.Integer(), nullable=False),
        sa.Column('total_amount', sa.Integer(), nullable=False),
        sa.Column('booking_status', sa.String(length=20), nullable=False),
        sa.Column('payment_status', sa.String(length=20), nullable=False),
        sa.Column('special_requests', sa.Text(), nullable=True),
        sa.Column('booking_source', sa.String(length=20), nullable=False),
        sa.Column('admin_notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint('checkout_date > checkin_date', name='ck_booking_dates_ordered'),
        sa.PrimaryKeyConstraint('booking_id'),
    )
    with op.batch_alter_table('bookings', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_bookings_room_id'), ['room_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_bookings_guest_email'), ['guest_email'], unique=False)
        batch_op.create_index(batch_op.f('ix_bookings_checkin_date'), ['checkin_date'], unique=False)
        batch_op.create_index(batch_op.f('ix_bookings_booking_status'), ['booking_status'], unique=False)

    op.create_table(
        'audit_logs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('action', sa.String(length=80), nullable=False),
        sa.Column('entity', sa.String(length=80), nullable=True),
        sa.Column('entity_id', sa.String(length=80), nullable=True),
        sa.Column('ip', sa.String(length=64), nullable=True),
        sa.Column('user_agent', sa.String(length=255), nullable=True),
        sa.Column('metadata_json', sa.Text(), nullable=True),
        sa.Column('timestamp', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )


def downgrade():
    op.drop_table('audit_logs')
    with op.batch_alter_table('bookings', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_bookings_booking_status'))
        batch_op.drop_index(batch_op.f('ix_bookings_checkin_date'))
        batch_op.drop_index(batch_op.f('ix_bookings_guest_email'))
        batch_op.drop_index(batch_op.f('ix_bookings_room_id'))
    op.drop_table('bookings')
    with op.batch_alter_table('availability', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_availability_booking_id'))
    op.drop_table('availability')
    with op.batch_alter_table('rooms', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_rooms_status'))
        batch_op.drop_index(batch_op.f('ix_rooms_room_id'))
    op.drop_table('rooms')
