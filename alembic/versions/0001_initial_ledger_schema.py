"""initial_ledger_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-18 09:00:00

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """
    Create the trip ledger tables.

    drivers / vehicles are referenced by trips and maintenance with
    ON DELETE SET NULL; trips keep their snapshot columns either way.
    """
    print("[MIGRATION] Creating ledger tables...")

    op.create_table(
        'drivers',
        sa.Column('id', sa.String(32), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('email', sa.String(254), nullable=False),
        sa.Column('phone', sa.String(32), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_drivers_email', 'drivers', ['email'], unique=True)

    op.create_table(
        'vehicles',
        sa.Column('id', sa.String(32), primary_key=True),
        sa.Column('vehicle_type', sa.String(100), nullable=False),
        sa.Column('vehicle_number', sa.String(32), nullable=False, unique=True),
        sa.Column('model', sa.String(100), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        'trips',
        sa.Column('id', sa.String(32), primary_key=True),
        sa.Column('created_by', sa.String(64), nullable=False),
        sa.Column('created_by_role', sa.String(16), nullable=False),
        sa.Column('driver_id', sa.String(32), sa.ForeignKey('drivers.id', ondelete='SET NULL'), nullable=True),
        sa.Column('vehicle_id', sa.String(32), sa.ForeignKey('vehicles.id', ondelete='SET NULL'), nullable=True),
        sa.Column('driver_name', sa.String(200), nullable=True),
        sa.Column('driver_number', sa.String(32), nullable=True),
        sa.Column('vehicle_type', sa.String(100), nullable=True),
        sa.Column('vehicle_number', sa.String(32), nullable=True),
        sa.Column('from_location', sa.String(300), nullable=True),
        sa.Column('end_location', sa.String(300), nullable=True),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('customer_name', sa.String(200), nullable=True),
        sa.Column('customer_number', sa.String(32), nullable=True),
        sa.Column('trip_amount', sa.Float(), nullable=True),
        sa.Column('fuel_amount', sa.String(200), nullable=True),
        sa.Column('tolls', sa.Float(), nullable=True),
        sa.Column('parking_charges', sa.Float(), nullable=True),
        sa.Column('driver_beta', sa.Float(), nullable=True),
        sa.Column('payment_mode', sa.String(32), nullable=True),
        sa.Column('booking_id', sa.String(100), nullable=True),
        sa.Column('is_driver_deleted', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('driver_deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('driver_deleted_by', sa.String(64), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("created_by_role IN ('admin', 'driver')", name='check_created_by_role'),
    )
    op.create_index('ix_trips_driver_id', 'trips', ['driver_id'])
    op.create_index('ix_trips_vehicle_id', 'trips', ['vehicle_id'])
    op.create_index('ix_trips_start_date', 'trips', ['start_date'])
    op.create_index('ix_trips_payment_mode', 'trips', ['payment_mode'])
    op.create_index('idx_trips_driver_deleted', 'trips', ['driver_id', 'is_driver_deleted'])
    op.create_index('idx_trips_created_at', 'trips', ['created_at'])

    op.create_table(
        'maintenance',
        sa.Column('id', sa.String(32), primary_key=True),
        sa.Column('driver_id', sa.String(32), sa.ForeignKey('drivers.id', ondelete='SET NULL'), nullable=True),
        sa.Column('vehicle_id', sa.String(32), sa.ForeignKey('vehicles.id', ondelete='SET NULL'), nullable=True),
        sa.Column('cost', sa.Float(), nullable=True),
        sa.Column('description', sa.String(500), nullable=True),
        sa.Column('service_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_maintenance_driver_id', 'maintenance', ['driver_id'])

    op.create_table(
        'ads',
        sa.Column('id', sa.String(32), primary_key=True),
        sa.Column('amount', sa.Float(), nullable=True),
        sa.Column('platform', sa.String(100), nullable=True),
        sa.Column('description', sa.String(500), nullable=True),
        sa.Column('spent_on', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    print("[MIGRATION] ✅ Ledger tables created")


def downgrade() -> None:
    print("[MIGRATION] Dropping ledger tables...")

    op.drop_table('ads')
    op.drop_table('maintenance')
    op.drop_table('trips')
    op.drop_table('vehicles')
    op.drop_table('drivers')
