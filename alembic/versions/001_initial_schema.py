"""Initial schema - drivers, routes, orders and simulation results

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("CREATE TYPE trafficlevel AS ENUM ('Low', 'Medium', 'High')")

    op.create_table(
        'drivers',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('current_shift_hours', sa.Float(), nullable=False, server_default='0'),
        sa.Column('past_7_day_hours', postgresql.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        'routes',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('route_id', sa.Integer(), nullable=False),
        sa.Column('distance_km', sa.Float(), nullable=False),
        sa.Column('traffic_level', postgresql.ENUM('Low', 'Medium', 'High', name='trafficlevel', create_type=False), nullable=False),
        sa.Column('base_time_min', sa.Float(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_routes_route_id', 'routes', ['route_id'], unique=True)

    # route_id is the Route business key; existence is checked by the API
    op.create_table(
        'orders',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('order_id', sa.Integer(), nullable=False),
        sa.Column('value_rs', sa.Float(), nullable=False),
        sa.Column('route_id', sa.Integer(), nullable=False),
        sa.Column('delivery_time', sa.String(5), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_orders_order_id', 'orders', ['order_id'], unique=True)
    op.create_index('ix_orders_route_id', 'orders', ['route_id'])

    op.create_table(
        'simulation_results',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('drivers_available', sa.Integer(), nullable=False),
        sa.Column('start_time', sa.String(5), nullable=False),
        sa.Column('max_hours_per_driver', sa.Float(), nullable=False),
        sa.Column('total_profit', sa.Float(), nullable=False, server_default='0'),
        sa.Column('efficiency', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('on_time', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('late', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('base_fuel', sa.Float(), nullable=False, server_default='0'),
        sa.Column('high_traffic_surcharge', sa.Float(), nullable=False, server_default='0'),
        sa.Column('skipped_orders', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('assignments', postgresql.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_simulation_results_created_at', 'simulation_results', ['created_at'])


def downgrade() -> None:
    op.drop_index('ix_simulation_results_created_at', table_name='simulation_results')
    op.drop_index('ix_orders_route_id', table_name='orders')
    op.drop_index('ix_orders_order_id', table_name='orders')
    op.drop_index('ix_routes_route_id', table_name='routes')

    op.drop_table('simulation_results')
    op.drop_table('orders')
    op.drop_table('routes')
    op.drop_table('drivers')

    op.execute("DROP TYPE IF EXISTS trafficlevel")
