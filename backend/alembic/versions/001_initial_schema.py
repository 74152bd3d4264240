"""initial_schema

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19

Creates the move planner schema:
- users
- room_types, furniture_categories (reference catalogs)
- moves, rooms, furniture, services, materials
- move_history (audit sink)

Each table is only created when missing, so the migration is idempotent:
safe to run after init_db() / Base.metadata.create_all() already built them.
"""
import logging
from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect

revision = '001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None

logger = logging.getLogger("alembic.001")


def _table_exists(conn, table_name: str) -> bool:
    return inspect(conn).has_table(table_name)


def _timestamp(name: str) -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), server_default=sa.func.now())


def _move_fk() -> sa.Column:
    return sa.Column(
        'move_id', sa.String(36),
        sa.ForeignKey('moves.id', ondelete='CASCADE'), nullable=False, index=True,
    )


def upgrade() -> None:
    conn = op.get_bind()

    # ── users ─────────────────────────────────────────────────────────────────
    if not _table_exists(conn, 'users'):
        op.create_table(
            'users',
            sa.Column('id', sa.String(36), primary_key=True),
            sa.Column('email', sa.String(255), nullable=False, unique=True),
            sa.Column('password_hash', sa.Text, nullable=False),
            sa.Column('name', sa.String(255), nullable=False),
            sa.Column('phone', sa.String(50), nullable=True),
            sa.Column('role', sa.String(50), server_default='customer'),
            _timestamp('created_at'),
            _timestamp('updated_at'),
        )
        logger.info("Created table users")

    # ── reference catalogs ────────────────────────────────────────────────────
    if not _table_exists(conn, 'room_types'):
        op.create_table(
            'room_types',
            sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
            sa.Column('name', sa.String(100), nullable=False, unique=True),
            sa.Column('icon', sa.String(16), nullable=False),
        )
        logger.info("Created table room_types")

    if not _table_exists(conn, 'furniture_categories'):
        op.create_table(
            'furniture_categories',
            sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
            sa.Column('name', sa.String(100), nullable=False),
            sa.Column('room_type', sa.String(100), nullable=False),
            sa.Column('default_length', sa.Float, nullable=False),
            sa.Column('default_width', sa.Float, nullable=False),
            sa.Column('default_height', sa.Float, nullable=False),
            sa.Column('default_weight', sa.Float, nullable=False),
        )
        logger.info("Created table furniture_categories")

    # ── moves ─────────────────────────────────────────────────────────────────
    if not _table_exists(conn, 'moves'):
        op.create_table(
            'moves',
            sa.Column('id', sa.String(36), primary_key=True),
            sa.Column('reference', sa.String(32), nullable=False, unique=True),
            sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id'), nullable=False, index=True),
            sa.Column('customer_name', sa.String(255), nullable=False),
            sa.Column('customer_email', sa.String(255), nullable=False),
            sa.Column('customer_phone', sa.String(50), nullable=True),
            sa.Column('from_address', sa.Text, nullable=False),
            sa.Column('to_address', sa.Text, nullable=False),
            sa.Column('move_date', sa.Date, nullable=False),
            sa.Column('move_time', sa.String(16), nullable=True),
            sa.Column('special_requirements', sa.Text, nullable=True),
            sa.Column('status', sa.String(20), server_default='draft'),
            sa.Column('total_volume', sa.Float, server_default='0'),
            sa.Column('total_weight', sa.Float, server_default='0'),
            sa.Column('estimated_cost', sa.Float, server_default='0'),
            _timestamp('created_at'),
            _timestamp('updated_at'),
        )
        logger.info("Created table moves")

    if not _table_exists(conn, 'rooms'):
        op.create_table(
            'rooms',
            sa.Column('id', sa.String(36), primary_key=True),
            _move_fk(),
            sa.Column('name', sa.String(255), nullable=False),
            sa.Column('room_type', sa.String(100), nullable=False),
            sa.Column('volume', sa.Float, server_default='0'),
            _timestamp('created_at'),
        )
        logger.info("Created table rooms")

    if not _table_exists(conn, 'furniture'):
        op.create_table(
            'furniture',
            sa.Column('id', sa.String(36), primary_key=True),
            sa.Column(
                'room_id', sa.String(36),
                sa.ForeignKey('rooms.id', ondelete='CASCADE'), nullable=False, index=True,
            ),
            sa.Column('name', sa.String(255), nullable=False),
            sa.Column('category', sa.String(100), nullable=False),
            sa.Column('length', sa.Float, nullable=False),
            sa.Column('width', sa.Float, nullable=False),
            sa.Column('height', sa.Float, nullable=False),
            sa.Column('quantity', sa.Integer, server_default='1'),
            sa.Column('weight', sa.Float, server_default='0'),
            sa.Column('volume', sa.Float, server_default='0'),
            sa.Column('is_custom', sa.Boolean, server_default=sa.false()),
            _timestamp('created_at'),
        )
        logger.info("Created table furniture")

    if not _table_exists(conn, 'services'):
        op.create_table(
            'services',
            sa.Column('id', sa.String(36), primary_key=True),
            _move_fk(),
            sa.Column('service_type', sa.String(100), nullable=False),
            sa.Column('quantity', sa.Integer, server_default='1'),
            sa.Column('price', sa.Float, server_default='0'),
            _timestamp('created_at'),
        )
        logger.info("Created table services")

    if not _table_exists(conn, 'materials'):
        op.create_table(
            'materials',
            sa.Column('id', sa.String(36), primary_key=True),
            _move_fk(),
            sa.Column('material_type', sa.String(100), nullable=False),
            sa.Column('quantity', sa.Integer, server_default='0'),
            sa.Column('price_per_unit', sa.Float, server_default='0'),
            sa.Column('total_price', sa.Float, server_default='0'),
            _timestamp('created_at'),
        )
        logger.info("Created table materials")

    # ── move_history ──────────────────────────────────────────────────────────
    if not _table_exists(conn, 'move_history'):
        op.create_table(
            'move_history',
            sa.Column('id', sa.String(36), primary_key=True),
            sa.Column(
                'move_id', sa.String(36),
                sa.ForeignKey('moves.id', ondelete='CASCADE'), nullable=False,
            ),
            sa.Column('action', sa.String(50), nullable=False),
            sa.Column('changes', sa.Text, nullable=True),
            sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id'), nullable=True),
            _timestamp('created_at'),
        )
        op.create_index('ix_move_history_move_id', 'move_history', ['move_id'])
        logger.info("Created table move_history")


def downgrade() -> None:
    conn = op.get_bind()

    # Children first
    for table in ['move_history', 'materials', 'services', 'furniture', 'rooms', 'moves',
                  'furniture_categories', 'room_types', 'users']:
        if _table_exists(conn, table):
            op.drop_table(table)
