"""initial marketplace schema

Revision ID: 4f1d2b8c9a10
Revises:
Create Date: 2026-10-17 00:00:00.000000
"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = '4f1d2b8c9a10'
down_revision = None
branch_labels = None
depends_on = None

user_role = sa.Enum('CARGO_OWNER', 'TRANSPORTER', 'ADMIN', name='enum_user_role')
quote_status = sa.Enum('ACTIVE', 'ACCEPTED', 'CANCELLED', 'EXPIRED', name='enum_quote_status')
shipment_status = sa.Enum(
    'PENDING_PICKUP', 'IN_TRANSIT', 'DELIVERED', 'CANCELLED', name='enum_shipment_status'
)


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('password_hash', sa.String(length=254), nullable=False),
        sa.Column('role', user_role, nullable=False),
        sa.Column('full_name', sa.String(length=120), nullable=False),
        sa.Column('company_name', sa.String(length=160), nullable=True),
        sa.Column('phone_number', sa.String(length=40), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_users')),
        sa.UniqueConstraint('email', name='uq_users_email'),
    )
    op.create_index('ix_users_role', 'users', ['role'])

    op.create_table(
        'refresh_sessions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('token_digest', sa.String(length=64), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('revoked_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ['user_id'], ['users.id'],
            name=op.f('fk_refresh_sessions_user_id_users'), ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_refresh_sessions')),
        sa.UniqueConstraint('token_digest', name='uq_refresh_sessions_token_digest'),
    )
    op.create_index('ix_refresh_sessions_user_id', 'refresh_sessions', ['user_id'])
    op.create_index('ix_refresh_sessions_expires_at', 'refresh_sessions', ['expires_at'])

    op.create_table(
        'quotes',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('cargo_owner_id', sa.Integer(), nullable=False),
        sa.Column('cargo', sa.String(length=160), nullable=False),
        sa.Column('cargo_type', sa.String(length=80), nullable=True),
        sa.Column('cargo_description', sa.Text(), nullable=True),
        sa.Column('from_location', sa.String(length=160), nullable=False),
        sa.Column('from_address', sa.String(length=255), nullable=True),
        sa.Column('to_location', sa.String(length=160), nullable=False),
        sa.Column('to_address', sa.String(length=255), nullable=True),
        sa.Column('weight', sa.Numeric(12, 2), nullable=False),
        sa.Column('distance', sa.Numeric(12, 2), nullable=True),
        sa.Column('dimensions', sa.String(length=120), nullable=True),
        sa.Column('estimated_value', sa.Numeric(14, 2), nullable=True),
        sa.Column('insurance_required', sa.Boolean(), server_default='false', nullable=False),
        sa.Column('special_instructions', sa.Text(), nullable=True),
        sa.Column('pickup_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('delivery_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('status', quote_status, nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('weight > 0', name=op.f('ck_quotes_weight_positive')),
        sa.CheckConstraint("status <> 'EXPIRED'", name=op.f('ck_quotes_status_not_expired')),
        sa.ForeignKeyConstraint(
            ['cargo_owner_id'], ['users.id'],
            name=op.f('fk_quotes_cargo_owner_id_users'), ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_quotes')),
    )
    op.create_index('ix_quotes_cargo_owner_id', 'quotes', ['cargo_owner_id'])
    op.create_index('ix_quotes_status_expires_at', 'quotes', ['status', 'expires_at'])

    op.create_table(
        'bids',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('quote_id', sa.Integer(), nullable=False),
        sa.Column('transporter_id', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('estimated_days', sa.Integer(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('is_accepted', sa.Boolean(), server_default='false', nullable=False),
        *_timestamps(),
        sa.CheckConstraint('amount > 0', name=op.f('ck_bids_amount_positive')),
        sa.CheckConstraint('estimated_days >= 1', name=op.f('ck_bids_estimated_days_positive')),
        sa.ForeignKeyConstraint(
            ['quote_id'], ['quotes.id'],
            name=op.f('fk_bids_quote_id_quotes'), ondelete='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['transporter_id'], ['users.id'],
            name=op.f('fk_bids_transporter_id_users'), ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_bids')),
        sa.UniqueConstraint('quote_id', 'transporter_id', name='uq_bids_quote_transporter'),
    )
    op.create_index('ix_bids_transporter_id', 'bids', ['transporter_id'])
    op.create_index(
        'uq_bids_quote_accepted',
        'bids',
        ['quote_id'],
        unique=True,
        postgresql_where=sa.text('is_accepted'),
        sqlite_where=sa.text('is_accepted = 1'),
    )

    op.create_table(
        'shipments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('quote_id', sa.Integer(), nullable=False),
        sa.Column('cargo_owner_id', sa.Integer(), nullable=False),
        sa.Column('transporter_id', sa.Integer(), nullable=False),
        sa.Column('cargo', sa.String(length=160), nullable=False),
        sa.Column('cargo_description', sa.Text(), nullable=True),
        sa.Column('from_location', sa.String(length=160), nullable=False),
        sa.Column('from_address', sa.String(length=255), nullable=True),
        sa.Column('to_location', sa.String(length=160), nullable=False),
        sa.Column('to_address', sa.String(length=255), nullable=True),
        sa.Column('weight', sa.Numeric(12, 2), nullable=False),
        sa.Column('distance', sa.Numeric(12, 2), nullable=True),
        sa.Column('dimensions', sa.String(length=120), nullable=True),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('eta', sa.DateTime(timezone=True), nullable=False),
        sa.Column('pickup_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('status', shipment_status, nullable=False),
        sa.Column('progress', sa.Integer(), server_default='0', nullable=False),
        *_timestamps(),
        sa.CheckConstraint('progress BETWEEN 0 AND 100', name=op.f('ck_shipments_progress_range')),
        sa.ForeignKeyConstraint(
            ['quote_id'], ['quotes.id'],
            name=op.f('fk_shipments_quote_id_quotes'), ondelete='RESTRICT',
        ),
        sa.ForeignKeyConstraint(
            ['cargo_owner_id'], ['users.id'],
            name=op.f('fk_shipments_cargo_owner_id_users'), ondelete='RESTRICT',
        ),
        sa.ForeignKeyConstraint(
            ['transporter_id'], ['users.id'],
            name=op.f('fk_shipments_transporter_id_users'), ondelete='RESTRICT',
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_shipments')),
        sa.UniqueConstraint('quote_id', name='uq_shipments_quote_id'),
    )
    op.create_index('ix_shipments_cargo_owner_id', 'shipments', ['cargo_owner_id'])
    op.create_index('ix_shipments_transporter_id', 'shipments', ['transporter_id'])


def downgrade():
    op.drop_table('shipments')
    op.drop_table('bids')
    op.drop_table('quotes')
    op.drop_table('refresh_sessions')
    op.drop_index('ix_users_role', table_name='users')
    op.drop_table('users')
    shipment_status.drop(op.get_bind(), checkfirst=True)
    quote_status.drop(op.get_bind(), checkfirst=True)
    user_role.drop(op.get_bind(), checkfirst=True)
