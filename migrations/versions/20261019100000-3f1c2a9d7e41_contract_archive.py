"""Contract archive schema

Revision ID: 3f1c2a9d7e41
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9d7e41'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def timestamp_columns():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def archive_columns():
    return [
        sa.Column('is_archived', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('archived_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('archived_by_user_id', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('archive_reason', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
    ]


def create_archive_indexes(table: str):
    op.create_index(op.f(f'ix_{table}_is_archived'), table, ['is_archived'], unique=False)
    op.create_index(op.f(f'ix_{table}_archived_at'), table, ['archived_at'], unique=False)


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('customer',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('partner_uuid', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('user_id', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('first_name', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('second_name', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('company_name', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('encrypted_email', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        *timestamp_columns(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_customer_partner_uuid'), 'customer', ['partner_uuid'], unique=False)
    op.create_index(op.f('ix_customer_user_id'), 'customer', ['user_id'], unique=False)

    op.create_table('service',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('partner_uuid', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('service_name', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('service_type', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        *timestamp_columns(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_service_partner_uuid'), 'service', ['partner_uuid'], unique=False)
    op.create_index(op.f('ix_service_service_type'), 'service', ['service_type'], unique=False)

    op.create_table('location',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('partner_uuid', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('location_name', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        *timestamp_columns(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_location_partner_uuid'), 'location', ['partner_uuid'], unique=False)

    op.create_table('contract',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('contract_number', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('partner_uuid', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('customer_id', sa.Integer(), nullable=False),
        sa.Column('service_id', sa.Integer(), nullable=True),
        sa.Column('service_name', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('service_type', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('service_cost', sa.Float(), nullable=True),
        sa.Column('location_id', sa.Integer(), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('end_date', sa.Date(), nullable=True),
        *archive_columns(),
        *timestamp_columns(),
        sa.ForeignKeyConstraint(['customer_id'], ['customer.id'], ),
        sa.ForeignKeyConstraint(['service_id'], ['service.id'], ),
        sa.ForeignKeyConstraint(['location_id'], ['location.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_contract_contract_number'), 'contract', ['contract_number'], unique=False)
    op.create_index(op.f('ix_contract_partner_uuid'), 'contract', ['partner_uuid'], unique=False)
    op.create_index(op.f('ix_contract_customer_id'), 'contract', ['customer_id'], unique=False)
    op.create_index(op.f('ix_contract_service_type'), 'contract', ['service_type'], unique=False)
    create_archive_indexes('contract')

    op.create_table('booking',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('contract_id', sa.Integer(), nullable=False),
        sa.Column('partner_uuid', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('end_date', sa.Date(), nullable=True),
        *archive_columns(),
        *timestamp_columns(),
        sa.ForeignKeyConstraint(['contract_id'], ['contract.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_booking_contract_id'), 'booking', ['contract_id'], unique=False)
    op.create_index(op.f('ix_booking_partner_uuid'), 'booking', ['partner_uuid'], unique=False)
    create_archive_indexes('booking')

    op.create_table('packagereservation',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('contract_id', sa.Integer(), nullable=False),
        sa.Column('partner_uuid', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('reservation_date', sa.Date(), nullable=True),
        sa.Column('time_slot', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('entries_used', sa.Float(), nullable=False),
        *archive_columns(),
        *timestamp_columns(),
        sa.ForeignKeyConstraint(['contract_id'], ['contract.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_packagereservation_contract_id'), 'packagereservation', ['contract_id'], unique=False)
    op.create_index(op.f('ix_packagereservation_partner_uuid'), 'packagereservation', ['partner_uuid'], unique=False)
    create_archive_indexes('packagereservation')

    op.create_table('activitylog',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('partner_uuid', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('user_id', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('action_category', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('action_type', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('entity_id', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('entity_type', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('description', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('details', sa.JSON(), nullable=True),
        *timestamp_columns(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_activitylog_partner_uuid'), 'activitylog', ['partner_uuid'], unique=False)
    op.create_index(op.f('ix_activitylog_user_id'), 'activitylog', ['user_id'], unique=False)
    op.create_index(op.f('ix_activitylog_action_category'), 'activitylog', ['action_category'], unique=False)
    op.create_index(op.f('ix_activitylog_action_type'), 'activitylog', ['action_type'], unique=False)
    op.create_index(op.f('ix_activitylog_entity_id'), 'activitylog', ['entity_id'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('activitylog')
    op.drop_table('packagereservation')
    op.drop_table('booking')
    op.drop_table('contract')
    op.drop_table('location')
    op.drop_table('service')
    op.drop_table('customer')
