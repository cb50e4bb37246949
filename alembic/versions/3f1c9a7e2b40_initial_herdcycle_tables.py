"""Initial herd, reproduction, confirmation and timing tables

Revision ID: 3f1c9a7e2b40
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a7e2b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SCHEMA = 'herdcycle'


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]


def _lineage() -> list[sa.Column]:
    return [
        sa.Column('mother_number', sa.String(length=64), nullable=True),
        sa.Column('mother_name', sa.String(length=255), nullable=True),
        sa.Column('mother_breed', sa.String(length=128), nullable=True),
        sa.Column('sire_number', sa.String(length=64), nullable=True),
        sa.Column('sire_name', sa.String(length=255), nullable=True),
        sa.Column('sire_breed', sa.String(length=128), nullable=True),
    ]


def upgrade() -> None:
    """Create cows, bulls, calves, inseminations, confirmations, audit, timing and membership tables."""
    op.execute(f'CREATE SCHEMA IF NOT EXISTS {SCHEMA}')

    # --- memberships ---
    op.create_table(
        'memberships',
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('tenant_id', sa.Uuid(), nullable=False),
        sa.Column('role', sa.String(length=11), nullable=False),
        sa.PrimaryKeyConstraint('user_id', 'tenant_id'),
        schema=SCHEMA,
    )

    # --- cows ---
    op.create_table(
        'cows',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('tenant_id', sa.Uuid(), nullable=False),
        sa.Column('number', sa.String(length=64), nullable=True),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('breed', sa.String(length=128), nullable=True),
        sa.Column('birth_date', sa.Date(), nullable=True),
        sa.Column('last_calving', sa.DateTime(timezone=True), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('photo_url', sa.String(length=512), nullable=True),
        *_lineage(),
        *_timestamps(),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        sa.PrimaryKeyConstraint('id'),
        schema=SCHEMA,
    )
    op.create_index('ix_cows_tenant_id', 'cows', ['tenant_id'], schema=SCHEMA)
    op.create_index('ix_cows_tenant_number', 'cows', ['tenant_id', 'number'], schema=SCHEMA)

    # --- bulls ---
    op.create_table(
        'bulls',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('tenant_id', sa.Uuid(), nullable=False),
        sa.Column('number', sa.String(length=64), nullable=True),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('breed', sa.String(length=128), nullable=True),
        sa.Column('birth_date', sa.Date(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('photo_url', sa.String(length=512), nullable=True),
        sa.Column('is_insemination', sa.Boolean(), server_default='false', nullable=False),
        *_lineage(),
        *_timestamps(),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        sa.PrimaryKeyConstraint('id'),
        schema=SCHEMA,
    )
    op.create_index('ix_bulls_tenant_id', 'bulls', ['tenant_id'], schema=SCHEMA)
    op.create_index('ix_bulls_tenant_number', 'bulls', ['tenant_id', 'number'], schema=SCHEMA)

    # --- calves ---
    op.create_table(
        'calves',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('tenant_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('breed', sa.String(length=128), nullable=True),
        sa.Column('birth_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('gender', sa.String(length=8), nullable=True),
        sa.Column('status', sa.String(length=16), server_default='alive', nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('photo_url', sa.String(length=512), nullable=True),
        *_lineage(),
        sa.Column('graduated', sa.Boolean(), server_default='false', nullable=False),
        sa.Column('graduated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('adult_type', sa.String(length=8), nullable=True),
        sa.Column('adult_id', sa.Uuid(), nullable=True),
        *_timestamps(),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        sa.PrimaryKeyConstraint('id'),
        schema=SCHEMA,
    )
    op.create_index('ix_calves_tenant_id', 'calves', ['tenant_id'], schema=SCHEMA)
    op.create_index(
        'ix_calves_pending_graduation',
        'calves',
        ['tenant_id', 'birth_date'],
        schema=SCHEMA,
        postgresql_where="graduated = false AND status = 'alive'",
    )

    # --- inseminations ---
    op.create_table(
        'inseminations',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('tenant_id', sa.Uuid(), nullable=False),
        sa.Column('cow_id', sa.Uuid(), nullable=False),
        sa.Column('service_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('confirmed_pregnant', sa.Boolean(), server_default='false', nullable=False),
        sa.Column('failed', sa.Boolean(), server_default='false', nullable=False),
        sa.Column('forced', sa.Boolean(), server_default='false', nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['cow_id'], [f'{SCHEMA}.cows.id']),
        schema=SCHEMA,
    )
    op.create_index(
        'ix_inseminations_tenant_cow_date',
        'inseminations',
        ['tenant_id', 'cow_id', 'service_date'],
        schema=SCHEMA,
    )

    # --- confirmations ---
    op.create_table(
        'confirmations',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('tenant_id', sa.Uuid(), nullable=False),
        sa.Column('entity_type', sa.String(length=8), nullable=False),
        sa.Column('entity_id', sa.Uuid(), nullable=False),
        sa.Column('type', sa.String(length=32), nullable=False),
        sa.Column('when', sa.DateTime(timezone=True), nullable=False),
        sa.Column('alert_on', sa.DateTime(timezone=True), nullable=True),
        sa.Column('note', sa.Text(), nullable=True),
        sa.Column('undone', sa.Boolean(), server_default='false', nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        schema=SCHEMA,
    )
    op.create_index(
        'ix_confirmations_entity',
        'confirmations',
        ['tenant_id', 'entity_type', 'entity_id'],
        schema=SCHEMA,
    )
    op.create_index(
        'ix_confirmations_tenant_when', 'confirmations', ['tenant_id', 'when'], schema=SCHEMA
    )

    # --- audit_entries ---
    op.create_table(
        'audit_entries',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('tenant_id', sa.Uuid(), nullable=False),
        sa.Column('cow_id', sa.Uuid(), nullable=False),
        sa.Column('insemination_id', sa.Uuid(), nullable=True),
        sa.Column('action', sa.String(length=64), nullable=False),
        sa.Column('actor', sa.String(length=16), server_default='user', nullable=False),
        sa.Column('actor_user_id', sa.Uuid(), nullable=True),
        sa.Column('payload', sa.JSON(), nullable=False),
        sa.Column('at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        schema=SCHEMA,
    )
    op.create_index(
        'ix_audit_entries_tenant_cow_at',
        'audit_entries',
        ['tenant_id', 'cow_id', 'at'],
        schema=SCHEMA,
    )

    # --- timing_configs ---
    timing_columns = [
        'gestation_days',
        'dry_off_after_successful_insem_days',
        'change_feed_after_successful_insem_days',
        'postpartum_insemination_start_days',
        'insemination_interval_days',
        'calving_alert_before_days',
        'dry_off_alert_before_days',
        'change_feed_alert_before_days',
        'pregnancy_check_alert_before_days',
        'insemination_alert_before_days',
        'graduation_alert_before_days',
        'weaning_alert_before_days',
        'female_weaning_days',
        'male_weaning_days',
        'female_maturity_months',
        'male_maturity_months',
        # legacy
        'insemination_interval_months',
        'weaning_days',
    ]
    op.create_table(
        'timing_configs',
        sa.Column('tenant_id', sa.Uuid(), nullable=False),
        *[sa.Column(name, sa.Integer(), nullable=True) for name in timing_columns],
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('tenant_id'),
        schema=SCHEMA,
    )


def downgrade() -> None:
    """Drop all tables created in upgrade."""
    op.drop_table('timing_configs', schema=SCHEMA)
    op.drop_index('ix_audit_entries_tenant_cow_at', table_name='audit_entries', schema=SCHEMA)
    op.drop_table('audit_entries', schema=SCHEMA)
    op.drop_index('ix_confirmations_tenant_when', table_name='confirmations', schema=SCHEMA)
    op.drop_index('ix_confirmations_entity', table_name='confirmations', schema=SCHEMA)
    op.drop_table('confirmations', schema=SCHEMA)
    op.drop_index('ix_inseminations_tenant_cow_date', table_name='inseminations', schema=SCHEMA)
    op.drop_table('inseminations', schema=SCHEMA)
    op.drop_index('ix_calves_pending_graduation', table_name='calves', schema=SCHEMA)
    op.drop_index('ix_calves_tenant_id', table_name='calves', schema=SCHEMA)
    op.drop_table('calves', schema=SCHEMA)
    op.drop_index('ix_bulls_tenant_number', table_name='bulls', schema=SCHEMA)
    op.drop_index('ix_bulls_tenant_id', table_name='bulls', schema=SCHEMA)
    op.drop_table('bulls', schema=SCHEMA)
    op.drop_index('ix_cows_tenant_number', table_name='cows', schema=SCHEMA)
    op.drop_index('ix_cows_tenant_id', table_name='cows', schema=SCHEMA)
    op.drop_table('cows', schema=SCHEMA)
    op.drop_table('memberships', schema=SCHEMA)
