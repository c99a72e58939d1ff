"""Replace free-text visa duration with magnitude and unit

Revision ID: 002_structured_visa_duration
Revises: 001_travel_documents
Create Date: 2024-07-15 14:30:00.000000

"""
import logging

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from app.services.duration_parser import parse_duration

# revision identifiers, used by Alembic.
revision = '002_structured_visa_duration'
down_revision = '001_travel_documents'
branch_labels = None
depends_on = None

logger = logging.getLogger("alembic.runtime.migration")

durationunit_enum = postgresql.ENUM('DAYS', 'MONTHS', 'YEARS', name='durationunit', create_type=False)

visa_types = sa.table(
    'visa_types',
    sa.column('id', sa.String),
    sa.column('duration', sa.String),
    sa.column('duration_value', sa.Integer),
    sa.column('duration_unit', sa.String),
)


def backfill_durations(bind):
    """Structured durations from the legacy text. Returns (backfilled, unparsed) row counts."""
    rows = bind.execute(sa.select(visa_types.c.id, visa_types.c.duration)).fetchall()
    backfilled = 0
    unparsed = 0
    for row in rows:
        duration = parse_duration(row.duration)
        if duration is None:
            # Blank durations are not counted
            if row.duration and row.duration.strip():
                unparsed += 1
                logger.warning(f"Visa type {row.id}: could not parse duration {row.duration!r}")
            continue
        bind.execute(
            visa_types.update()
            .where(visa_types.c.id == row.id)
            .values(duration_value=duration.magnitude, duration_unit=duration.unit.name)
        )
        backfilled += 1
    return backfilled, unparsed


def upgrade() -> None:
    bind = op.get_bind()
    durationunit_enum.create(bind, checkfirst=True)

    op.add_column('visa_types', sa.Column('duration_value', sa.Integer(), nullable=True))
    op.add_column('visa_types', sa.Column('duration_unit', durationunit_enum, nullable=True))

    backfilled, unparsed = backfill_durations(bind)
    logger.info(f"Back-filled {backfilled} visa type durations, {unparsed} left undetermined")

    with op.batch_alter_table('visa_types') as batch_op:
        batch_op.drop_column('duration')


def downgrade() -> None:
    op.add_column('visa_types', sa.Column('duration', sa.String(50), nullable=True))

    bind = op.get_bind()
    rows = bind.execute(
        sa.select(visa_types.c.id, visa_types.c.duration_value, visa_types.c.duration_unit)
    ).fetchall()
    for row in rows:
        if row.duration_value is None or row.duration_unit is None:
            continue
        bind.execute(
            visa_types.update()
            .where(visa_types.c.id == row.id)
            .values(duration=f"{row.duration_value} {row.duration_unit.lower()}")
        )

    with op.batch_alter_table('visa_types') as batch_op:
        batch_op.drop_column('duration_unit')
        batch_op.drop_column('duration_value')

    durationunit_enum.drop(bind, checkfirst=True)
