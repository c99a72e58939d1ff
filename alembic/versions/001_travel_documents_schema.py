"""Travel documents schema

Revision ID: 001_travel_documents
Revises:
Create Date: 2024-06-03 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '001_travel_documents'
down_revision = None
branch_labels = None
depends_on = None

userrole_enum = postgresql.ENUM('ADMIN', 'STAFF', 'VIEWER', name='userrole', create_type=False)
visastatus_enum = postgresql.ENUM('VALID', 'EXPIRED', 'PROCESSING', 'CANCELLED', name='visastatus', create_type=False)
ticketstatus_enum = postgresql.ENUM(
    'PENDING', 'ACTIVE', 'COMPLETED', 'CANCELLED', 'DELAYED',
    'RESCHEDULED', 'USED', 'EXPIRED', 'CONFIRMED',
    name='ticketstatus', create_type=False,
)
flightstatus_enum = postgresql.ENUM('PENDING', 'COMPLETED', 'CANCELLED', 'DELAYED', name='flightstatus', create_type=False)


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=True),
    ]


def upgrade() -> None:
    bind = op.get_bind()
    for enum_type in (userrole_enum, visastatus_enum, ticketstatus_enum, flightstatus_enum):
        enum_type.create(bind, checkfirst=True)

    op.create_table('users',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('full_name', sa.String(255), nullable=False),
        sa.Column('role', userrole_enum, nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('last_login', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table('employees',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('department', sa.String(255), nullable=True),
        sa.Column('position', sa.String(255), nullable=True),
        sa.Column('nationality_id', sa.String(36), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_employees_id', 'employees', ['id'])
    op.create_index('ix_employees_email', 'employees', ['email'])

    op.create_table('airlines',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('code', sa.String(10), nullable=True),
        sa.Column('country', sa.String(100), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('code')
    )
    op.create_index('ix_airlines_id', 'airlines', ['id'])

    op.create_table('passports',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('employee_id', sa.String(36), nullable=False),
        sa.Column('passport_number', sa.String(50), nullable=False),
        sa.Column('nationality', sa.String(100), nullable=True),
        sa.Column('issue_date', sa.Date(), nullable=True),
        sa.Column('expiry_date', sa.Date(), nullable=True),
        sa.Column('status', sa.String(50), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['employee_id'], ['employees.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('employee_id'),
        sa.UniqueConstraint('passport_number')
    )
    op.create_index('ix_passports_id', 'passports', ['id'])

    op.create_table('money_transfers',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('employee_id', sa.String(36), nullable=False),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('currency', sa.String(3), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('recipient_name', sa.String(255), nullable=True),
        sa.Column('bank_name', sa.String(255), nullable=True),
        sa.Column('status', sa.String(50), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['employee_id'], ['employees.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_money_transfers_id', 'money_transfers', ['id'])
    op.create_index('ix_money_transfers_employee_id', 'money_transfers', ['employee_id'])

    # Durations were captured as free text ("90 days", "1 year")
    op.create_table('visa_types',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('type', sa.String(100), nullable=False),
        sa.Column('country_code', sa.String(3), nullable=True),
        sa.Column('country_name', sa.String(100), nullable=False),
        sa.Column('duration', sa.String(50), nullable=True),
        sa.Column('requirements', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_visa_types_id', 'visa_types', ['id'])

    op.create_table('employee_visas',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('employee_id', sa.String(36), nullable=False),
        sa.Column('visa_type_id', sa.String(36), nullable=False),
        sa.Column('issue_date', sa.Date(), nullable=True),
        sa.Column('expiry_date', sa.Date(), nullable=False),
        sa.Column('status', visastatus_enum, nullable=False),
        sa.Column('document_number', sa.String(100), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['employee_id'], ['employees.id']),
        sa.ForeignKeyConstraint(['visa_type_id'], ['visa_types.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_employee_visas_id', 'employee_visas', ['id'])
    op.create_index('ix_employee_visas_employee_id', 'employee_visas', ['employee_id'])
    op.create_index('ix_employee_visas_expiry_date', 'employee_visas', ['expiry_date'])

    op.create_table('tickets',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('reference', sa.String(50), nullable=False),
        sa.Column('employee_id', sa.String(36), nullable=False),
        sa.Column('airline_id', sa.String(36), nullable=False),
        sa.Column('origin', sa.String(100), nullable=False),
        sa.Column('destination', sa.String(100), nullable=False),
        sa.Column('departure_date', sa.Date(), nullable=False),
        sa.Column('return_date', sa.Date(), nullable=True),
        sa.Column('cost', sa.Numeric(12, 2), nullable=True),
        sa.Column('currency', sa.String(3), nullable=False),
        sa.Column('booking_reference', sa.String(100), nullable=True),
        sa.Column('flight_number', sa.String(50), nullable=True),
        sa.Column('type', sa.String(50), nullable=True),
        sa.Column('status', ticketstatus_enum, nullable=False),
        sa.Column('has_return', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('departure_completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('return_completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('departure_flight_id', sa.String(36), nullable=True),
        sa.Column('return_flight_id', sa.String(36), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['employee_id'], ['employees.id']),
        sa.ForeignKeyConstraint(['airline_id'], ['airlines.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_tickets_id', 'tickets', ['id'])
    op.create_index('ix_tickets_reference', 'tickets', ['reference'], unique=True)
    op.create_index('ix_tickets_employee_id', 'tickets', ['employee_id'])

    op.create_table('ticket_status_changes',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('ticket_id', sa.String(36), nullable=False),
        sa.Column('changed_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('previous_status', ticketstatus_enum, nullable=True),
        sa.Column('new_status', ticketstatus_enum, nullable=False),
        sa.Column('note', sa.Text(), nullable=True),
        sa.Column('changed_by', sa.String(255), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['ticket_id'], ['tickets.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_ticket_status_changes_id', 'ticket_status_changes', ['id'])
    op.create_index('ix_ticket_status_changes_ticket_id', 'ticket_status_changes', ['ticket_id'])

    op.create_table('flights',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('ticket_id', sa.String(36), nullable=True),
        sa.Column('employee_id', sa.String(36), nullable=False),
        sa.Column('airline_id', sa.String(36), nullable=False),
        sa.Column('departure_date', sa.Date(), nullable=False),
        sa.Column('origin', sa.String(100), nullable=False),
        sa.Column('destination', sa.String(100), nullable=False),
        sa.Column('ticket_reference', sa.String(50), nullable=True),
        sa.Column('flight_number', sa.String(50), nullable=True),
        sa.Column('is_return', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('status', flightstatus_enum, nullable=False),
        sa.Column('type', sa.String(50), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['ticket_id'], ['tickets.id']),
        sa.ForeignKeyConstraint(['employee_id'], ['employees.id']),
        sa.ForeignKeyConstraint(['airline_id'], ['airlines.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('ticket_id', 'is_return', name='uq_flights_ticket_leg')
    )
    op.create_index('ix_flights_id', 'flights', ['id'])
    op.create_index('ix_flights_ticket_id', 'flights', ['ticket_id'])
    op.create_index('ix_flights_employee_id', 'flights', ['employee_id'])


def downgrade() -> None:
    op.drop_table('flights')
    op.drop_table('ticket_status_changes')
    op.drop_table('tickets')
    op.drop_table('employee_visas')
    op.drop_table('visa_types')
    op.drop_table('money_transfers')
    op.drop_table('passports')
    op.drop_table('airlines')
    op.drop_table('employees')
    op.drop_table('users')

    bind = op.get_bind()
    for enum_type in (flightstatus_enum, ticketstatus_enum, visastatus_enum, userrole_enum):
        enum_type.drop(bind, checkfirst=True)
