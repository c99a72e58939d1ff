"""
Shared fixtures: an in-memory SQLite database, a session per test and a
TestClient wired to that session with an authenticated staff user.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("ENVIRONMENT", "test")

from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.deps import get_current_user
from app.core.security import get_password_hash
from app.db.database import Base, get_db
from app.main import app
from app.models import (
    Airline,
    DurationUnit,
    Employee,
    MoneyTransfer,
    Passport,
    Ticket,
    TicketStatus,
    User,
    UserRole,
    VisaType,
)

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

API = "/api/v1"


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def staff_user(db):
    user = User(
        email="travel.desk@example.com",
        hashed_password=get_password_hash("s3cret-pass"),
        full_name="Travel Desk",
        role=UserRole.STAFF,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def viewer_user(db):
    user = User(
        email="viewer@example.com",
        hashed_password=get_password_hash("viewer-pass"),
        full_name="Read Only",
        role=UserRole.VIEWER,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def _override_db(db):
    def override_get_db():
        yield db
    return override_get_db


@pytest.fixture
def client(db, staff_user):
    app.dependency_overrides[get_db] = _override_db(db)
    app.dependency_overrides[get_current_user] = lambda: staff_user
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def viewer_client(db, viewer_user):
    app.dependency_overrides[get_db] = _override_db(db)
    app.dependency_overrides[get_current_user] = lambda: viewer_user
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def anon_client(db):
    app.dependency_overrides[get_db] = _override_db(db)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def employee(db):
    emp = Employee(name="Amina Odhiambo", email="amina@example.com", department="Operations")
    db.add(emp)
    db.commit()
    db.refresh(emp)
    return emp


@pytest.fixture
def airline(db):
    carrier = Airline(name="Emirates", code="EK", country="UAE")
    db.add(carrier)
    db.commit()
    db.refresh(carrier)
    return carrier


@pytest.fixture
def make_ticket(db, employee, airline):
    """Factory for tickets in a given state; round trip unless return_date=None."""
    counter = {"n": 0}

    def _make(
        reference=None,
        origin="Dubai",
        destination="London",
        departure_date=date(2024, 5, 10),
        return_date=date(2024, 5, 20),
        status=TicketStatus.PENDING,
        departure_completed=False,
        return_completed=False,
        **kwargs
    ):
        counter["n"] += 1
        ticket = Ticket(
            reference=reference or f"TKT-{counter['n']:03d}",
            employee_id=kwargs.pop("employee_id", employee.id),
            airline_id=kwargs.pop("airline_id", airline.id),
            origin=origin,
            destination=destination,
            departure_date=departure_date,
            return_date=return_date,
            has_return=return_date is not None,
            status=status,
            departure_completed=departure_completed,
            return_completed=return_completed,
            currency="USD",
            type="Business",
            flight_number="EK001",
            **kwargs
        )
        db.add(ticket)
        db.commit()
        db.refresh(ticket)
        return ticket

    return _make


@pytest.fixture
def make_visa_type(db):
    def _make(duration_value=90, duration_unit=DurationUnit.DAYS, type="Work Permit", country_name="United Kingdom"):
        visa_type = VisaType(
            type=type,
            country_name=country_name,
            country_code="GBR",
            duration_value=duration_value,
            duration_unit=duration_unit,
        )
        db.add(visa_type)
        db.commit()
        db.refresh(visa_type)
        return visa_type

    return _make


@pytest.fixture
def passport(db, employee):
    doc = Passport(
        employee_id=employee.id,
        passport_number="AK1234567",
        nationality="Kenyan",
        issue_date=date(2020, 1, 15),
        expiry_date=date(2030, 1, 14),
        status="With Employee",
    )
    db.add(doc)
    db.commit()
    db.refresh(doc)
    return doc


@pytest.fixture
def make_transfer(db, employee):
    def _make(amount, currency, on, **kwargs):
        transfer = MoneyTransfer(
            employee_id=kwargs.pop("employee_id", employee.id),
            amount=Decimal(str(amount)),
            currency=currency,
            date=on,
            **kwargs
        )
        db.add(transfer)
        db.commit()
        db.refresh(transfer)
        return transfer

    return _make
