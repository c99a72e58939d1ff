from datetime import date
from unittest import mock

import pytest
from sqlalchemy.exc import OperationalError

from app.core.exceptions import (
    AlreadyProcessed,
    DeparturePending,
    InconsistentStateError,
    InvalidTransition,
    MissingReturnLeg,
    NotFound,
)
from app.models.flight import Flight, FlightStatus
from app.models.ticket import Ticket, TicketStatus
from app.services.flight_generator import flight_generator


def flights_for(db, ticket_id):
    return db.query(Flight).filter(Flight.ticket_id == ticket_id).order_by(Flight.is_return).all()


def test_round_trip_generates_both_legs(db, make_ticket):
    ticket = make_ticket(origin="Dubai", destination="London",
                         departure_date=date(2024, 5, 10), return_date=date(2024, 5, 20))

    departure, ticket = flight_generator.generate_flight(db, ticket.id, is_return=False)
    assert (departure.origin, departure.destination) == ("Dubai", "London")
    assert departure.departure_date == date(2024, 5, 10)
    assert departure.is_return is False
    assert departure.status == FlightStatus.PENDING
    assert departure.ticket_reference == ticket.reference
    assert departure.id.startswith("FL") and len(departure.id) == 10
    assert ticket.status == TicketStatus.ACTIVE
    assert ticket.departure_flight_id == departure.id

    return_flight, ticket = flight_generator.generate_flight(db, ticket.id, is_return=True)
    assert (return_flight.origin, return_flight.destination) == ("London", "Dubai")
    assert return_flight.departure_date == date(2024, 5, 20)
    assert return_flight.is_return is True
    assert ticket.status == TicketStatus.COMPLETED
    assert ticket.return_flight_id == return_flight.id
    assert len(flights_for(db, ticket.id)) == 2


def test_one_way_ticket_completes_on_departure(db, make_ticket):
    ticket = make_ticket(return_date=None)
    flight, ticket = flight_generator.generate_flight(db, ticket.id, is_return=False)

    assert ticket.status == TicketStatus.COMPLETED
    assert ticket.departure_completed is True
    with pytest.raises(MissingReturnLeg):
        flight_generator.generate_flight(db, ticket.id, is_return=True)


def test_history_records_generation(db, make_ticket):
    ticket = make_ticket()
    flight, ticket = flight_generator.generate_flight(db, ticket.id, is_return=False, generated_by="desk@example.com")

    change = ticket.status_history[-1]
    assert change.previous_status == TicketStatus.PENDING
    assert change.new_status == TicketStatus.ACTIVE
    assert change.note == f"Departure flight {flight.id} generated"
    assert change.changed_by == "desk@example.com"


def test_second_departure_is_rejected_and_writes_nothing(db, make_ticket):
    ticket = make_ticket()
    flight_generator.generate_flight(db, ticket.id, is_return=False)

    with pytest.raises(AlreadyProcessed):
        flight_generator.generate_flight(db, ticket.id, is_return=False)
    assert len(flights_for(db, ticket.id)) == 1


def test_return_before_departure_is_rejected(db, make_ticket):
    ticket = make_ticket()
    with pytest.raises(DeparturePending):
        flight_generator.generate_flight(db, ticket.id, is_return=True)

    db.refresh(ticket)
    assert ticket.departure_completed is False
    assert ticket.return_completed is False
    assert flights_for(db, ticket.id) == []


def test_cancelled_ticket_is_rejected(db, make_ticket):
    ticket = make_ticket(status=TicketStatus.CANCELLED)
    with pytest.raises(InvalidTransition):
        flight_generator.generate_flight(db, ticket.id, is_return=False)
    assert flights_for(db, ticket.id) == []


def test_unknown_ticket(db):
    with pytest.raises(NotFound) as exc:
        flight_generator.generate_flight(db, "missing", is_return=False)
    assert exc.value.message == "Ticket not found"


def test_losing_a_race_creates_no_flight(db, make_ticket):
    ticket = make_ticket()
    db.query(Ticket).filter(Ticket.id == ticket.id).update(
        {Ticket.departure_completed: True, Ticket.status: TicketStatus.ACTIVE},
        synchronize_session=False,
    )

    with pytest.raises(AlreadyProcessed):
        flight_generator.generate_flight(db, ticket.id, is_return=False)
    assert flights_for(db, ticket.id) == []


def test_failed_link_rolls_back_the_whole_leg(db, make_ticket):
    ticket = make_ticket()
    ticket_id = ticket.id

    with mock.patch.object(
        flight_generator, "_attach_flight",
        side_effect=OperationalError("UPDATE tickets", {}, Exception("disk I/O error")),
    ):
        with pytest.raises(OperationalError):
            flight_generator.generate_flight(db, ticket_id, is_return=False)

    ticket = db.query(Ticket).filter(Ticket.id == ticket_id).first()
    assert ticket.departure_completed is False
    assert ticket.status == TicketStatus.PENDING
    assert flights_for(db, ticket_id) == []

    # The leg can be generated again once the failure is gone
    flight, ticket = flight_generator.generate_flight(db, ticket_id, is_return=False)
    assert ticket.departure_flight_id == flight.id


def test_orphan_flight_is_reported_inconsistent(db, make_ticket):
    ticket = make_ticket()
    orphan = flight_generator.build_flight(ticket, is_return=False)
    db.add(orphan)
    db.commit()

    inconsistent, flight_id = flight_generator.find_inconsistency(db, ticket.id, is_return=False)
    assert inconsistent is True
    assert flight_id == orphan.id

    with pytest.raises(InconsistentStateError) as exc:
        flight_generator.reconcile(db, ticket.id, is_return=False)
    assert exc.value.flight_id == orphan.id
    assert exc.value.to_dict()["retryable"] is False


def test_completed_leg_pointing_at_missing_flight_is_inconsistent(db, make_ticket):
    ticket = make_ticket(departure_completed=True, status=TicketStatus.ACTIVE, departure_flight_id="FLDEADBEEF")
    assert flight_generator.find_inconsistency(db, ticket.id, is_return=False) == (True, "FLDEADBEEF")


def test_consistent_legs_reconcile_quietly(db, make_ticket):
    ticket = make_ticket()
    flight_generator.generate_flight(db, ticket.id, is_return=False)

    assert flight_generator.find_inconsistency(db, ticket.id, is_return=False) == (False, None)
    assert flight_generator.find_inconsistency(db, ticket.id, is_return=True) == (False, None)
    flight_generator.reconcile(db, ticket.id, is_return=False)
