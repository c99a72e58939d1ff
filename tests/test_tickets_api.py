from app.models.flight import Flight
from app.models.ticket import TicketStatus
from conftest import API


def ticket_payload(employee, airline, **overrides):
    payload = {
        "employee_id": employee.id,
        "airline_id": airline.id,
        "reference": "EK-2024-0001",
        "origin": "Dubai",
        "destination": "London",
        "departure_date": "2024-05-10",
        "return_date": "2024-05-20",
        "cost": "1250.00",
        "flight_number": "EK001",
    }
    payload.update(overrides)
    return payload


def test_create_ticket_starts_pending(client, employee, airline):
    response = client.post(f"{API}/tickets/", json=ticket_payload(employee, airline))
    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "Pending"
    assert data["has_return"] is True
    assert data["departure_completed"] is False
    assert data["return_completed"] is False
    assert data["currency"] == "USD"
    assert data["employee_name"] == "Amina Odhiambo"
    assert data["airline_name"] == "Emirates"
    assert data["status_history"][0]["note"] == "Ticket created"


def test_create_one_way_ticket(client, employee, airline):
    response = client.post(f"{API}/tickets/", json=ticket_payload(employee, airline, return_date=None))
    assert response.status_code == 201
    assert response.json()["has_return"] is False


def test_return_before_departure_rejected(client, employee, airline):
    response = client.post(
        f"{API}/tickets/", json=ticket_payload(employee, airline, return_date="2024-05-01")
    )
    assert response.status_code == 422
    assert response.json()["code"] == "VALIDATION_FAILED"
    assert response.json()["fields"] == ["return_date"]


def test_duplicate_reference_conflicts(client, employee, airline):
    assert client.post(f"{API}/tickets/", json=ticket_payload(employee, airline)).status_code == 201
    response = client.post(f"{API}/tickets/", json=ticket_payload(employee, airline))
    assert response.status_code == 409
    assert response.json()["code"] == "CONFLICT"


def test_unknown_employee(client, employee, airline):
    response = client.post(f"{API}/tickets/", json=ticket_payload(employee, airline, employee_id="nobody"))
    assert response.status_code == 404
    assert response.json()["detail"] == "Employee not found"


def test_viewer_cannot_create_tickets(viewer_client, employee, airline):
    response = viewer_client.post(f"{API}/tickets/", json=ticket_payload(employee, airline))
    assert response.status_code == 403


def test_list_filter_and_lookups(client, make_ticket):
    pending = make_ticket(reference="TKT-A")
    make_ticket(reference="TKT-B", status=TicketStatus.CANCELLED)

    all_refs = {t["reference"] for t in client.get(f"{API}/tickets/").json()}
    assert all_refs == {"TKT-A", "TKT-B"}

    cancelled = client.get(f"{API}/tickets/", params={"status": "Cancelled"}).json()
    assert [t["reference"] for t in cancelled] == ["TKT-B"]

    assert client.get(f"{API}/tickets/reference/TKT-A").json()["id"] == pending.id
    assert client.get(f"{API}/tickets/reference/NOPE").status_code == 404
    assert len(client.get(f"{API}/tickets/employee/{pending.employee_id}").json()) == 2
    assert [t["reference"] for t in client.get(f"{API}/tickets/pending").json()] == ["TKT-A"]


def test_create_flight_messages(client, make_ticket):
    ticket = make_ticket()

    response = client.post(f"{API}/tickets/{ticket.id}/create-flight", json={"isReturn": False})
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Departure flight created successfully"
    assert body["flight"]["origin"] == "Dubai"
    assert body["ticket"]["status"] == "Active"

    response = client.post(f"{API}/tickets/{ticket.id}/create-flight", json={"isReturn": True})
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Return flight created successfully"
    assert body["flight"]["origin"] == "London"
    assert body["ticket"]["status"] == "Completed"


def test_create_flight_without_body_is_departure(client, make_ticket):
    ticket = make_ticket()
    response = client.post(f"{API}/tickets/{ticket.id}/create-flight")
    assert response.status_code == 201
    assert response.json()["flight"]["is_return"] is False


def test_create_flight_errors(client, make_ticket):
    ticket = make_ticket()

    response = client.post(f"{API}/tickets/{ticket.id}/create-flight", json={"isReturn": True})
    assert response.status_code == 409
    assert response.json()["code"] == "DEPARTURE_PENDING"

    client.post(f"{API}/tickets/{ticket.id}/create-flight", json={"isReturn": False})
    response = client.post(f"{API}/tickets/{ticket.id}/create-flight", json={"isReturn": False})
    assert response.status_code == 409
    assert response.json()["detail"] == "Departure flight has already been created for this ticket"

    response = client.post(f"{API}/tickets/missing/create-flight", json={"isReturn": False})
    assert response.status_code == 404


def test_status_update_validates_value(client, make_ticket):
    ticket = make_ticket()
    response = client.put(f"{API}/tickets/{ticket.id}/status", json={"status": "Boarding"})
    assert response.status_code == 422
    assert "status must be one of: Pending, Active, Completed, Cancelled" in response.text


def test_status_update_keeps_history(client, make_ticket):
    ticket = make_ticket()
    response = client.put(
        f"{API}/tickets/{ticket.id}/status", json={"status": "Delayed", "notes": "Crew shortage"}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "Delayed"
    assert "Status changed from Pending to Delayed: Crew shortage" in data["status_log"]


def test_cancel_completed_ticket_rejected(client, make_ticket):
    ticket = make_ticket(status=TicketStatus.COMPLETED, departure_completed=True, return_completed=True)
    response = client.put(f"{API}/tickets/{ticket.id}/status", json={"status": "Cancelled"})
    assert response.status_code == 409
    assert response.json()["code"] == "INVALID_TRANSITION"


def test_update_details(client, make_ticket):
    ticket = make_ticket()
    response = client.put(f"{API}/tickets/{ticket.id}", json={"flight_number": "EK003", "notes": "Aisle seat"})
    assert response.status_code == 200
    assert response.json()["flight_number"] == "EK003"


def test_cannot_add_return_date_to_one_way(client, make_ticket):
    ticket = make_ticket(return_date=None)
    response = client.put(f"{API}/tickets/{ticket.id}", json={"return_date": "2024-06-01"})
    assert response.status_code == 422
    assert response.json()["fields"] == ["return_date"]


def test_delete_unprocessed_ticket(client, make_ticket):
    ticket = make_ticket()
    response = client.delete(f"{API}/tickets/{ticket.id}")
    assert response.status_code == 200
    assert client.get(f"{API}/tickets/{ticket.id}").status_code == 404


def test_delete_locked_after_generation(client, db, make_ticket):
    ticket = make_ticket()
    client.post(f"{API}/tickets/{ticket.id}/create-flight", json={"isReturn": False})

    response = client.delete(f"{API}/tickets/{ticket.id}")
    assert response.status_code == 409
    assert response.json()["code"] == "TICKET_LOCKED"
    assert db.query(Flight).filter(Flight.ticket_id == ticket.id).count() == 1


def test_required_details_cannot_be_cleared(client, make_ticket):
    ticket = make_ticket()
    for field in ("airline_id", "currency"):
        response = client.put(f"{API}/tickets/{ticket.id}", json={field: None})
        assert response.status_code == 422
        assert response.json()["code"] == "VALIDATION_FAILED"
        assert response.json()["fields"] == [field]
