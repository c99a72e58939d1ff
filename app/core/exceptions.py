"""
Typed errors raised by the travel-document services.

Every error carries a machine-readable ``code`` and the HTTP status the API
layer answers with, plus structured attributes so handlers never parse
message strings.

    MobilityError
    +-- ValidationFailed              VALIDATION_FAILED        422
    +-- DurationUndeterminedError     DURATION_UNDETERMINED    422
    +-- ConflictError                 CONFLICT                 409
    +-- InconsistentStateError        INCONSISTENT_STATE       500
    +-- PreconditionViolation         PRECONDITION_VIOLATION   409
        +-- NotFound                  NOT_FOUND                404
        +-- MissingReturnLeg          MISSING_RETURN_LEG
        +-- AlreadyProcessed          ALREADY_PROCESSED
        +-- DeparturePending          DEPARTURE_PENDING
        +-- InvalidTransition         INVALID_TRANSITION
        +-- TicketLocked              TICKET_LOCKED
"""
from typing import Any, Dict, List, Optional


class MobilityError(Exception):
    """Base class for all domain errors."""

    code: str = "MOBILITY_ERROR"
    status_code: int = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {"detail": self.message, "code": self.code}


class ValidationFailed(MobilityError):
    """Request data is missing or malformed."""

    code = "VALIDATION_FAILED"
    status_code = 422

    def __init__(self, message: str, fields: Optional[List[str]] = None):
        self.fields = fields or []
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["fields"] = self.fields
        return data


class DurationUndeterminedError(MobilityError):
    """A visa expiry date cannot be derived from the visa type duration."""

    code = "DURATION_UNDETERMINED"
    status_code = 422

    def __init__(self, duration: Optional[str], issue_date: Any = None):
        self.duration = duration
        self.issue_date = issue_date
        super().__init__(
            f"Expiry date could not be calculated. Issue date: {issue_date}, "
            f"Visa type duration: {duration or 'not set'}"
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["duration"] = self.duration
        data["issue_date"] = str(self.issue_date) if self.issue_date else None
        return data


class ConflictError(MobilityError):
    """A unique id or reference is already taken."""

    code = "CONFLICT"
    status_code = 409


class InconsistentStateError(MobilityError):
    """
    A flight row and its ticket disagree after a failed generation.

    Not retryable: retrying could create a duplicate leg. Operators have to
    reconcile the ticket by hand.
    """

    code = "INCONSISTENT_STATE"
    status_code = 500

    def __init__(self, ticket_id: str, leg: str, flight_id: Optional[str] = None):
        self.ticket_id = ticket_id
        self.leg = leg
        self.flight_id = flight_id
        super().__init__(
            f"Ticket {ticket_id} is inconsistent after generating the {leg} flight; "
            "manual reconciliation required"
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            "ticket_id": self.ticket_id,
            "leg": self.leg,
            "flight_id": self.flight_id,
            "retryable": False,
        })
        return data


class PreconditionViolation(MobilityError):
    """An operation was attempted in a state that does not allow it."""

    code = "PRECONDITION_VIOLATION"
    status_code = 409


class NotFound(PreconditionViolation):
    code = "NOT_FOUND"
    status_code = 404

    def __init__(self, entity: str, entity_id: Any):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found")


class MissingReturnLeg(PreconditionViolation):
    code = "MISSING_RETURN_LEG"

    def __init__(self, ticket_id: str):
        self.ticket_id = ticket_id
        super().__init__("This ticket does not have a return date")


class AlreadyProcessed(PreconditionViolation):
    code = "ALREADY_PROCESSED"

    def __init__(self, ticket_id: str, leg: str):
        self.ticket_id = ticket_id
        self.leg = leg
        super().__init__(f"{leg.capitalize()} flight has already been created for this ticket")


class DeparturePending(PreconditionViolation):
    code = "DEPARTURE_PENDING"

    def __init__(self, ticket_id: str):
        self.ticket_id = ticket_id
        super().__init__("Departure flight must be created before the return flight")


class InvalidTransition(PreconditionViolation):
    code = "INVALID_TRANSITION"

    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot change ticket status from {current} to {requested}")


class TicketLocked(PreconditionViolation):
    code = "TICKET_LOCKED"

    def __init__(self, ticket_id: str):
        self.ticket_id = ticket_id
        super().__init__("Ticket cannot be deleted once a flight has been generated from it")
