# File: app/api/v1/api.py
from fastapi import APIRouter
from app.api.v1.endpoints import auth, tickets, flights, visa_types, employee_visas, reports

# Create main API router
api_router = APIRouter()

# Include all endpoint routers with proper configuration
api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["authentication"]
)

api_router.include_router(
    tickets.router,
    prefix="/tickets",
    tags=["tickets"]
)

api_router.include_router(
    flights.router,
    prefix="/flights",
    tags=["flights"]
)

api_router.include_router(
    visa_types.router,
    prefix="/visa-types",
    tags=["visa-types"]
)

api_router.include_router(
    employee_visas.router,
    prefix="/employee-visas",
    tags=["employee-visas"]
)

api_router.include_router(
    reports.router,
    prefix="/reports",
    tags=["reports"]
)
