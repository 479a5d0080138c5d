"""Main API router that includes all endpoint routers."""

from fastapi import APIRouter

from nestquarter.api.v1 import bookings, internal, payouts, properties

api_router = APIRouter()

# Properties
api_router.include_router(properties.router, prefix="/properties", tags=["Properties"])

# Bookings
api_router.include_router(bookings.router, prefix="/bookings", tags=["Bookings"])

# Payouts
api_router.include_router(payouts.router, prefix="/payouts", tags=["Payouts"])

# Internal
api_router.include_router(internal.router, prefix="/internal", tags=["Internal"])
