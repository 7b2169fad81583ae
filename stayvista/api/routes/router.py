"""Main API router that includes all endpoint routers."""

from fastapi import APIRouter

from stayvista.api.routes import auth, bookings, payments, rooms, stats, users

api_router = APIRouter()

# Session cookie
api_router.include_router(auth.router, tags=["Authentication"])

# Users
api_router.include_router(users.router, tags=["Users"])

# Rooms
api_router.include_router(rooms.router, tags=["Rooms"])

# Bookings
api_router.include_router(bookings.router, tags=["Bookings"])

# Payments
api_router.include_router(payments.router, tags=["Payments"])

# Statistics
api_router.include_router(stats.router, tags=["Statistics"])
