"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from logistics.api.routes import auth, users, passengers, trips, sites

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(passengers.router)
api_router.include_router(trips.router)
api_router.include_router(sites.router)
