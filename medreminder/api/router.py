from fastapi import APIRouter

from medreminder.api.routes import scheduler
from medreminder.domains.appointments.api.routes import router as appointments_router
from medreminder.domains.medications.api.routes import (
    adherence_router,
    medications_router,
    users_router,
)

api_router = APIRouter()

# API routes (all have /api/v1 prefix from the app factory)
api_router.include_router(appointments_router)
api_router.include_router(medications_router)
api_router.include_router(users_router)
api_router.include_router(adherence_router)
api_router.include_router(scheduler.router)
