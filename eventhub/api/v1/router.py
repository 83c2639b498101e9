from fastapi import APIRouter

from eventhub.api.v1.applications import router as applications_router
from eventhub.api.v1.bookings import router as bookings_router
from eventhub.api.v1.dashboard import router as dashboard_router
from eventhub.api.v1.events import router as events_router
from eventhub.api.v1.profiles import router as profiles_router

router = APIRouter()
router.include_router(profiles_router)
router.include_router(events_router)
router.include_router(bookings_router)
router.include_router(applications_router)
router.include_router(dashboard_router)
