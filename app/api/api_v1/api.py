from fastapi import APIRouter
from app.api.api_v1.endpoints import bookings, days, notifications

router = APIRouter()

# Include all routers
router.include_router(bookings.router, prefix="/bookings", tags=["Bookings"])
router.include_router(days.router, tags=["Days"])
router.include_router(notifications.router, tags=["Email"])
