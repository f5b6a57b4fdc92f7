"""API v1 - all routers mounted under /api."""
from fastapi import APIRouter

from hiretrack.app.api.v1.applications.routes import router as applications_router
from hiretrack.app.api.v1.auth.auth import router as auth_router
from hiretrack.app.api.v1.cvs.routes import router as cvs_router
from hiretrack.app.api.v1.notifications.routes import router as notifications_router
from hiretrack.app.api.v1.reminders.routes import router as reminders_router
from hiretrack.app.api.v1.users.routes import router as users_router

api_router = APIRouter()
api_router.include_router(auth_router)
api_router.include_router(users_router)
api_router.include_router(applications_router)
api_router.include_router(reminders_router)
api_router.include_router(cvs_router)
api_router.include_router(notifications_router)

__all__ = ["api_router"]
