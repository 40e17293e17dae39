from fastapi import APIRouter

from schedule_server.api.v1 import auth, event_settings, events, health, rbac, users


api_router = APIRouter()
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(rbac.router, prefix="/rbac", tags=["rbac"])
api_router.include_router(events.router, prefix="/events", tags=["events"])
api_router.include_router(
    event_settings.router, prefix="/event-settings", tags=["event-settings"]
)
