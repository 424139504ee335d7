"""API route aggregation.

All routers registered here get mounted in main.py under /api/<version>.

Learn: Auth is applied per route with Depends(get_current_identity)
rather than per router, because /auth and /users each mix open and
protected endpoints (signup vs signout, list vs get-by-id).
"""

from fastapi import APIRouter

from authgate.api.auth import router as auth_router
from authgate.api.health import router as health_router
from authgate.api.users import router as users_router
from authgate.config import settings

api_router = APIRouter(prefix=settings.api_prefix)

api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])
api_router.include_router(users_router, tags=["users"])
