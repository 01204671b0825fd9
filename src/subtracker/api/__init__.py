"""API route aggregation.

All routers registered here get mounted in main.py.

Learn: Unlike a router-level `dependencies=[...]` guard, the subscription
routes declare get_current_user as a parameter, because they need the
resolved identity value, not just the check. Health and auth are open.
"""

from fastapi import APIRouter

from subtracker.api.auth import router as auth_router
from subtracker.api.health import router as health_router
from subtracker.api.subscriptions import router as subscriptions_router

api_router = APIRouter(prefix="/api")

# Open routes — no auth required
api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])

# Protected routes — every handler requires a valid Bearer token
api_router.include_router(subscriptions_router, tags=["subscriptions"])
