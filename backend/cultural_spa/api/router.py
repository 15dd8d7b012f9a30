"""
Central API router that aggregates all route modules.
"""

from fastapi import APIRouter

from cultural_spa.api.routes import admin, comments, events, favorites, users, venues

api_router = APIRouter(prefix="/api")
api_router.include_router(users.router)
api_router.include_router(venues.router)
api_router.include_router(events.router)
api_router.include_router(comments.router)
api_router.include_router(favorites.router)
api_router.include_router(admin.router)
