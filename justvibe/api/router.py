# ============================================================================
# FILE: justvibe/api/router.py
# ============================================================================
from fastapi import APIRouter
from justvibe.api.endpoints import albums, favorites, history, playlists, users

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(albums.router, prefix="/albums", tags=["albums"])
api_router.include_router(favorites.router, prefix="/api/favorites", tags=["favorites"])
api_router.include_router(playlists.router, prefix="/api/playlists", tags=["playlists"])
api_router.include_router(history.router, prefix="/api/history", tags=["history"])
