# ============================================================================
# FILE: justvibe/api/endpoints/history.py
# ============================================================================
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from justvibe.db.session import get_db
from justvibe.api.dependencies import get_current_user
from justvibe.schemas.history import HistoryCreate
from justvibe.schemas.user import CurrentUser
from justvibe.services.history_service import history_service

router = APIRouter(dependencies=[Depends(get_current_user)])

@router.post("/add")
async def record_play(
    entry: HistoryCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Record that the current user played a song"""
    return {"entry": history_service.record_play(db, current_user.id, entry)}

@router.get("/user")
async def get_history(
    limit: int = Query(50, ge=1, le=200, description="Number of entries"),
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """
    Get user's playback history
    Most recent first
    """
    return {"history": history_service.get_history(db, current_user.id, limit)}

@router.delete("/clear")
async def clear_history(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Delete the current user's playback history"""
    deleted = history_service.clear_history(db, current_user.id)
    return {"message": f"Cleared {deleted} entries from listening history"}
