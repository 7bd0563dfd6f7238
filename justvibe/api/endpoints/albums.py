# ============================================================================
# FILE: justvibe/api/endpoints/albums.py
# ============================================================================
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from justvibe.db.session import get_db
from justvibe.services.catalog_service import catalog_service

router = APIRouter()

@router.get("")
async def list_albums(db: Session = Depends(get_db)):
    """
    All albums with their songs
    Available to all users (authenticated and anonymous)
    """
    return catalog_service.list_albums(db)

@router.get("/{album_id}")
async def get_album(album_id: str, db: Session = Depends(get_db)):
    """
    A single album with its songs
    Available to all users (authenticated and anonymous)
    """
    return catalog_service.get_album(db, album_id)
