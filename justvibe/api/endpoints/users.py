# ============================================================================
# FILE: justvibe/api/endpoints/users.py
# ============================================================================
from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session
from typing import Optional
from justvibe.config import settings
from justvibe.db.session import get_db
from justvibe.api.dependencies import get_current_user
from justvibe.core.errors import AppError
from justvibe.schemas.profile import ProfileUpdate
from justvibe.schemas.user import CurrentUser, UserCreate, UserLogin, UsernameRequest
from justvibe.services.profile_service import profile_service
from justvibe.services.storage import LocalBlobStore, get_blob_store
from justvibe.services.user_service import user_service
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

def status_text(code: int, message: str) -> PlainTextResponse:
    """The account routes answer with "<code>::<message>" bodies"""
    return PlainTextResponse(f"{code}::{message}", status_code=code)

@router.post("/insert", response_class=PlainTextResponse)
async def register(
    user_data: UserCreate,
    db: Session = Depends(get_db)
):
    """
    Register a new account and its profile
    """
    try:
        user_service.register(db, user_data)
    except AppError as e:
        return status_text(e.status_code, e.message)
    return status_text(200, "Registration successful!")

@router.post("/signin", response_class=PlainTextResponse)
async def signin(
    credentials: UserLogin,
    db: Session = Depends(get_db)
):
    """
    Login with email and password
    Returns "200::<token>"
    """
    try:
        token = user_service.signin(db, credentials)
    except AppError as e:
        return status_text(e.status_code, e.message)
    return status_text(200, token)

@router.post("/getusername", response_class=PlainTextResponse)
async def get_username(
    body: UsernameRequest,
    db: Session = Depends(get_db)
):
    """
    Resolve the username for a token, creating the profile if missing
    """
    try:
        username = user_service.resolve_username(db, body.csrid)
    except AppError as e:
        return PlainTextResponse(e.message, status_code=e.status_code)
    return PlainTextResponse(username)

@router.get("/profile/{username}")
async def get_profile(
    username: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """
    Public profile with stats
    Requires authentication
    """
    return profile_service.get_profile(db, username)

@router.put("/update/{username}")
async def update_profile(
    username: str,
    updates: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """
    Update profile fields, password or email
    Requires authentication and ownership
    """
    return profile_service.update_profile(db, username, current_user.id, updates)

@router.post("/profile-picture/{username}")
async def upload_profile_picture(
    username: str,
    profile_picture: Optional[UploadFile] = File(None, alias="profilePicture"),
    db: Session = Depends(get_db),
    store: LocalBlobStore = Depends(get_blob_store),
    current_user: CurrentUser = Depends(get_current_user)
):
    """
    Upload a profile picture (jpeg, png or gif, 5MB max)
    Requires authentication and ownership
    """
    data = None
    filename = content_type = None
    if profile_picture is not None:
        # One byte past the limit is enough to tell an oversize upload apart
        data = await profile_picture.read(settings.MAX_PROFILE_PICTURE_BYTES + 1)
        filename = profile_picture.filename
        content_type = profile_picture.content_type
    url = profile_service.update_profile_picture(
        db, username, current_user.id, store, filename, content_type, data
    )
    return {"profilePicture": url}
