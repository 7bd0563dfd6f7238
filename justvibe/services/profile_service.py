# ============================================================================
# FILE: justvibe/services/profile_service.py
# ============================================================================
import os
import random
import time
from typing import Dict, Optional
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from justvibe.config import settings
from justvibe.core.errors import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UpstreamError,
    ValidationError,
)
from justvibe.db.models.favorite import Favorite
from justvibe.db.models.playlist import Playlist
from justvibe.db.models.profile import UserProfile, DEFAULT_PREFERENCES
from justvibe.schemas.profile import ProfileUpdate
from justvibe.services.history_service import HistoryService, history_service
from justvibe.services.identity_provider import IdentityProvider, identity_provider
from justvibe.services.storage import LocalBlobStore, PROFILE_PICTURES
from justvibe.services.user_service import MIN_PASSWORD_LENGTH, is_valid_username
import logging

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = ("jpeg", "jpg", "png", "gif")

def format_profile(profile: UserProfile, email: str) -> Dict:
    return {
        "id": profile.id,
        "username": profile.username,
        "email": email or "",
        "bio": profile.bio or None,
        "location": profile.location or None,
        "profilePicture": profile.profile_picture or None,
        "socialLinks": profile.social_links or {},
        "preferences": {**DEFAULT_PREFERENCES, **(profile.preferences or {})},
    }

def is_allowed_image(filename: Optional[str], content_type: Optional[str]) -> bool:
    """Both the extension and the declared content type must name an image type"""
    if not filename or not content_type:
        return False
    extension = os.path.splitext(filename)[1].lower().lstrip(".")
    content_type = content_type.lower()
    return extension in ALLOWED_IMAGE_TYPES and any(t in content_type for t in ALLOWED_IMAGE_TYPES)

class ProfileService:
    """Read and update profile fields; credentials go through the identity provider"""

    def __init__(self, identities: IdentityProvider, history: HistoryService):
        self.identities = identities
        self.history = history

    def find_by_username(self, db: Session, username: str) -> Optional[UserProfile]:
        return db.query(UserProfile).filter(
            func.lower(UserProfile.username) == username.lower()
        ).first()

    def get_profile(self, db: Session, username: str) -> Dict:
        """Profile with counts and listening stats"""
        try:
            profile = self.find_by_username(db, username)
            if not profile:
                raise NotFoundError("User not found")

            identity = self.identities.get_user_by_id(db, profile.id)
            favorites = db.query(func.count(Favorite.id)).filter(Favorite.user_id == profile.id).scalar()
            playlists = db.query(func.count(Playlist.id)).filter(Playlist.user_id == profile.id).scalar()
            listening = self.history.get_stats(db, profile.id)
        except SQLAlchemyError as e:
            logger.error(f"Error fetching profile {username}: {e}")
            raise UpstreamError("Failed to fetch profile") from e

        data = format_profile(profile, identity.email if identity else "")
        data["stats"] = {
            "playlists": playlists or 0,
            "favorites": favorites or 0,
            "hoursPlayed": listening["hoursPlayed"],
            "minutesPlayed": listening["minutesPlayed"],
            "followers": 0,
            "following": 0,
            "totalPlays": listening["totalPlays"],
        }
        data["topArtists"] = listening["topArtists"]
        data["topGenres"] = listening["topGenres"]
        data["recentlyPlayed"] = listening["recentlyPlayed"]
        return data

    def require_own_profile(self, db: Session, username: str, user_id: str,
                            missing_message: str = "Profile not found") -> UserProfile:
        profile = self.find_by_username(db, username)
        if not profile:
            raise NotFoundError(missing_message)
        if profile.id != user_id:
            raise ForbiddenError("Unauthorized")
        return profile

    def update_profile(self, db: Session, username: str, user_id: str, updates: ProfileUpdate) -> Dict:
        """
        Apply credential changes first, then profile fields
        The two live in different places, so a failing profile write does
        not undo an already applied password or email change
        """
        profile = self.require_own_profile(db, username, user_id)
        identity = self.identities.get_user_by_id(db, user_id)
        if not identity:
            raise NotFoundError("User not found")

        if updates.newPassword:
            if not updates.currentPassword:
                raise ValidationError("Current password is required")
            if len(updates.newPassword) < MIN_PASSWORD_LENGTH:
                raise ValidationError("Password must be at least 8 characters long.")
            if not self.identities.verify_credentials(db, identity.email, updates.currentPassword):
                raise ValidationError("Current password is incorrect")
            self.identities.update_password(db, user_id, updates.newPassword)

        if updates.email:
            try:
                identity = self.identities.update_email(db, user_id, updates.email)
            except ConflictError as e:
                raise ValidationError("Failed to update email") from e

        if updates.username is not None:
            new_username = updates.username.strip()
            if not new_username:
                raise ValidationError("Username cannot be empty")
            if not is_valid_username(new_username):
                raise ValidationError("Username cannot contain \"/\".")
            if new_username.lower() != profile.username.lower():
                if self.find_by_username(db, new_username):
                    raise ConflictError("Username already exists.")

        try:
            if updates.username is not None:
                profile.username = updates.username.strip()
            if updates.bio is not None:
                profile.bio = updates.bio
            if updates.location is not None:
                profile.location = updates.location
            if updates.socialLinks is not None:
                profile.social_links = dict(updates.socialLinks)
            if updates.preferences is not None:
                profile.preferences = {**(profile.preferences or {}), **updates.preferences}
            db.commit()
            db.refresh(profile)
        except IntegrityError as e:
            db.rollback()
            raise ConflictError("Username already exists.") from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error updating profile: {e}")
            raise UpstreamError("Failed to update profile") from e

        logger.info(f"Profile updated: {profile.username}")
        return format_profile(profile, identity.email)

    def update_profile_picture(self, db: Session, username: str, user_id: str, store: LocalBlobStore,
                               filename: Optional[str], content_type: Optional[str],
                               data: Optional[bytes]) -> str:
        """Validate and store an uploaded image, returning its URL"""
        if data is None:
            raise ValidationError("No file uploaded")
        if not is_allowed_image(filename, content_type):
            raise ValidationError("Only image files are allowed!")
        if len(data) > settings.MAX_PROFILE_PICTURE_BYTES:
            raise ValidationError("File too large. Maximum size is 5MB")

        profile = self.require_own_profile(db, username, user_id)

        extension = os.path.splitext(filename)[1].lower()
        unique_suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
        stored_name = f"{profile.username}-{unique_suffix}{extension}"
        try:
            url = store.save(PROFILE_PICTURES, stored_name, data)
        except OSError as e:
            logger.error(f"Error storing profile picture: {e}")
            raise UpstreamError("Failed to update profile picture") from e

        try:
            profile.profile_picture = url
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error updating profile picture: {e}")
            raise UpstreamError("Failed to update profile picture") from e

        logger.info(f"Profile picture updated for {profile.username}")
        return url

# Create singleton instance
profile_service = ProfileService(identity_provider, history_service)
