# ============================================================================
# FILE: justvibe/services/user_service.py
# ============================================================================
from typing import Optional
from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from justvibe.core.errors import AuthError, ConflictError, UpstreamError, ValidationError
from justvibe.core.security import TokenError, create_access_token, decode_access_token
from justvibe.db.models.profile import UserProfile
from justvibe.schemas.user import UserCreate, UserLogin
from justvibe.services.identity_provider import IdentityProvider, identity_provider
import logging

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8

# Usernames are path segments in the profile routes
USERNAME_FORBIDDEN_CHARS = "/"

_email_adapter = TypeAdapter(EmailStr)

def is_valid_email(email: str) -> bool:
    """Same check the profile update schema applies through EmailStr"""
    try:
        _email_adapter.validate_python(email)
    except PydanticValidationError:
        return False
    return True

def is_valid_username(username: str) -> bool:
    return not any(char in username for char in USERNAME_FORBIDDEN_CHARS)

def email_local_part(email: Optional[str]) -> str:
    return email.split("@")[0] if email else ""

class UserService:
    """Service layer for registration, sign-in and username resolution"""

    def __init__(self, identities: IdentityProvider):
        self.identities = identities

    def get_profile(self, db: Session, user_id: str) -> Optional[UserProfile]:
        return db.get(UserProfile, user_id)

    def get_profile_by_username(self, db: Session, username: str) -> Optional[UserProfile]:
        """Usernames are matched case-insensitively"""
        return db.query(UserProfile).filter(
            func.lower(UserProfile.username) == username.lower()
        ).first()

    def register(self, db: Session, user_data: UserCreate) -> UserProfile:
        """
        Create the identity, then its profile
        If the profile cannot be written the identity is removed again so a
        retry with the same email is possible
        """
        if not user_data.username or not user_data.email or not user_data.password:
            raise ValidationError("Please fill out all fields.")
        if len(user_data.password) < MIN_PASSWORD_LENGTH:
            raise ValidationError("Password must be at least 8 characters long.")
        if not is_valid_email(user_data.email):
            raise ValidationError("Please enter a valid email address.")

        username = user_data.username.strip()
        if not username:
            raise ValidationError("Please fill out all fields.")
        if not is_valid_username(username):
            raise ValidationError("Username cannot contain \"/\".")
        if self.get_profile_by_username(db, username):
            raise ConflictError("Username already exists.")

        identity = self.identities.create_user(db, user_data.email, user_data.password)

        try:
            profile = UserProfile(id=identity.id, username=username)
            db.add(profile)
            db.commit()
            db.refresh(profile)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Profile creation error, removing identity {identity.id}: {e}")
            self.identities.delete_user(db, identity.id)
            raise UpstreamError("Registration failed. Please try again.") from e

        logger.info(f"User registered: {profile.username}")
        return profile

    def signin(self, db: Session, credentials: UserLogin) -> str:
        """Verify credentials and issue a token"""
        if not credentials.email or not credentials.password:
            raise ValidationError("Please enter both email and password.")

        identity = self.identities.verify_credentials(db, credentials.email, credentials.password)
        if not identity:
            raise AuthError("Invalid email or password.", status_code=401)

        profile = self.get_profile(db, identity.id)
        username = profile.username if profile else email_local_part(identity.email)
        return create_access_token(
            data={"userId": identity.id, "email": identity.email, "username": username}
        )

    def resolve_username(self, db: Session, token: Optional[str]) -> str:
        """
        Return the username for a token, provisioning a profile when the
        identity does not have one yet
        """
        if not token:
            raise ValidationError("Token required")
        try:
            payload = decode_access_token(token)
        except TokenError as e:
            raise AuthError("Invalid or expired token") from e

        user_id = payload.get("userId")
        if not user_id:
            raise AuthError("Invalid token: missing user ID")

        profile = self.get_profile(db, user_id)
        if profile:
            return profile.username

        email = payload.get("email")
        base_username = email_local_part(email).replace("/", "_") or f"user_{user_id[:8]}"
        final_username = self._available_username(db, base_username)

        try:
            profile = UserProfile(id=user_id, username=final_username)
            db.add(profile)
            db.commit()
            logger.info(f"Provisioned profile {final_username} for identity {user_id}")
            return final_username
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error creating user profile: {e}")
            return payload.get("username") or final_username

    def _available_username(self, db: Session, base_username: str) -> str:
        candidate = base_username
        counter = 1
        while self.get_profile_by_username(db, candidate):
            candidate = f"{base_username}_{counter}"
            counter += 1
        return candidate

# Create singleton instance
user_service = UserService(identity_provider)
