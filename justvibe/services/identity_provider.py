# ============================================================================
# FILE: justvibe/services/identity_provider.py
# ============================================================================
from typing import Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from justvibe.core.errors import ConflictError, NotFoundError, UpstreamError
from justvibe.core.security import get_password_hash, verify_password
from justvibe.db.models.identity import Identity
import logging

logger = logging.getLogger(__name__)

class IdentityProvider:
    """
    Owns accounts and credentials
    The rest of the application only sees the stable identity id and email;
    password hashes never leave this class
    """

    def create_user(self, db: Session, email: str, password: str) -> Identity:
        """Create an account, failing with ConflictError if the email is taken"""
        email = email.strip().lower()
        if self.get_user_by_email(db, email):
            raise ConflictError("Email already registered.")
        try:
            identity = Identity(email=email, hashed_password=get_password_hash(password))
            db.add(identity)
            db.commit()
            db.refresh(identity)
            logger.info(f"Identity created: {identity.id}")
            return identity
        except IntegrityError as e:
            db.rollback()
            raise ConflictError("Email already registered.") from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error creating identity: {e}")
            raise UpstreamError("Registration failed. Please try again.") from e

    def get_user_by_id(self, db: Session, user_id: str) -> Optional[Identity]:
        return db.get(Identity, user_id)

    def get_user_by_email(self, db: Session, email: str) -> Optional[Identity]:
        return db.query(Identity).filter(Identity.email == email.strip().lower()).first()

    def verify_credentials(self, db: Session, email: str, password: str) -> Optional[Identity]:
        """Return the identity when the password matches, otherwise None"""
        identity = self.get_user_by_email(db, email)
        if not identity:
            return None
        if not verify_password(password, identity.hashed_password):
            return None
        return identity

    def update_password(self, db: Session, user_id: str, password: str) -> Identity:
        identity = self._require(db, user_id)
        try:
            identity.hashed_password = get_password_hash(password)
            db.commit()
            logger.info(f"Password updated for identity {user_id}")
            return identity
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error updating password: {e}")
            raise UpstreamError("Failed to update password") from e

    def update_email(self, db: Session, user_id: str, email: str) -> Identity:
        identity = self._require(db, user_id)
        email = email.strip().lower()
        if email == identity.email:
            return identity
        if self.get_user_by_email(db, email):
            raise ConflictError("Email already registered.")
        try:
            identity.email = email
            db.commit()
            logger.info(f"Email updated for identity {user_id}")
            return identity
        except IntegrityError as e:
            db.rollback()
            raise ConflictError("Email already registered.") from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error updating email: {e}")
            raise UpstreamError("Failed to update email") from e

    def delete_user(self, db: Session, user_id: str) -> bool:
        """Delete an account; owned rows go with it"""
        identity = self.get_user_by_id(db, user_id)
        if not identity:
            return False
        try:
            db.delete(identity)
            db.commit()
            logger.info(f"Identity deleted: {user_id}")
            return True
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error deleting identity: {e}")
            raise UpstreamError("Failed to delete user") from e

    def _require(self, db: Session, user_id: str) -> Identity:
        identity = self.get_user_by_id(db, user_id)
        if not identity:
            raise NotFoundError("User not found")
        return identity

# Create singleton instance
identity_provider = IdentityProvider()
