"""Small helpers shared by the test modules."""

from justvibe.core.security import create_access_token
from justvibe.db.models import Identity


def token_for(identity: Identity, username: str = None) -> str:
    """Sign a token for an identity created directly in the store."""
    return create_access_token(
        {"userId": identity.id, "email": identity.email, "username": username}
    )
