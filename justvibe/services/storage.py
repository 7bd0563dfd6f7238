# ============================================================================
# FILE: justvibe/services/storage.py
# ============================================================================
import os
from justvibe.config import settings
import logging

logger = logging.getLogger(__name__)

PROFILE_PICTURES = "profile-pictures"

class LocalBlobStore:
    """Blob store on the local filesystem, served back under url_prefix"""

    def __init__(self, root: str, url_prefix: str):
        self.root = root
        self.url_prefix = url_prefix.rstrip("/")

    def save(self, container: str, filename: str, data: bytes) -> str:
        """Write the blob and return the URL it is served from"""
        directory = os.path.join(self.root, container)
        os.makedirs(directory, exist_ok=True)
        path = os.path.join(directory, filename)
        with open(path, "wb") as f:
            f.write(data)
        logger.info(f"Stored blob {container}/{filename} ({len(data)} bytes)")
        return f"{self.url_prefix}/{container}/{filename}"

blob_store = LocalBlobStore(settings.UPLOAD_DIR, settings.UPLOAD_URL_PREFIX)

def get_blob_store() -> LocalBlobStore:
    """FastAPI dependency for the blob store"""
    return blob_store
