# ============================================================================
# FILE: justvibe/core/logging.py
# ============================================================================
import logging
import sys
from justvibe.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

def setup_logging() -> None:
    """Configure root logging for the whole process"""
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stdout,
    )

    # SQL statements only when explicitly asked for
    sql_level = logging.INFO if settings.DATABASE_ECHO else logging.WARNING
    logging.getLogger("sqlalchemy.engine").setLevel(sql_level)
    logging.getLogger("multipart").setLevel(logging.WARNING)
