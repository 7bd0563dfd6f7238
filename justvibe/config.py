# ============================================================================
# FILE: justvibe/config.py
# ============================================================================
from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    """Application configuration using Pydantic BaseSettings"""
    
    # App settings
    APP_NAME: str = "JustVibe Backend"
    ENVIRONMENT: str = "development"  # development | production | test
    LOG_LEVEL: str = "INFO"
    
    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8080
    
    # Database (hosted Postgres in production)
    DATABASE_URL: str = "sqlite:///./justvibe.db"
    DATABASE_ECHO: bool = False
    
    # Security
    SECRET_KEY: str = "your-secret-key-change-this-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    BCRYPT_ROUNDS: int = 12
    
    # CORS
    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:30082",
        "https://justvibe-eight.vercel.app",
    ]
    CORS_ORIGIN: str = ""
    
    # Uploads
    UPLOAD_DIR: str = "uploads"
    UPLOAD_URL_PREFIX: str = "/uploads"
    MAX_PROFILE_PICTURE_BYTES: int = 5 * 1024 * 1024
    
    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @property
    def allowed_origins(self) -> List[str]:
        origins = list(self.CORS_ORIGINS)
        if self.CORS_ORIGIN:
            origins.append(self.CORS_ORIGIN)
        return origins

settings = Settings()
