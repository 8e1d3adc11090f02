from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./tour_booking.db"
    
    # Security
    SECRET_KEY: str = "dev_secret_change_me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    ALLOW_ADMIN_REGISTRATION: bool = True
    
    # Application
    PROJECT_NAME: str = "Tour Booking Backend"
    API_PREFIX: str = "/api"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]
    
    # Pricing
    DEFAULT_PACKAGE_CURRENCY: str = "NU"
    FALLBACK_CURRENCY: str = "USD"
    MAX_TRAVELERS_PER_BOOKING: int = 500
    
    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
