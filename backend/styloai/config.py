"""
Configuration management for StyloAI backend
"""
import os
from typing import List
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


"""Application settings and configuration"""
class Settings:

    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Database Configuration
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./styloai.db")

    # Auth
    JWT_SECRET: str = os.getenv("JWT_SECRET", "change-me-in-production")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24 * 30)))
    RATE_LIMIT_ENABLED: bool = _env_bool("RATE_LIMIT_ENABLED", "true")

    # URLs (CORS, payment redirects)
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "")
    FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:8081")
    BACKEND_URL: str = os.getenv("BACKEND_URL", "http://localhost:5001")

    # Local image storage used when Cloudinary is unavailable
    UPLOAD_DIR: str = os.getenv("UPLOAD_DIR", "uploads")
    MAX_IMAGE_SIZE: int = int(os.getenv("MAX_IMAGE_SIZE", "10485760"))  # 10MB default

    # Cloudinary Configuration
    CLOUDINARY_CLOUD_NAME: str = os.getenv("CLOUDINARY_CLOUD_NAME", "")
    CLOUDINARY_API_KEY: str = os.getenv("CLOUDINARY_API_KEY", "")
    CLOUDINARY_API_SECRET: str = os.getenv("CLOUDINARY_API_SECRET", "")
    CLOUDINARY_FOLDER: str = os.getenv("CLOUDINARY_FOLDER", "styloai")
    USE_CLOUDINARY: bool = _env_bool("USE_CLOUDINARY", "true")

    # AWS Rekognition
    AWS_REGION: str = os.getenv("AWS_REGION", "us-east-1")
    AWS_ACCESS_KEY_ID: str = os.getenv("AWS_ACCESS_KEY_ID", "")
    AWS_SECRET_ACCESS_KEY: str = os.getenv("AWS_SECRET_ACCESS_KEY", "")

    # Google Calendar OAuth
    GOOGLE_CALENDAR_CLIENT_ID: str = os.getenv("GOOGLE_CALENDAR_CLIENT_ID", "")
    GOOGLE_CALENDAR_CLIENT_SECRET: str = os.getenv("GOOGLE_CALENDAR_CLIENT_SECRET", "")
    GOOGLE_CALENDAR_REDIRECT_URI: str = os.getenv("GOOGLE_CALENDAR_REDIRECT_URI", "")

    # PhonePe payments
    PHONEPE_MERCHANT_ID: str = os.getenv("PHONEPE_MERCHANT_ID", "")
    PHONEPE_SALT_KEY: str = os.getenv("PHONEPE_SALT_KEY", "")
    PHONEPE_SALT_INDEX: str = os.getenv("PHONEPE_SALT_INDEX", "1")
    PHONEPE_BASE_URL: str = os.getenv("PHONEPE_BASE_URL", "https://api.phonepe.com/apis/hermes")
    PREMIUM_DURATION_DAYS: int = int(os.getenv("PREMIUM_DURATION_DAYS", "30"))

    # Weather
    OPENWEATHERMAP_API_KEY: str = os.getenv("OPENWEATHERMAP_API_KEY", "")
    WEATHER_CACHE_TTL: int = int(os.getenv("WEATHER_CACHE_TTL", "600"))

    # Cache
    REDIS_URL: str = os.getenv("REDIS_URL", "")

    # Outbound HTTP timeout (seconds)
    HTTP_TIMEOUT: float = float(os.getenv("HTTP_TIMEOUT", "10"))

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() in ("development", "dev", "local")

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    """Check if Cloudinary is properly configured"""
    @property
    def cloudinary_configured(self) -> bool:
        return bool(
            self.CLOUDINARY_CLOUD_NAME
            and self.CLOUDINARY_API_KEY
            and self.CLOUDINARY_API_SECRET
        )

    @property
    def aws_configured(self) -> bool:
        return bool(self.AWS_ACCESS_KEY_ID and self.AWS_SECRET_ACCESS_KEY)

    @property
    def google_calendar_configured(self) -> bool:
        return bool(
            self.GOOGLE_CALENDAR_CLIENT_ID
            and self.GOOGLE_CALENDAR_CLIENT_SECRET
            and self.GOOGLE_CALENDAR_REDIRECT_URI
        )

    @property
    def phonepe_configured(self) -> bool:
        return bool(self.PHONEPE_MERCHANT_ID and self.PHONEPE_SALT_KEY)

    @property
    def weather_configured(self) -> bool:
        return bool(self.OPENWEATHERMAP_API_KEY)


settings = Settings()
