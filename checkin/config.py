from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./sunday_school.db"
    AUTO_CREATE_SCHEMA: bool = True

    # Rate limiting (limits strings, e.g. "10/minute"); counters live in Redis
    # when it answers, in process memory otherwise
    REDIS_URL: str = "redis://localhost:6379/0"
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_DEFAULT: str = "100/minute"
    RATE_LIMIT_LOGIN: str = "10/minute"

    # Auth / session token
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    SESSION_EXPIRE_MINUTES: int = 12 * 60
    SESSION_COOKIE_NAME: str = "teacher_session"
    SESSION_COOKIE_SECURE: bool = False

    # CORS
    CORS_ORIGINS: list[str] = ["http://localhost:5173"]

    # App
    APP_NAME: str = "Sunday School Check-in API"
    API_PREFIX: str = ""
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Sign page reached from the room QR codes
    PUBLIC_BASE_URL: str = "http://localhost:3000"

    # Seed data applied at startup
    SEED_ROOMS: list[str] = ["Seedlings", "Saplings", "Oaks"]
    SEED_TEACHER_USERNAME: str = "teacher"
    SEED_TEACHER_PASSWORD: str | None = None


settings = Settings()
