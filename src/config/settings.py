import os
from pathlib import Path
from pydantic_settings import BaseSettings
from dotenv import load_dotenv


load_dotenv()
env_mode: str = os.getenv("ENVIRONMENT", "local")


class BaseAppSettings(BaseSettings):
    BASE_DIR: Path = Path(__file__).parent.parent
    # For test in SQL database
    PATH_TO_DB: str = str(BASE_DIR / "database" / "reviews.db")

    API_PREFIX: str = os.getenv("API_PREFIX", "/api/v1")
    CORS_ALLOWED_ORIGINS: list[str] = ["http://localhost:5173"]
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    AVERAGE_DISPLAY_PRECISION: int = int(os.getenv("AVERAGE_DISPLAY_PRECISION", 1))
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(
        os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60)
    )


class Settings(BaseAppSettings):
    POSTGRES_HOST: str = os.getenv("POSTGRES_HOST", "localhost")
    POSTGRES_USER: str = os.getenv("POSTGRES_USER", "test_user")
    POSTGRES_PASSWORD: str = os.getenv("POSTGRES_PASSWORD", "test_password")
    POSTGRES_DB_PORT: int = int(os.getenv("POSTGRES_DB_PORT", 5432))
    POSTGRES_DB: str = os.getenv("POSTGRES_DB", "test_db")

    SECRET_KEY_ACCESS: str = os.getenv("SECRET_KEY_ACCESS", os.urandom(32).hex())
    JWT_SIGNING_ALGORITHM: str = os.getenv("JWT_SIGNING_ALGORITHM", "HS256")


class TestingSettings(BaseAppSettings):
    PATH_TO_DB: str = ":memory:"
    SECRET_KEY_ACCESS: str = "SECRET_KEY_ACCESS"
    JWT_SIGNING_ALGORITHM: str = "HS256"


class LocalSettings(Settings):
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if env_mode == "local":
            self.POSTGRES_HOST = "localhost"
