"""Application configuration loaded from environment variables."""

from functools import lru_cache
from pathlib import Path

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Allowed URL schemes for DATABASE_URL (module-level so validators can use it).
VALID_DATABASE_URL_PREFIXES = (
    "sqlite:///",
    "sqlite+pysqlite:///",
)

DATABASE_FILENAME = "music.db"


class Settings(BaseSettings):
    """Validated, immutable application settings from env and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )

    HOST: str = "0.0.0.0"
    PORT: int = 8080
    LOG_LEVEL: str = "INFO"

    # Labels echoed to clients by GET /api/tracks
    APP_ENV: str = "local"
    RELEASE: str = "v2.1"

    # Storage: SQLite file lives in DATA_DIR, uploaded media under UPLOADS_DIR
    DATA_DIR: Path = Path("data")
    UPLOADS_DIR: Path = Path("uploads")
    # Defaults to sqlite:///<DATA_DIR>/music.db when unset
    DATABASE_URL: str | None = None

    # Per-file cap for uploaded audio and cover images (100 MiB)
    MAX_UPLOAD_BYTES: int = 100 * 1024 * 1024

    # JWT authentication
    JWT_SECRET: SecretStr = SecretStr("fallback_secret_key")
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_HOURS: int = 24

    # Bootstrap admin, created on startup when missing
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: SecretStr = SecretStr("admin123")

    BCRYPT_ROUNDS: int = 10

    @field_validator("PORT")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if v < 1 or v > 65535:
            raise ValueError("PORT must be between 1 and 65535")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(
                "LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL"
            )
        return level

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        if not any(v.strip().startswith(prefix) for prefix in VALID_DATABASE_URL_PREFIXES):
            raise ValueError(
                "DATABASE_URL must be a SQLite URL (e.g. sqlite:///data/music.db)"
            )
        return v.strip()

    @field_validator("MAX_UPLOAD_BYTES")
    @classmethod
    def validate_max_upload_bytes(cls, v: int) -> int:
        if v < 1:
            raise ValueError("MAX_UPLOAD_BYTES must be a positive number of bytes")
        return v

    @field_validator("JWT_SECRET")
    @classmethod
    def validate_jwt_secret(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value() or not v.get_secret_value().strip():
            raise ValueError("JWT_SECRET must be set and non-empty")
        return v

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("JWT_ALGORITHM must be set and non-empty")
        return v.strip()

    @field_validator("JWT_EXPIRE_HOURS")
    @classmethod
    def validate_jwt_expire_hours(cls, v: int) -> int:
        if v < 1 or v > 168:
            raise ValueError("JWT_EXPIRE_HOURS must be between 1 and 168 (1 hour to 7 days)")
        return v

    @field_validator("ADMIN_USERNAME")
    @classmethod
    def validate_admin_username(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("ADMIN_USERNAME must be set and non-empty")
        return v.strip()

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        if v < 4 or v > 16:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 16")
        return v

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"sqlite:///{(self.DATA_DIR / DATABASE_FILENAME).as_posix()}"

    @property
    def music_dir(self) -> Path:
        return self.UPLOADS_DIR / "music"

    @property
    def covers_dir(self) -> Path:
        return self.UPLOADS_DIR / "covers"


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance (safe to call from dependencies)."""
    return Settings()


settings = get_settings()
